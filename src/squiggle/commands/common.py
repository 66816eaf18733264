"""Helpers shared by the CLI commands."""

from __future__ import annotations

import sys
from typing import NoReturn, Optional

import click

from ..config import GatewayConfig
from ..errors import SquiggleError
from ..gateway import SquiggleGateway
from ..models import TransactionReceipt

RULE = "=" * 50


def fail(message: str, hint: Optional[str] = None) -> NoReturn:
    click.secho(f"ERROR: {message}", fg="red")
    if hint:
        click.echo(hint)
    sys.exit(1)


def open_gateway(config: GatewayConfig, require_wallet: bool = False) -> SquiggleGateway:
    """Check startup preconditions, then build the gateway; exits 1 on failure."""
    try:
        config.require_configured()
    except SquiggleError as exc:
        fail(str(exc), "Set SQUIGGLE_CONTRACT_ADDRESS or pass --contract.")

    if require_wallet and not config.private_key:
        fail("PRIVATE_KEY not set.", "Export PRIVATE_KEY or add it to ~/.squiggle/.env.")

    return SquiggleGateway.from_config(config)


def echo_receipt(config: GatewayConfig, receipt: TransactionReceipt) -> None:
    click.echo(click.style("  TX:    ", dim=True) + receipt.tx_hash)
    click.echo(click.style("  Block: ", dim=True) + str(receipt.block_number))
    click.echo(click.style("  Link:  ", dim=True) + config.explorer_tx_url(receipt.tx_hash))
