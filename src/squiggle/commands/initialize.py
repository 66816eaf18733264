"""
Initialize - One-time contract setup.

Flow:
1. Check the contract address is configured and a wallet is available
2. Call initialize(mintPrice) and wait for confirmation
3. Read name/symbol back to verify

If the contract was already initialized, the current info is shown and
the command still exits 1.
"""

from __future__ import annotations

import sys

import click

from ..config import GatewayConfig
from ..errors import AlreadyInitializedError, SquiggleError
from .common import RULE, echo_receipt, fail, open_gateway


@click.command()
@click.option(
    "--price",
    default="0.001",
    show_default=True,
    help="Mint price in ETH (decimal string)",
)
@click.pass_obj
def initialize(config: GatewayConfig, price: str) -> None:
    """Initialize the contract with a mint price."""
    click.echo(RULE)
    click.echo("Squiggle NFT Initialization")
    click.echo(RULE)

    gateway = open_gateway(config, require_wallet=True)

    click.echo(f"\n  Contract: {config.contract_address}")
    click.echo(f"  Wallet:   {gateway.wallet.address}")
    click.echo(f"\nInitializing with mint price: {price} ETH")

    try:
        receipt = gateway.initialize(price)
    except AlreadyInitializedError as exc:
        click.secho(f"\nERROR: {exc}", fg="red")
        click.echo("\nContract is already initialized. Reading current info...")
        try:
            info = gateway.read_contract_info()
            click.echo(f"  Name:   {info.name}")
            click.echo(f"  Symbol: {info.symbol}")
        except SquiggleError as read_exc:
            click.secho(f"  Could not read contract info: {read_exc}", fg="yellow")
        sys.exit(1)
    except SquiggleError as exc:
        fail(f"Initialization failed: {exc}")

    click.secho("\nTransaction confirmed!", fg="green")
    echo_receipt(config, receipt)

    click.echo("\nVerifying initialization...")
    try:
        info = gateway.read_contract_info()
    except SquiggleError as exc:
        fail(f"Verification read failed: {exc}")

    click.echo("")
    click.echo(RULE)
    click.secho("Squiggle NFT contract successfully initialized!", fg="green", bold=True)
    click.echo(f"  Name:       {info.name}")
    click.echo(f"  Symbol:     {info.symbol}")
    click.echo(f"  Mint Price: {price} ETH")
    click.echo(RULE)
    click.echo(f"\nView on explorer: {config.explorer_address_url(config.contract_address)}")
