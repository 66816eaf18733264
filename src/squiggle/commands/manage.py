"""
Manage - Ownership and approval transactions.

Each command signs with the configured wallet and waits for the receipt.
"""

from __future__ import annotations

from typing import Optional

import click

from ..config import GatewayConfig
from ..errors import NotFoundError, SquiggleError, UnauthorizedError
from .common import echo_receipt, fail, open_gateway

_UNAUTHORIZED_HINT = "The wallet is neither the owner nor an approved operator of this token."


@click.command()
@click.option("--from", "sender", default=None, help="Current owner (default: your wallet)")
@click.option("--to", "recipient", required=True, help="Recipient address (0x...)")
@click.option("--token-id", required=True, type=click.IntRange(min=0), help="Token ID")
@click.pass_obj
def transfer(config: GatewayConfig, sender: Optional[str], recipient: str, token_id: int) -> None:
    """Transfer a token to another address."""
    gateway = open_gateway(config, require_wallet=True)
    sender = sender or gateway.wallet.address

    click.echo(f"Transferring #{token_id}: {sender} -> {recipient}")
    try:
        receipt = gateway.transfer(sender, recipient, token_id)
    except UnauthorizedError as exc:
        fail(str(exc), _UNAUTHORIZED_HINT)
    except NotFoundError:
        fail(f"Token {token_id} does not exist")
    except SquiggleError as exc:
        fail(f"Transfer failed: {exc}")

    click.secho("Transfer confirmed!", fg="green")
    echo_receipt(config, receipt)


@click.command()
@click.option("--to", "spender", required=True, help="Address to approve (0x...)")
@click.option("--token-id", required=True, type=click.IntRange(min=0), help="Token ID")
@click.pass_obj
def approve(config: GatewayConfig, spender: str, token_id: int) -> None:
    """Approve an address to transfer one token."""
    gateway = open_gateway(config, require_wallet=True)
    try:
        receipt = gateway.approve(spender, token_id)
    except UnauthorizedError as exc:
        fail(str(exc), _UNAUTHORIZED_HINT)
    except NotFoundError:
        fail(f"Token {token_id} does not exist")
    except SquiggleError as exc:
        fail(f"Approve failed: {exc}")

    click.secho(f"Approved {spender} for #{token_id}", fg="green")
    echo_receipt(config, receipt)


@click.command("approve-all")
@click.option("--operator", required=True, help="Operator address (0x...)")
@click.option("--revoke", is_flag=True, help="Revoke instead of grant")
@click.pass_obj
def approve_all(config: GatewayConfig, operator: str, revoke: bool) -> None:
    """Grant or revoke an operator for all of your tokens."""
    gateway = open_gateway(config, require_wallet=True)
    try:
        receipt = gateway.set_approval_for_all(operator, not revoke)
    except UnauthorizedError as exc:
        fail(str(exc))
    except SquiggleError as exc:
        fail(f"setApprovalForAll failed: {exc}")

    action = "Revoked" if revoke else "Approved"
    click.secho(f"{action} operator {operator}", fg="green")
    echo_receipt(config, receipt)
