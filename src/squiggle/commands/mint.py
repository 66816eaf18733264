"""
Mint - Pay the mint price and receive a freshly generated Squiggle.

The token's SVG art lives on-chain; ``squiggle token-uri ID --decode``
prints it once the mint is confirmed.
"""

from __future__ import annotations

import click

from ..config import GatewayConfig
from ..errors import InsufficientPaymentError, SquiggleError
from .common import RULE, echo_receipt, fail, open_gateway


@click.command()
@click.option(
    "--value",
    default="0.001",
    show_default=True,
    help="Payment in ETH (decimal string)",
)
@click.pass_obj
def mint(config: GatewayConfig, value: str) -> None:
    """Mint a Squiggle NFT."""
    click.echo(RULE)
    click.echo("Squiggle NFT Minting")
    click.echo(RULE)

    gateway = open_gateway(config, require_wallet=True)

    click.echo(f"\n  Contract: {config.contract_address}")
    click.echo(f"  Wallet:   {gateway.wallet.address}")

    try:
        info = gateway.read_contract_info()
        click.echo(f"  Name:     {info.name}")
        click.echo(f"  Symbol:   {info.symbol}")

        click.echo(f"\nMinting Squiggle NFT for {value} ETH...")
        receipt = gateway.mint(value)
    except InsufficientPaymentError as exc:
        fail(str(exc), "Make sure you're sending enough ETH to cover the mint price.")
    except SquiggleError as exc:
        fail(f"Mint failed: {exc}")

    click.secho("\nNFT minted!", fg="green", bold=True)
    token_id = receipt.minted_token_id()
    if token_id is not None:
        click.echo(click.style("  Token: ", dim=True) + f"#{token_id}")
    echo_receipt(config, receipt)

    click.echo(f"\nView on explorer: {config.explorer_address_url(config.contract_address)}")
    click.echo("To view the SVG art: squiggle token-uri <TOKEN_ID> --decode")
