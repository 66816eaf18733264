"""
Query - Read-only views of the contract.

Commands:
- info:      name and symbol
- balance:   token count for an address
- owner:     owner of a token
- token-uri: metadata URI, optionally decoded to JSON / SVG
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from ..config import GatewayConfig
from ..errors import NotFoundError, SquiggleError
from ..gateway import decode_image, decode_token_uri
from .common import fail, open_gateway


@click.command()
@click.pass_obj
def info(config: GatewayConfig) -> None:
    """Show contract name and symbol."""
    gateway = open_gateway(config)
    try:
        contract_info = gateway.read_contract_info()
    except SquiggleError as exc:
        fail(f"Failed to read contract info: {exc}")

    click.echo(click.style("  Contract: ", dim=True) + config.contract_address)
    click.echo(click.style("  Name:     ", dim=True) + contract_info.name)
    click.echo(click.style("  Symbol:   ", dim=True) + contract_info.symbol)


@click.command()
@click.argument("address")
@click.pass_obj
def balance(config: GatewayConfig, address: str) -> None:
    """Show how many tokens ADDRESS owns."""
    gateway = open_gateway(config)
    try:
        count = gateway.read_balance(address)
    except SquiggleError as exc:
        fail(str(exc))
    click.echo(f"{address}: {count}")


@click.command()
@click.argument("token_id", type=click.IntRange(min=0))
@click.pass_obj
def owner(config: GatewayConfig, token_id: int) -> None:
    """Show the owner of TOKEN_ID."""
    gateway = open_gateway(config)
    try:
        holder = gateway.read_owner_of(token_id)
    except NotFoundError:
        fail(f"Token {token_id} does not exist")
    except SquiggleError as exc:
        fail(str(exc))
    click.echo(f"Token #{token_id} owner: {holder}")


@click.command("token-uri")
@click.argument("token_id", type=click.IntRange(min=0))
@click.option("--decode", is_flag=True, help="Decode the base64 JSON metadata")
@click.option(
    "--svg-out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the decoded SVG image to this file",
)
@click.pass_obj
def token_uri(config: GatewayConfig, token_id: int, decode: bool, svg_out: Optional[Path]) -> None:
    """Show the metadata URI of TOKEN_ID."""
    gateway = open_gateway(config)
    try:
        uri = gateway.read_token_uri(token_id)
    except NotFoundError:
        fail(f"Token {token_id} does not exist")
    except SquiggleError as exc:
        fail(str(exc))

    if not decode and svg_out is None:
        click.echo(uri)
        return

    try:
        metadata = decode_token_uri(uri)
        if svg_out is not None:
            svg_out.write_text(decode_image(metadata), encoding="utf-8")
    except SquiggleError as exc:
        fail(str(exc))
    except OSError as exc:
        fail(f"Could not write SVG: {exc}")

    if decode:
        shown = {k: v for k, v in metadata.items() if k != "image"}
        click.echo(json.dumps(shown, indent=2))
    if svg_out is not None:
        click.echo(f"SVG written to {svg_out}")
