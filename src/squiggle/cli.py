"""
Squiggle CLI

Command-line interface for the Squiggle on-chain generative NFT.

Commands:
  initialize   - One-time contract setup (mint price)
  mint         - Mint a token
  info         - Show contract name and symbol
  balance      - Token count for an address
  owner        - Owner of a token
  token-uri    - Metadata URI of a token (optionally decoded)
  transfer     - Transfer a token
  approve      - Approve an address for one token
  approve-all  - Grant / revoke an operator for all tokens
  whoami       - Show current wallet address

Exit status is 0 on success and 1 on any failure.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from .config import GatewayConfig
from .errors import SquiggleError
from .keys import get_address
from .log import configure_logging


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="squiggle")
@click.option(
    "--rpc-url",
    envvar="SQUIGGLE_RPC_URL",
    default=None,
    help="JSON-RPC endpoint (env: SQUIGGLE_RPC_URL)",
)
@click.option(
    "--contract",
    "contract_address",
    envvar="SQUIGGLE_CONTRACT_ADDRESS",
    default=None,
    help="Contract address (env: SQUIGGLE_CONTRACT_ADDRESS)",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Load settings from this .env file (default: ~/.squiggle/.env)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log RPC and transaction details")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    contract_address: Optional[str],
    env_file: Optional[Path],
    verbose: bool,
) -> None:
    """Squiggle: on-chain generative NFT client."""
    configure_logging(verbose)

    try:
        config = GatewayConfig.from_env(env_file)
    except SquiggleError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    ctx.obj = config.with_overrides(rpc_url=rpc_url, contract_address=contract_address)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Commands ============

from .commands.initialize import initialize
from .commands.mint import mint
from .commands.query import balance, info, owner, token_uri
from .commands.manage import approve, approve_all, transfer

cli.add_command(initialize)
cli.add_command(mint)
cli.add_command(info)
cli.add_command(balance)
cli.add_command(owner)
cli.add_command(token_uri)
cli.add_command(transfer)
cli.add_command(approve)
cli.add_command(approve_all)


@cli.command()
@click.pass_obj
def whoami(config: GatewayConfig) -> None:
    """Show current wallet identity."""
    if not config.private_key:
        click.echo("No wallet found.")
        click.echo("Set PRIVATE_KEY in the environment or ~/.squiggle/.env.")
        sys.exit(1)
    try:
        address = get_address(config.private_key)
    except ValueError as exc:
        click.secho(f"ERROR: Invalid PRIVATE_KEY: {exc}", fg="red")
        sys.exit(1)
    click.echo(f"Address: {address}")


# ============ Entry Points ============


def main() -> None:
    """Squiggle CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
