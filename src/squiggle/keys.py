"""
ECDSA / secp256k1 signing identity for the Squiggle client.

The key that signs every write transaction is PRIVATE_KEY (hex format),
read by ``GatewayConfig.from_env`` from the environment or from
~/.squiggle/.env.  Key storage and rotation are left to the operator.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

# Default config directory
SQUIGGLE_DIR = Path.home() / ".squiggle"
SQUIGGLE_ENV = SQUIGGLE_DIR / ".env"


def load_env(env_path: Optional[Path] = None) -> None:
    """Load ``.env`` into the process environment if the file exists."""
    env_path = env_path or SQUIGGLE_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def get_account(private_key: str) -> LocalAccount:
    """Get an eth-account LocalAccount from a hex private key (0x optional)."""
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    return Account.from_key(private_key)


def get_address(private_key: str) -> str:
    """Checksummed address for a private key."""
    return get_account(private_key).address
