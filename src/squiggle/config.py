"""
Gateway configuration.

Values come from the process environment, optionally seeded from
~/.squiggle/.env via python-dotenv.  Nothing here is module-level mutable
state: callers build one ``GatewayConfig`` and hand it to the gateway.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .address import ZERO_ADDRESS, is_zero_address, validate_address
from .chain.rpc import DEFAULT_CHAIN_ID, DEFAULT_RPC_URL
from .errors import InvalidInputError, NotConfiguredError
from .keys import SQUIGGLE_ENV, load_env

DEFAULT_EXPLORER_URL = "https://sepolia.arbiscan.io"


@dataclass(frozen=True)
class GatewayConfig:
    contract_address: str = ZERO_ADDRESS
    rpc_url: str = DEFAULT_RPC_URL
    chain_id: int = DEFAULT_CHAIN_ID
    explorer_url: str = DEFAULT_EXPLORER_URL
    receipt_timeout: float = 120
    poll_interval: float = 2.0
    private_key: Optional[str] = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "GatewayConfig":
        """
        Build a config from environment variables.

        Reads SQUIGGLE_CONTRACT_ADDRESS, SQUIGGLE_RPC_URL, CHAIN_ID,
        SQUIGGLE_EXPLORER_URL, SQUIGGLE_RECEIPT_TIMEOUT and PRIVATE_KEY.
        Values already exported win over the .env file.
        """
        load_env(env_path or SQUIGGLE_ENV)
        env = os.environ

        try:
            chain_id = int(env.get("CHAIN_ID", str(DEFAULT_CHAIN_ID)))
            receipt_timeout = float(env.get("SQUIGGLE_RECEIPT_TIMEOUT", "120"))
        except ValueError as exc:
            raise InvalidInputError(f"Invalid numeric setting: {exc}") from exc

        return cls(
            contract_address=env.get("SQUIGGLE_CONTRACT_ADDRESS", ZERO_ADDRESS),
            rpc_url=env.get("SQUIGGLE_RPC_URL", DEFAULT_RPC_URL),
            chain_id=chain_id,
            explorer_url=env.get("SQUIGGLE_EXPLORER_URL", DEFAULT_EXPLORER_URL),
            receipt_timeout=receipt_timeout,
            private_key=env.get("PRIVATE_KEY") or None,
        )

    def with_overrides(self, **changes) -> "GatewayConfig":
        """Return a copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @property
    def is_configured(self) -> bool:
        return not is_zero_address(self.contract_address)

    def require_configured(self) -> "GatewayConfig":
        """
        Startup precondition: the contract address must be set and well-formed.

        Raises:
            NotConfiguredError: If the address is still the all-zero sentinel
            InvalidInputError: If the address is malformed
        """
        if not self.is_configured:
            raise NotConfiguredError(
                "Contract address not configured. Set SQUIGGLE_CONTRACT_ADDRESS "
                "to your deployed contract address."
            )
        validate_address(self.contract_address, "contract address")
        return self

    def explorer_address_url(self, address: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/address/{address}"

    def explorer_tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"
