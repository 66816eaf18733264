"""
JSON-RPC Client for Arbitrum Sepolia.

Lightweight alternative to web3.py: uses httpx for HTTP.
Supports read-only contract calls, gas estimation, raw-transaction
submission, and transaction receipt polling.
"""

from __future__ import annotations

import itertools
import time
from typing import Any, Optional

import httpx
import structlog

from .errors import ChainError, ChainErrorKind

logger = structlog.get_logger(__name__)

# Default RPC endpoint (Arbitrum Sepolia)
DEFAULT_RPC_URL = "https://sepolia-rollup.arbitrum.io/rpc"
DEFAULT_CHAIN_ID = 421614  # Arbitrum Sepolia


class RpcClient:
    """
    Minimal Ethereum JSON-RPC client.

    One ``httpx.Client`` is shared across calls; it is safe to use from
    several threads at once.

    Args:
        rpc_url: RPC endpoint URL
        timeout: Per-request HTTP timeout in seconds
        receipt_timeout: Maximum time ``wait_for_receipt`` polls, in seconds
        poll_interval: Receipt polling interval in seconds
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
    """

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: float = 30,
        receipt_timeout: float = 120,
        poll_interval: float = 2.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self._ids = itertools.count(1)
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Returns:
            Result field from the RPC response

        Raises:
            ChainError: TRANSPORT on HTTP failure, REVERT when the node
                reports revert data, RPC for any other error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }

        try:
            response = self._client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ChainError(
                ChainErrorKind.TRANSPORT, f"{method} failed: {exc}"
            ) from exc

        if "error" in data:
            error = ChainError.from_rpc_error(data["error"])
            logger.debug("rpc_error", method=method, kind=error.kind.value, code=error.code)
            raise error

        return data.get("result")

    def call(self, to: str, data: str) -> str:
        """Execute eth_call against the latest block and return raw hex."""
        return self.request("eth_call", [{"to": to, "data": data}, "latest"])

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        """
        Estimate gas for a transaction.

        The node simulates the call, so a would-be revert surfaces here as
        ``ChainError(REVERT)`` carrying the revert data.
        """
        params: dict[str, Any] = {"from": tx["from"], "to": tx["to"], "data": tx["data"]}
        if tx.get("value"):
            params["value"] = hex(tx["value"])
        return int(self.request("eth_estimateGas", [params]), 16)

    def get_nonce(self, address: str) -> int:
        """Get the pending transaction count for an address."""
        return int(self.request("eth_getTransactionCount", [address, "pending"]), 16)

    def get_gas_price(self) -> int:
        """Get current gas price in wei."""
        return int(self.request("eth_gasPrice", []), 16)

    def get_chain_id(self) -> int:
        return int(self.request("eth_chainId", []), 16)

    def send_raw_transaction(self, raw_tx: str) -> str:
        """Send a signed raw transaction and return its hash."""
        return self.request("eth_sendRawTransaction", [raw_tx])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.request("eth_getTransactionReceipt", [tx_hash])

    def wait_for_receipt(self, tx_hash: str) -> dict:
        """
        Poll for a transaction receipt.

        Raises:
            ChainError: TIMEOUT if the receipt does not appear within
                ``receipt_timeout`` seconds
        """
        start = time.monotonic()
        while True:
            receipt = self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.monotonic() - start >= self.receipt_timeout:
                break
            time.sleep(self.poll_interval)

        raise ChainError(
            ChainErrorKind.TIMEOUT,
            f"Transaction {tx_hash} not confirmed within {self.receipt_timeout}s",
        )
