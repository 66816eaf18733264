"""
Transaction Builder - Build, sign, and send Ethereum transactions.

Uses eth-account for signing and the httpx-based JSON-RPC client for
sending.  All gas is paid by the signing EOA.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from eth_account.signers.local import LocalAccount

from ..address import to_checksum_address
from .rpc import RpcClient

logger = structlog.get_logger(__name__)

# Headroom added on top of eth_estimateGas
GAS_BUFFER_PERCENT = 20


class Wallet:
    """
    Signing client for one identity.

    Nonce ordering is left to the node (``pending`` transaction count);
    nothing here serialises concurrent submissions.

    Args:
        account: eth-account LocalAccount that signs transactions
        rpc: JSON-RPC client used for gas, nonce, submission and receipts
        chain_id: Chain ID embedded in signed transactions
    """

    def __init__(self, account: LocalAccount, rpc: RpcClient, chain_id: int) -> None:
        self.account = account
        self.rpc = rpc
        self.chain_id = chain_id

    @property
    def address(self) -> str:
        return self.account.address

    def build_tx(
        self,
        to: str,
        data: str,
        value: int = 0,
        gas_limit: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Build an unsigned legacy transaction.

        Without ``gas_limit`` the gas is estimated, which also simulates the
        call; a would-be revert raises ``ChainError`` before anything is signed.
        """
        tx: dict[str, Any] = {
            "to": to_checksum_address(to),
            "data": data,
            "value": value,
        }

        if gas_limit is None:
            estimate = self.rpc.estimate_gas({**tx, "from": self.address})
            gas_limit = estimate + estimate * GAS_BUFFER_PERCENT // 100

        tx.update(
            {
                "nonce": self.rpc.get_nonce(self.address),
                "gas": gas_limit,
                "gasPrice": self.rpc.get_gas_price(),
                "chainId": self.chain_id,
            }
        )
        return tx

    def sign_and_send(self, tx: dict[str, Any]) -> str:
        """Sign a transaction, send it, and return the transaction hash."""
        signed = self.account.sign_transaction(tx)
        raw_tx = "0x" + bytes(signed.raw_transaction).hex()
        tx_hash = self.rpc.send_raw_transaction(raw_tx)
        logger.info("tx_submitted", tx_hash=tx_hash, nonce=tx["nonce"], to=tx["to"])
        return tx_hash

    def send_transaction(
        self,
        to: str,
        data: str,
        value: int = 0,
        gas_limit: Optional[int] = None,
    ) -> str:
        """Build, sign, and send.  Returns the transaction hash."""
        tx = self.build_tx(to, data, value=value, gas_limit=gas_limit)
        return self.sign_and_send(tx)

    def wait_for_receipt(self, tx_hash: str) -> dict:
        receipt = self.rpc.wait_for_receipt(tx_hash)
        logger.info("tx_confirmed", tx_hash=tx_hash, block=receipt.get("blockNumber"))
        return receipt
