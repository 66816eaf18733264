from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .address import ZERO_ADDRESS, is_zero_address
from .chain.abi import squiggle_abi

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
_ZERO_TOPIC = "0x" + "0" * 64


@dataclass(frozen=True)
class ContractReference:
    """The one deployed contract a gateway talks to: address plus ABI."""

    address: str = ZERO_ADDRESS
    abi: tuple = field(default_factory=squiggle_abi, repr=False)

    @property
    def is_configured(self) -> bool:
        return not is_zero_address(self.address)


@dataclass(frozen=True)
class TransactionRequest:
    to: str
    function_name: str
    args: tuple = ()
    value: int = 0


@dataclass(frozen=True)
class TransactionReceipt:
    tx_hash: str
    block_number: int
    status: str
    gas_used: int = 0
    sender: Optional[str] = None
    to: Optional[str] = None
    logs: tuple = field(default=(), repr=False)

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    def minted_token_id(self) -> Optional[int]:
        """Parse the minted token ID from the receipt's Transfer events.

        Minting emits Transfer(from, to, tokenId) with ``from`` = zero address.
        The topic layout is:
            topics[0] = keccak256("Transfer(address,address,uint256)")
            topics[1] = from
            topics[2] = to
            topics[3] = tokenId

        Returns the tokenId as int, or None if not found.
        """
        for log in self.logs:
            topics = [t.lower() for t in log.get("topics", [])]
            if len(topics) >= 4 and topics[0] == TRANSFER_TOPIC and topics[1] == _ZERO_TOPIC:
                return int(topics[3], 16)
        return None

    @classmethod
    def from_rpc(cls, receipt: dict[str, Any]) -> "TransactionReceipt":
        """Build from a raw ``eth_getTransactionReceipt`` result."""
        status = int(receipt.get("status", "0x0"), 16)
        return cls(
            tx_hash=receipt["transactionHash"],
            block_number=int(receipt.get("blockNumber", "0x0"), 16),
            status="success" if status == 1 else "reverted",
            gas_used=int(receipt.get("gasUsed", "0x0"), 16),
            sender=receipt.get("from"),
            to=receipt.get("to"),
            logs=tuple(receipt.get("logs") or ()),
        )


@dataclass(frozen=True)
class ContractInfo:
    name: str
    symbol: str

    def as_dict(self) -> dict[str, str]:
        return {"name": self.name, "symbol": self.symbol}
