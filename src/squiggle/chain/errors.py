"""
Typed failures raised by the chain client.

Callers match on ``ChainError.kind`` (and, for reverts, on the decoded
custom-error name) instead of inspecting message text.
"""

from __future__ import annotations

import enum
from typing import Any, Optional


class ChainErrorKind(str, enum.Enum):
    TRANSPORT = "transport"
    RPC = "rpc"
    REVERT = "revert"
    TIMEOUT = "timeout"


# JSON-RPC code used by geth/anvil/nitro for "execution reverted"
EXECUTION_REVERTED = 3


class ChainError(RuntimeError):
    def __init__(
        self,
        kind: ChainErrorKind,
        message: str,
        code: Optional[int] = None,
        data: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.data = data

    @classmethod
    def from_rpc_error(cls, error: dict[str, Any]) -> "ChainError":
        """
        Build a ChainError from a JSON-RPC ``error`` object.

        Revert payloads come back as hex in ``error.data``; some nodes nest
        them one level deeper (``error.data.data``).
        """
        code = error.get("code")
        message = str(error.get("message", "unknown RPC error"))
        data = error.get("data")
        if isinstance(data, dict):
            data = data.get("data")

        if isinstance(data, str) and data.startswith("0x") and len(data) >= 10:
            return cls(ChainErrorKind.REVERT, message, code=code, data=data)
        if code == EXECUTION_REVERTED:
            return cls(ChainErrorKind.REVERT, message, code=code, data=None)
        return cls(ChainErrorKind.RPC, message, code=code, data=None)

    def __repr__(self) -> str:
        return f"ChainError(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"
