"""Ethereum address helpers (EIP-55)."""

from __future__ import annotations

import re

from eth_hash.auto import keccak

from .errors import InvalidInputError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.
    """
    addr = address.lower().replace("0x", "")
    addr_hash = keccak(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def validate_address(address: str, field: str = "address") -> str:
    """
    Validate a 20-byte hex address and return it checksummed.

    All-lowercase and all-uppercase forms are accepted as-is; mixed-case
    input must carry a valid EIP-55 checksum.

    Raises:
        InvalidInputError: If the address is malformed
    """
    if not isinstance(address, str) or not _ADDRESS_RE.match(address):
        raise InvalidInputError(f"Invalid {field}: {address!r}")

    body = address[2:]
    checksummed = to_checksum_address(address)
    if body != body.lower() and body != body.upper() and address != checksummed:
        raise InvalidInputError(f"Invalid {field} checksum: {address}")

    return checksummed


def is_zero_address(address: str) -> bool:
    return address.lower() == ZERO_ADDRESS
