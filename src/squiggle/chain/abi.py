"""
ABI Loader and codec - Loads the Squiggle contract ABI and encodes calls.

Single source of truth: squiggle/abis/*.json (shipped as package data).
Calldata and return values are encoded with eth-abi; selectors use
Keccak-256 from eth-hash.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from eth_abi import decode, encode
from eth_hash.auto import keccak

from ..address import to_checksum_address

ABI_DIR = Path(__file__).resolve().parent.parent / "abis"

# Built-in Solidity revert payloads
_ERROR_STRING_SELECTOR = bytes.fromhex("08c379a0")  # Error(string)
_PANIC_SELECTOR = bytes.fromhex("4e487b71")  # Panic(uint256)


@dataclass(frozen=True)
class RevertReason:
    """Decoded revert payload: custom-error name plus its arguments."""

    name: str
    args: tuple = ()


@lru_cache(maxsize=16)
def load_abi(contract_name: str) -> tuple[dict[str, Any], ...]:
    """
    Load ABI for a contract from the packaged artifacts.

    Args:
        contract_name: Contract name (e.g., "Squiggle")

    Returns:
        ABI as a tuple of dicts

    Raises:
        FileNotFoundError: If ABI file not found
    """
    abi_path = ABI_DIR / f"{contract_name}.json"
    if not abi_path.exists():
        raise FileNotFoundError(f"ABI not found: {abi_path}")

    with abi_path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    return tuple(artifact["abi"])


def squiggle_abi() -> tuple[dict[str, Any], ...]:
    """Load Squiggle ABI."""
    return load_abi("Squiggle")


def _find_entry(abi, entry_type: str, name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == entry_type and entry.get("name") == name:
            return entry
    raise ValueError(f"{entry_type.capitalize()} {name} not found in ABI")


def _signature(entry: dict[str, Any]) -> str:
    input_types = [inp["type"] for inp in entry.get("inputs", [])]
    return f"{entry['name']}({','.join(input_types)})"


def selector(signature: str) -> bytes:
    """First 4 bytes of the Keccak-256 of a canonical signature."""
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(signature.encode("utf-8"))[:4]


def encode_call(abi, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = _find_entry(abi, "function", function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} expects {len(input_types)} args, got {len(args)}"
        )

    encoded_args = encode(input_types, list(args)) if args else b""
    return "0x" + selector(_signature(func)).hex() + encoded_args.hex()


def _decode(types: list[str], raw: bytes) -> tuple:
    # eth-abi versions differ on address case; always hand back EIP-55
    values = decode(types, raw)
    return tuple(
        to_checksum_address(value) if abi_type == "address" else value
        for abi_type, value in zip(types, values)
    )


def _hex_bytes(data: str) -> bytes:
    return bytes.fromhex(data[2:] if data.startswith("0x") else data)


def decode_result(abi, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns a single value for single-output functions, a tuple otherwise,
    and None for functions without outputs.
    """
    func = _find_entry(abi, "function", function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    decoded = _decode(output_types, _hex_bytes(data))

    if len(decoded) == 1:
        return decoded[0]
    return decoded


def decode_call(abi, data: str) -> tuple[str, tuple]:
    """Decode calldata back into ``(function_name, args)``."""
    raw = _hex_bytes(data)
    for entry in abi:
        if entry.get("type") != "function":
            continue
        if selector(_signature(entry)) == raw[:4]:
            input_types = [inp["type"] for inp in entry.get("inputs", [])]
            return entry["name"], _decode(input_types, raw[4:])
    raise ValueError(f"Unknown selector 0x{raw[:4].hex()}")


def encode_error(abi, error_name: str, args: Optional[list] = None) -> str:
    """ABI-encode a custom error as revert data."""
    entry = _find_entry(abi, "error", error_name)
    input_types = [inp["type"] for inp in entry.get("inputs", [])]
    encoded_args = encode(input_types, list(args)) if args else b""
    return "0x" + selector(_signature(entry)).hex() + encoded_args.hex()


def decode_revert(abi, data: Optional[str]) -> Optional[RevertReason]:
    """
    Decode revert data into a RevertReason.

    Recognises the contract's custom errors, ``Error(string)`` and
    ``Panic(uint256)``.  Returns None when the payload is empty or unknown.
    """
    if not data or len(data) < 10:
        return None

    raw = _hex_bytes(data)
    head, body = raw[:4], raw[4:]

    if head == _ERROR_STRING_SELECTOR:
        return RevertReason("Error", _decode(["string"], body))
    if head == _PANIC_SELECTOR:
        return RevertReason("Panic", _decode(["uint256"], body))

    for entry in abi:
        if entry.get("type") != "error":
            continue
        if selector(_signature(entry)) == head:
            input_types = [inp["type"] for inp in entry.get("inputs", [])]
            return RevertReason(entry["name"], _decode(input_types, body))

    return None
