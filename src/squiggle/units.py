"""Conversion between ether (decimal strings) and wei (integers)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from .errors import InvalidInputError

ETHER_DECIMALS = 18


def to_wei(amount: str, decimals: int = ETHER_DECIMALS) -> int:
    """
    Parse a decimal amount in the major unit into minor units.

    Digits past ``decimals`` are rounded half-up to the nearest minor unit.

    Raises:
        InvalidInputError: If the amount is not a finite, non-negative decimal
    """
    if not isinstance(amount, str) or not amount.strip():
        raise InvalidInputError(f"Invalid amount: {amount!r}")

    try:
        value = Decimal(amount.strip())
    except InvalidOperation as exc:
        raise InvalidInputError(f"Invalid amount: {amount!r}") from exc

    if not value.is_finite() or value < 0:
        raise InvalidInputError(f"Amount must be a non-negative number: {amount!r}")

    # uint256 amounts need up to 78 significant digits
    with localcontext() as ctx:
        ctx.prec = 100
        try:
            wei = int(value.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_HALF_UP))
        except InvalidOperation as exc:
            raise InvalidInputError(f"Amount out of range: {amount!r}") from exc

    if wei >= 2**256:
        raise InvalidInputError(f"Amount out of range: {amount!r}")
    return wei


def from_wei(amount: int, decimals: int = ETHER_DECIMALS) -> str:
    """Format minor units as a plain decimal string with no trailing zeros."""
    if amount < 0:
        raise InvalidInputError(f"Amount must be non-negative: {amount}")

    whole, frac = divmod(amount, 10 ** decimals)
    if not frac:
        return str(whole)
    return f"{whole}.{str(frac).rjust(decimals, '0').rstrip('0')}"
