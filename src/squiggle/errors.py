"""
Error taxonomy for the Squiggle gateway.

Every failure surfaced to a caller is a ``SquiggleError``.  Chain-level
failures arrive as ``ChainError`` (see ``squiggle.chain.errors``) and are
classified into the specific kinds below by the gateway.
"""

from __future__ import annotations


class SquiggleError(RuntimeError):
    exit_code: int = 1


class NotConfiguredError(SquiggleError):
    """Contract address is still the all-zero sentinel, or no signer is set."""


class AlreadyInitializedError(SquiggleError):
    pass


class InsufficientPaymentError(SquiggleError):
    pass


class UnauthorizedError(SquiggleError):
    pass


class NotFoundError(SquiggleError):
    pass


class InvalidInputError(SquiggleError, ValueError):
    pass


class NetworkError(SquiggleError):
    pass
