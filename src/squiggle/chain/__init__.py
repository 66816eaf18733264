"""
Chain - On-chain interaction layer for the Squiggle client.

Provides JSON-RPC client, ABI management, and transaction utilities
for interacting with the deployed contract.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""

from .errors import ChainError, ChainErrorKind
from .rpc import RpcClient
from .tx import Wallet

__all__ = ["ChainError", "ChainErrorKind", "RpcClient", "Wallet"]
