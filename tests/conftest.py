"""
Shared fixtures: an in-memory Squiggle contract behind fake chain clients.

``FakeSquiggleChain`` decodes calldata with the real ABI module and raises
``ChainError(REVERT)`` with encoded custom errors, the way a node does
during eth_call / eth_estimateGas.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Optional

import pytest
from eth_abi import encode
from eth_account import Account

from squiggle.address import ZERO_ADDRESS
from squiggle.chain.abi import decode_call, encode_error, squiggle_abi
from squiggle.chain.errors import ChainError, ChainErrorKind
from squiggle.gateway import SquiggleGateway
from squiggle.models import TRANSFER_TOPIC, ContractReference

CONTRACT_ADDRESS = "0x7f916543a53e08b8cbd4a066a1079021d1c91572"
TEST_PRIVATE_KEY = "0x" + "11" * 32
OTHER_PRIVATE_KEY = "0x" + "22" * 32

_OUTPUT_TYPES = {
    "name": "string",
    "symbol": "string",
    "balanceOf": "uint256",
    "tokenURI": "string",
    "ownerOf": "address",
}


def _topic_for_address(address: str) -> str:
    return "0x" + "0" * 24 + address.lower()[2:]


class FakeSquiggleChain:
    """Contract state plus an ``eth_call`` entry point."""

    def __init__(self, name: str = "Squiggle", symbol: str = "SQGL") -> None:
        self.abi = squiggle_abi()
        self.name = name
        self.symbol = symbol
        self.initialized = False
        self.mint_price = 0
        self.next_token_id = 0
        self.owners: dict[int, str] = {}
        self.approvals: dict[int, str] = {}
        self.operators: set[tuple[str, str]] = set()
        self.requests: list[str] = []
        self.fail_reads: Optional[ChainError] = None

    # ---- eth_call ----

    def call(self, to: str, data: str) -> str:
        self.requests.append("eth_call")
        if self.fail_reads is not None:
            raise self.fail_reads
        function_name, args = decode_call(self.abi, data)
        result = self._view(function_name, args)
        return "0x" + encode([_OUTPUT_TYPES[function_name]], [result]).hex()

    def _view(self, function_name: str, args: tuple) -> Any:
        if function_name == "name":
            return self.name
        if function_name == "symbol":
            return self.symbol
        if function_name == "balanceOf":
            return sum(1 for o in self.owners.values() if o.lower() == args[0].lower())
        if function_name == "ownerOf":
            return self._owner(args[0])
        if function_name == "tokenURI":
            self._owner(args[0])
            return token_uri_for(args[0])
        raise AssertionError(f"unexpected view {function_name}")

    # ---- state transitions (run at "estimateGas" time) ----

    def execute(self, sender: str, data: str, value: int) -> list[dict]:
        function_name, args = decode_call(self.abi, data)
        sender = sender.lower()

        if function_name == "initialize":
            if self.initialized:
                self._revert("InvalidSender")
            self.initialized = True
            self.mint_price = args[0]
            return []

        if function_name == "mint":
            if value < self.mint_price:
                self._revert("InsufficientPayment")
            token_id = self.next_token_id
            self.next_token_id += 1
            self.owners[token_id] = sender
            return [
                {
                    "address": CONTRACT_ADDRESS,
                    "topics": [
                        TRANSFER_TOPIC,
                        "0x" + "0" * 64,
                        _topic_for_address(sender),
                        "0x" + f"{token_id:064x}",
                    ],
                    "data": "0x",
                }
            ]

        if function_name == "transferFrom":
            source, dest, token_id = args
            owner = self._owner(token_id)
            if not self._authorized(sender, token_id):
                self._revert("ERC721InsufficientApproval", [sender, token_id])
            if source.lower() != owner:
                self._revert("ERC721IncorrectOwner", [source, token_id, owner])
            self.owners[token_id] = dest.lower()
            self.approvals.pop(token_id, None)
            return []

        if function_name == "approve":
            spender, token_id = args
            owner = self._owner(token_id)
            if sender != owner and (owner, sender) not in self.operators:
                self._revert("ERC721InvalidApprover", [sender])
            self.approvals[token_id] = spender.lower()
            return []

        if function_name == "setApprovalForAll":
            operator, approved = args
            if operator.lower() == ZERO_ADDRESS:
                self._revert("ERC721InvalidOperator", [operator])
            if approved:
                self.operators.add((sender, operator.lower()))
            else:
                self.operators.discard((sender, operator.lower()))
            return []

        raise AssertionError(f"unexpected write {function_name}")

    def _owner(self, token_id: int) -> str:
        if token_id not in self.owners:
            self._revert("ERC721NonexistentToken", [token_id])
        return self.owners[token_id]

    def _authorized(self, sender: str, token_id: int) -> bool:
        owner = self.owners[token_id]
        return (
            sender == owner
            or self.approvals.get(token_id) == sender
            or (owner, sender) in self.operators
        )

    def _revert(self, error_name: str, args: Optional[list] = None) -> None:
        raise ChainError(
            ChainErrorKind.REVERT,
            "execution reverted",
            code=3,
            data=encode_error(self.abi, error_name, args),
        )


class FakeWallet:
    """Signing client stand-in: executes immediately and records receipts."""

    def __init__(self, chain: FakeSquiggleChain, private_key: str = TEST_PRIVATE_KEY) -> None:
        self.chain = chain
        self.address = Account.from_key(private_key).address
        self.receipts: dict[str, dict] = {}
        self.block = 100

    def send_transaction(self, to: str, data: str, value: int = 0, gas_limit: Optional[int] = None) -> str:
        self.chain.requests.append("eth_sendRawTransaction")
        logs = self.chain.execute(self.address, data, value)
        self.block += 1
        tx_hash = "0x" + f"{len(self.receipts) + 1:064x}"
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "blockNumber": hex(self.block),
            "status": "0x1",
            "gasUsed": hex(52_000),
            "from": self.address.lower(),
            "to": to,
            "logs": logs,
        }
        return tx_hash

    def wait_for_receipt(self, tx_hash: str) -> dict:
        return self.receipts[tx_hash]


def token_uri_for(token_id: int) -> str:
    svg = f'<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 {token_id} Q 50 50 100 0"/></svg>'
    metadata = {
        "name": f"Squiggle #{token_id}",
        "description": "On-chain generative squiggle",
        "image": "data:image/svg+xml;base64," + base64.b64encode(svg.encode()).decode(),
    }
    return "data:application/json;base64," + base64.b64encode(json.dumps(metadata).encode()).decode()


@pytest.fixture()
def chain() -> FakeSquiggleChain:
    return FakeSquiggleChain()


@pytest.fixture()
def wallet(chain: FakeSquiggleChain) -> FakeWallet:
    return FakeWallet(chain)


@pytest.fixture()
def gateway(chain: FakeSquiggleChain, wallet: FakeWallet) -> SquiggleGateway:
    return SquiggleGateway(ContractReference(CONTRACT_ADDRESS), chain, wallet)


@pytest.fixture()
def initialized_gateway(gateway: SquiggleGateway) -> SquiggleGateway:
    gateway.initialize("0.001")
    return gateway
