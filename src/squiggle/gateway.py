"""
Contract Gateway - typed access to the deployed Squiggle ERC-721 contract.

Every operation validates its inputs, encodes a call against the one
``ContractReference`` the gateway was built with, and either reads
(``eth_call``) or submits a signed transaction and waits for its receipt.

Failures from the chain layer arrive as ``ChainError`` and are classified
on their ``kind`` and decoded revert name:

    InvalidSender               -> AlreadyInitializedError  (initialize)
    InsufficientPayment         -> InsufficientPaymentError (mint)
    ERC721NonexistentToken      -> NotFoundError
    ERC721InsufficientApproval,
    ERC721IncorrectOwner,
    ERC721InvalidApprover,
    ERC721InvalidOperator       -> UnauthorizedError
    anything else               -> NetworkError
"""

from __future__ import annotations

import base64
import binascii
import json
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Protocol

import structlog
from eth_abi.exceptions import DecodingError

from .address import validate_address
from .chain.abi import decode_result, decode_revert, encode_call
from .chain.errors import ChainError, ChainErrorKind
from .chain.rpc import RpcClient
from .chain.tx import Wallet
from .config import GatewayConfig
from .errors import (
    AlreadyInitializedError,
    InsufficientPaymentError,
    InvalidInputError,
    NetworkError,
    NotConfiguredError,
    NotFoundError,
    SquiggleError,
    UnauthorizedError,
)
from .keys import get_account
from .models import ContractInfo, ContractReference, TransactionReceipt, TransactionRequest
from .units import to_wei

logger = structlog.get_logger(__name__)

MAX_UINT256 = 2**256 - 1

_UNAUTHORIZED_ERRORS = frozenset(
    {
        "ERC721InsufficientApproval",
        "ERC721IncorrectOwner",
        "ERC721InvalidApprover",
        "ERC721InvalidOperator",
    }
)

_JSON_DATA_URI = "data:application/json;base64,"
_SVG_DATA_URI = "data:image/svg+xml;base64,"


class ContractReader(Protocol):
    def call(self, to: str, data: str) -> str: ...


class TransactionSigner(Protocol):
    address: str

    def send_transaction(self, to: str, data: str, value: int = 0, gas_limit: Optional[int] = None) -> str: ...

    def wait_for_receipt(self, tx_hash: str) -> dict: ...


class SquiggleGateway:
    """
    Client for one deployed Squiggle contract.

    Args:
        contract: Address + ABI of the deployed contract
        rpc: Reader used for eth_call (an ``RpcClient`` in production)
        wallet: Signing client for writes; without one, writes raise
            ``NotConfiguredError``
    """

    def __init__(
        self,
        contract: ContractReference,
        rpc: ContractReader,
        wallet: Optional[TransactionSigner] = None,
    ) -> None:
        self.contract = contract
        self.rpc = rpc
        self.wallet = wallet

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "SquiggleGateway":
        """Wire an RpcClient and, when a private key is set, a Wallet."""
        rpc = RpcClient(
            config.rpc_url,
            receipt_timeout=config.receipt_timeout,
            poll_interval=config.poll_interval,
        )
        wallet = None
        if config.private_key:
            wallet = Wallet(get_account(config.private_key), rpc, config.chain_id)
        return cls(ContractReference(config.contract_address), rpc, wallet)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def initialize(self, price: str) -> TransactionReceipt:
        """
        One-time setup: store the mint price (ether string) on the contract.

        Raises:
            AlreadyInitializedError: If the contract was configured before
        """
        self._require_configured()
        price_wei = to_wei(price)
        logger.info("initialize", price=price, price_wei=price_wei)
        return self._transact(
            TransactionRequest(self.contract.address, "initialize", (price_wei,)),
            {"InvalidSender": AlreadyInitializedError},
        )

    def mint(self, payment: str) -> TransactionReceipt:
        """
        Mint one token, attaching ``payment`` ether.

        Raises:
            InsufficientPaymentError: If the payment is below the mint price
        """
        self._require_configured()
        value_wei = to_wei(payment)
        logger.info("mint", payment=payment, value_wei=value_wei)
        return self._transact(
            TransactionRequest(self.contract.address, "mint", (), value=value_wei),
            {"InsufficientPayment": InsufficientPaymentError},
        )

    def transfer(self, sender: str, recipient: str, token_id: int) -> TransactionReceipt:
        self._require_configured()
        args = (
            validate_address(sender, "from address"),
            validate_address(recipient, "to address"),
            _validate_token_id(token_id),
        )
        return self._transact(
            TransactionRequest(self.contract.address, "transferFrom", args),
            _authorization_errors(),
        )

    def approve(self, spender: str, token_id: int) -> TransactionReceipt:
        self._require_configured()
        args = (validate_address(spender, "approved address"), _validate_token_id(token_id))
        return self._transact(
            TransactionRequest(self.contract.address, "approve", args),
            _authorization_errors(),
        )

    def set_approval_for_all(self, operator: str, approved: bool) -> TransactionReceipt:
        self._require_configured()
        if not isinstance(approved, bool):
            raise InvalidInputError(f"approved must be a bool, got {approved!r}")
        args = (validate_address(operator, "operator address"), approved)
        return self._transact(
            TransactionRequest(self.contract.address, "setApprovalForAll", args),
            _authorization_errors(),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_contract_info(self) -> ContractInfo:
        """Read name and symbol concurrently."""
        self._require_configured()
        with ThreadPoolExecutor(max_workers=2) as pool:
            name_future = pool.submit(self._read, "name", ())
            symbol_future = pool.submit(self._read, "symbol", ())
            try:
                name = name_future.result()
                symbol = symbol_future.result()
            except NetworkError:
                raise
            except SquiggleError as exc:
                raise NetworkError(f"Failed to read contract info: {exc}") from exc
        return ContractInfo(name=name, symbol=symbol)

    def read_balance(self, owner: str) -> int:
        self._require_configured()
        return self._read("balanceOf", (validate_address(owner, "owner address"),))

    def read_token_uri(self, token_id: int) -> str:
        """
        Token metadata URI.

        Raises:
            NotFoundError: If the token does not exist
        """
        self._require_configured()
        token_id = _validate_token_id(token_id)
        uri = self._read("tokenURI", (token_id,), {"ERC721NonexistentToken": NotFoundError})
        if not uri:
            raise NotFoundError(f"Token {token_id} has no metadata URI")
        return uri

    def read_owner_of(self, token_id: int) -> str:
        self._require_configured()
        token_id = _validate_token_id(token_id)
        return self._read("ownerOf", (token_id,), {"ERC721NonexistentToken": NotFoundError})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_configured(self) -> None:
        if not self.contract.is_configured:
            raise NotConfiguredError(
                "Contract address is the zero address; set SQUIGGLE_CONTRACT_ADDRESS "
                "to the deployed contract first."
            )

    def _read(self, function_name: str, args: tuple, revert_map: Optional[dict] = None) -> Any:
        calldata = encode_call(self.contract.abi, function_name, list(args))
        try:
            raw = self.rpc.call(self.contract.address, calldata)
        except ChainError as exc:
            raise self._classify(exc, function_name, revert_map or {}) from exc

        if raw is None or raw == "0x":
            raise NetworkError(f"{function_name} returned no data (is this the right contract?)")
        try:
            return decode_result(self.contract.abi, function_name, raw)
        except (DecodingError, ValueError) as exc:
            raise NetworkError(f"Could not decode {function_name} result: {exc}") from exc

    def _transact(self, request: TransactionRequest, revert_map: dict) -> TransactionReceipt:
        if self.wallet is None:
            raise NotConfiguredError("No signing wallet configured; set PRIVATE_KEY.")

        calldata = encode_call(self.contract.abi, request.function_name, list(request.args))
        try:
            tx_hash = self.wallet.send_transaction(request.to, calldata, value=request.value)
            logger.info("waiting_for_confirmation", function=request.function_name, tx_hash=tx_hash)
            raw_receipt = self.wallet.wait_for_receipt(tx_hash)
        except ChainError as exc:
            raise self._classify(exc, request.function_name, revert_map) from exc

        receipt = TransactionReceipt.from_rpc(raw_receipt)
        if not receipt.succeeded:
            raise NetworkError(
                f"{request.function_name} transaction {receipt.tx_hash} reverted "
                f"in block {receipt.block_number}"
            )

        logger.info(
            "transaction_confirmed",
            function=request.function_name,
            tx_hash=receipt.tx_hash,
            block=receipt.block_number,
        )
        return receipt

    def _classify(self, exc: ChainError, function_name: str, revert_map: dict) -> SquiggleError:
        if exc.kind is not ChainErrorKind.REVERT:
            return NetworkError(f"{function_name} failed ({exc.kind.value}): {exc.message}")

        try:
            reason = decode_revert(self.contract.abi, exc.data)
        except (DecodingError, ValueError):
            return NetworkError(f"{function_name} reverted with malformed data: {exc.data}")
        if reason is None:
            return NetworkError(f"{function_name} reverted: {exc.message}")

        error_cls = revert_map.get(reason.name)
        if error_cls is None and reason.name == "ERC721NonexistentToken":
            error_cls = NotFoundError
        if error_cls is None:
            return NetworkError(f"{function_name} reverted with {reason.name}{reason.args}")

        logger.debug("revert_classified", function=function_name, reason=reason.name)
        return error_cls(f"{function_name} reverted with {reason.name}{reason.args}")


def _authorization_errors() -> dict:
    return {name: UnauthorizedError for name in _UNAUTHORIZED_ERRORS}


def _validate_token_id(token_id: int) -> int:
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise InvalidInputError(f"Token ID must be an integer, got {token_id!r}")
    if not 0 <= token_id <= MAX_UINT256:
        raise InvalidInputError(f"Token ID out of range: {token_id}")
    return token_id


# ----------------------------------------------------------------------
# Token URI decoding
# ----------------------------------------------------------------------


def decode_token_uri(uri: str) -> dict[str, Any]:
    """
    Decode an on-chain ``data:application/json;base64,`` token URI.

    Raises:
        InvalidInputError: If the URI is not a base64 JSON data URI
    """
    if not uri.startswith(_JSON_DATA_URI):
        raise InvalidInputError("Token URI is not a base64 JSON data URI")
    try:
        payload = base64.b64decode(uri[len(_JSON_DATA_URI):], validate=True)
        metadata = json.loads(payload)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(f"Malformed token URI: {exc}") from exc
    if not isinstance(metadata, dict):
        raise InvalidInputError("Token metadata must be a JSON object")
    return metadata


def decode_image(metadata: dict[str, Any]) -> str:
    """Extract the SVG markup from a metadata ``image`` data URI."""
    image = metadata.get("image")
    if not isinstance(image, str) or not image.startswith(_SVG_DATA_URI):
        raise InvalidInputError("Metadata image is not a base64 SVG data URI")
    try:
        return base64.b64decode(image[len(_SVG_DATA_URI):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise InvalidInputError(f"Malformed image data URI: {exc}") from exc
