__all__ = [
    # Gateway
    "SquiggleGateway",
    "GatewayConfig",
    "decode_token_uri",
    "decode_image",
    # Models
    "ContractInfo",
    "ContractReference",
    "TransactionReceipt",
    "TransactionRequest",
    # Errors
    "SquiggleError",
    "NotConfiguredError",
    "AlreadyInitializedError",
    "InsufficientPaymentError",
    "UnauthorizedError",
    "NotFoundError",
    "InvalidInputError",
    "NetworkError",
    # Units
    "to_wei",
    "from_wei",
]

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
from .gateway import SquiggleGateway, decode_image, decode_token_uri
from .models import ContractInfo, ContractReference, TransactionReceipt, TransactionRequest
from .units import from_wei, to_wei
