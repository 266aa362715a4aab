from .client import SigningKey, TokenClient, Tokener
from .config import ClientConfig
from .constants import (
    APPROVE_GAS_LIMIT,
    DEFAULT_BLOCK_IDENTIFIER,
    MAX_UINT256,
    PROVIDER_TIMEOUT_SECONDS,
    TRANSFER_FROM_GAS_LIMIT,
    TRANSFER_GAS_LIMIT,
)
from .contract import TokenContract, Web3TokenContract
from .errors import (
    BindingError,
    ConfigError,
    ParseError,
    RemoteCallError,
    RpcConnectionError,
    SubmissionError,
    TokenClientError,
    ValidationError,
)
from .models import Address, CallOptions, Operation, TransactionHandle

__version__ = "0.1.0"

__all__ = [
    # Client
    "TokenClient",
    "Tokener",
    "SigningKey",
    # Contract binding
    "TokenContract",
    "Web3TokenContract",
    # Config
    "ClientConfig",
    # Models
    "Address",
    "CallOptions",
    "Operation",
    "TransactionHandle",
    # Errors
    "TokenClientError",
    "RpcConnectionError",
    "BindingError",
    "ParseError",
    "ValidationError",
    "RemoteCallError",
    "SubmissionError",
    "ConfigError",
    # Constants
    "APPROVE_GAS_LIMIT",
    "TRANSFER_GAS_LIMIT",
    "TRANSFER_FROM_GAS_LIMIT",
    "DEFAULT_BLOCK_IDENTIFIER",
    "MAX_UINT256",
    "PROVIDER_TIMEOUT_SECONDS",
]
