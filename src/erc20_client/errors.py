"""
Exception types for the ERC20 token client.

All client failures inherit from TokenClientError, which carries a
machine-readable code and optional context details alongside the
human-readable message. Errors are raised straight to the caller;
nothing here is retried.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "TokenClientError",
    "RpcConnectionError",
    "BindingError",
    "ParseError",
    "ValidationError",
    "RemoteCallError",
    "SubmissionError",
    "ConfigError",
]


class TokenClientError(Exception):
    """
    Base exception for the token client.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "PARSE_ERROR").
        details: Optional dictionary with additional error context.
    """

    default_code = "TOKEN_CLIENT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class RpcConnectionError(TokenClientError):
    """Raised when the RPC endpoint is malformed or unreachable."""

    default_code = "CONNECTION_ERROR"


class BindingError(TokenClientError):
    """Raised when the token contract cannot be bound (bad contract address)."""

    default_code = "BINDING_ERROR"


class ParseError(TokenClientError):
    """Raised when an address argument is not 20 bytes of valid hex."""

    default_code = "PARSE_ERROR"

    def __init__(self, value: Any, field: str = "address", reason: str = "invalid address") -> None:
        self.value = value
        self.field = field
        super().__init__(
            f"{field}: {reason}",
            details={"field": field, "value": repr(value)[:64]},
        )


class ValidationError(TokenClientError):
    """Raised when a non-address input (amount, gas price) is out of range."""

    default_code = "VALIDATION_ERROR"


class RemoteCallError(TokenClientError):
    """Raised when a read-only contract call fails, reverts, or returns malformed data."""

    default_code = "REMOTE_CALL_ERROR"


class SubmissionError(TokenClientError):
    """Raised when building, signing, or broadcasting a transaction fails."""

    default_code = "SUBMISSION_ERROR"


class ConfigError(TokenClientError):
    """Raised when client configuration is missing or invalid."""

    default_code = "CONFIG_ERROR"
