"""
ERC20 client utilities.

Logging and log-sanitizing helpers shared by the client modules.
"""

from erc20_client.utils.logging import configure_logging, get_logger, set_level
from erc20_client.utils.security import redact_url, sanitize_for_logging

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    # Security
    "redact_url",
    "sanitize_for_logging",
]
