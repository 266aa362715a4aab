"""Constants for the ERC20 token client.

Gas limits are fixed per operation and are never estimated. They are
static upper bounds for a standard ERC20 deployment, not measured
minimums; re-check them against the target contract before reuse.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
REVERT_SELECTOR = "0x08c379a0"

# Ethereum Constants
ADDRESS_HEX_LENGTH = 40
ADDRESS_LENGTH = 20
MAX_UINT256 = 2**256 - 1

# Gas Limits (per write operation)
APPROVE_GAS_LIMIT = 48_000
TRANSFER_GAS_LIMIT = 40_000
TRANSFER_FROM_GAS_LIMIT = 50_000

# Read calls target confirmed state, never the pending block
DEFAULT_BLOCK_IDENTIFIER = "latest"

# Network Constants
PROVIDER_TIMEOUT_SECONDS = 30
SUPPORTED_URL_SCHEMES = ("http", "https", "ws", "wss", "ipc")

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "REVERT_SELECTOR",
    "ADDRESS_HEX_LENGTH",
    "ADDRESS_LENGTH",
    "MAX_UINT256",
    "APPROVE_GAS_LIMIT",
    "TRANSFER_GAS_LIMIT",
    "TRANSFER_FROM_GAS_LIMIT",
    "DEFAULT_BLOCK_IDENTIFIER",
    "PROVIDER_TIMEOUT_SECONDS",
    "SUPPORTED_URL_SCHEMES",
]
