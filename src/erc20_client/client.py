"""ERC20 Token Client for Python.

This module provides the TokenClient class, a thin wrapper around a
single deployed ERC20-style token contract on an Ethereum-compatible
chain.

The client supports:
- Read calls: balance, allowance and total supply (against "latest")
- Write calls: approve, transfer and transferFrom with fixed gas limits

Each write builds one transaction, signs it with the caller's key and
broadcasts it exactly once. There is no gas estimation, no retry and no
wait for confirmation; callers needing delivery guarantees poll the
returned TransactionHandle themselves.

Example:
    >>> from erc20_client import TokenClient
    >>> client = TokenClient(
    ...     rpc_url="https://rpc.example.org",
    ...     gas_price=1_000_000_000,
    ...     token_address="0x...",
    ... )
    >>> client.balance_of("0x...")
    1000000
    >>> handle = client.transfer("0x<private key>", to="0x...", amount=5)
    >>> handle.tx_hash
    '0x...'
"""
import math
import os
from typing import Any, Callable, Optional, Protocol, Sequence, Union
from urllib.parse import urlparse

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import IPCProvider, LegacyWebSocketProvider, Web3
from web3.exceptions import ContractLogicError
from web3.types import TxParams

from .config import ClientConfig
from .constants import (
    ABI_SELECTOR_LENGTH,
    APPROVE_GAS_LIMIT,
    MAX_UINT256,
    PROVIDER_TIMEOUT_SECONDS,
    REVERT_SELECTOR,
    SUPPORTED_URL_SCHEMES,
    TRANSFER_FROM_GAS_LIMIT,
    TRANSFER_GAS_LIMIT,
)
from .contract import TokenContract, Web3TokenContract
from .errors import (
    BindingError,
    ParseError,
    RemoteCallError,
    RpcConnectionError,
    SubmissionError,
    ValidationError,
)
from .models import Address, CallOptions, Operation, TransactionHandle
from .utils.logging import get_logger
from .utils.security import sanitize_for_logging

__all__ = ["TokenClient", "Tokener", "SigningKey"]

_logger = get_logger(__name__)

SigningKey = Union[str, bytes, LocalAccount]


# ------------------------------------------------------------------
# Helper Functions
# ------------------------------------------------------------------

def _validate_amount(amount: int, field: str = "amount") -> None:
    """Validate amount is an integer that fits uint256.

    Args:
        amount: Amount to validate
        field: Field name for error message

    Raises:
        ValidationError: If amount is not an int, negative, or exceeds uint256
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"{field} must be an integer", details={"field": field})
    if amount < 0:
        raise ValidationError(f"{field} must be non-negative", details={"field": field})
    if amount > MAX_UINT256:
        raise ValidationError(f"{field} exceeds uint256", details={"field": field})


def _decode_revert_reason(raw: str) -> Optional[str]:
    """Decode Solidity revert reason from error data.

    Args:
        raw: Hex-encoded error data string

    Returns:
        Decoded revert reason string, or None if decoding fails
    """
    # Standard Solidity Error(string): selector 0x08c379a0 + ABI-encoded string
    if not raw.startswith(REVERT_SELECTOR):
        return None
    try:
        (reason,) = decode(["string"], bytes.fromhex(raw[2 + 2 * ABI_SELECTOR_LENGTH :]))
    except (ValueError, DecodingError):
        return None
    return reason


def _parse_call_from(opts: CallOptions) -> Optional[str]:
    """Checksummed caller address for an eth_call, or None when unset.

    Raises:
        ParseError: If from_address is malformed
    """
    if opts.from_address is None:
        return None
    return Address.parse(opts.from_address, "from_address").value


def _validate_timeout(timeout: float) -> None:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValidationError("timeout must be a number of seconds")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValidationError("timeout must be a positive, finite number of seconds")


def _error_reason(exc: Exception) -> str:
    """Best-effort human-readable reason for a web3/provider failure."""
    if isinstance(exc, ContractLogicError):
        data = getattr(exc, "data", None)
        decoded = _decode_revert_reason(data) if isinstance(data, str) else None
        return decoded or getattr(exc, "message", None) or str(exc)
    if isinstance(exc, ValueError) and exc.args and isinstance(exc.args[0], dict):
        payload = exc.args[0]
        reason = payload.get("message") or payload.get("reason")
        data = payload.get("data")
        if isinstance(data, str):
            reason = _decode_revert_reason(data) or reason
        if reason:
            return str(reason)
    return str(exc) or exc.__class__.__name__


def _load_account(key: SigningKey) -> LocalAccount:
    """Turn caller key material into a signer without retaining it.

    Raises:
        SubmissionError: If the key cannot be parsed (key never shown)
    """
    if isinstance(key, LocalAccount):
        return key
    try:
        return Account.from_key(key)
    except Exception:
        raise SubmissionError("Invalid private key format (key not shown for security)") from None


def _make_web3(rpc_url: str, timeout: float) -> Web3:
    """Open a web3 connection for the endpoint and confirm it responds.

    Raises:
        RpcConnectionError: If the URL is malformed or the node is unreachable
    """
    if not rpc_url or not isinstance(rpc_url, str):
        raise RpcConnectionError("rpc_url must be a non-empty string")

    safe_url = sanitize_for_logging(rpc_url)
    parsed = urlparse(rpc_url)
    scheme = parsed.scheme.lower()
    if not scheme and (rpc_url.endswith(".ipc") or os.path.exists(rpc_url)):
        scheme = "ipc"
    if scheme not in SUPPORTED_URL_SCHEMES:
        raise RpcConnectionError(
            f"Unsupported RPC endpoint {safe_url}; expected one of {', '.join(SUPPORTED_URL_SCHEMES)}",
            details={"rpc_url": safe_url},
        )

    try:
        if scheme in ("http", "https"):
            if not parsed.hostname:
                raise RpcConnectionError(f"RPC endpoint {safe_url} has no host", details={"rpc_url": safe_url})
            provider: Any = Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout})
        elif scheme in ("ws", "wss"):
            provider = LegacyWebSocketProvider(rpc_url, websocket_timeout=timeout)
        else:
            ipc_path = parsed.path if scheme == "ipc" and parsed.scheme else rpc_url
            provider = IPCProvider(ipc_path, timeout=timeout)
        w3 = Web3(provider)
        connected = w3.is_connected()
    except RpcConnectionError:
        raise
    except Exception as e:
        raise RpcConnectionError(f"Failed to connect to {safe_url}: {e}", details={"rpc_url": safe_url}) from e

    if not connected:
        raise RpcConnectionError(f"RPC endpoint not reachable: {safe_url}", details={"rpc_url": safe_url})
    return w3


# ------------------------------------------------------------------
# Public interface
# ------------------------------------------------------------------

class Tokener(Protocol):
    """Operations offered by a token client; type against this to swap in fakes."""

    def balance_of(self, address: str, opts: Optional[CallOptions] = None) -> int: ...

    def allowance_of(self, owner: str, spender: str, opts: Optional[CallOptions] = None) -> int: ...

    def total_supply(self, opts: Optional[CallOptions] = None) -> int: ...

    def approve(self, key: SigningKey, spender: str, amount: int) -> TransactionHandle: ...

    def transfer(self, key: SigningKey, to: str, amount: int) -> TransactionHandle: ...

    def transfer_from(self, key: SigningKey, from_: str, to: str, amount: int) -> TransactionHandle: ...


class TokenClient:
    """Minimal ERC20 client using Web3.py.

    Configuration is fixed at construction. The client keeps no other
    state, so one instance can be shared between threads; nonce races
    between concurrent writes from the same key are not handled here.
    """

    def __init__(
        self,
        rpc_url: str,
        gas_price: int,
        token_address: str,
        *,
        timeout: float = PROVIDER_TIMEOUT_SECONDS,
        web3: Optional[Web3] = None,
        contract: Optional[TokenContract] = None,
    ):
        if isinstance(gas_price, bool) or not isinstance(gas_price, int) or gas_price < 0:
            raise ValidationError("gas_price must be a non-negative integer (wei)")
        _validate_timeout(timeout)

        try:
            token = Address.parse(token_address, "token_address")
        except ParseError as e:
            raise BindingError(
                f"Invalid token contract address: {e.message}",
                details={"token_address": repr(token_address)[:64]},
            ) from e

        self.config = ClientConfig(
            rpc_url=rpc_url,
            gas_price=gas_price,
            token_address=token.value,
            request_timeout=timeout,
        )
        self.w3 = web3 if web3 is not None else _make_web3(rpc_url, timeout)

        if contract is not None:
            self.contract: TokenContract = contract
        else:
            try:
                self.contract = Web3TokenContract(self.w3, token.value)
            except Exception as e:
                raise BindingError(f"Failed to bind token contract at {token.value}: {e}") from e

        _logger.debug(
            "Token client bound to %s via %s",
            token.value,
            sanitize_for_logging(rpc_url),
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        web3: Optional[Web3] = None,
        contract: Optional[TokenContract] = None,
    ) -> "TokenClient":
        return cls(
            config.rpc_url,
            config.gas_price,
            config.token_address,
            timeout=config.request_timeout,
            web3=web3,
            contract=contract,
        )

    @property
    def token_address(self) -> str:
        return self.config.token_address

    @property
    def gas_price(self) -> int:
        return self.config.gas_price

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def balance_of(self, address: str, opts: Optional[CallOptions] = None) -> int:
        """Token balance of an account.

        Args:
            address: Account address (40 hex chars, optional 0x prefix)
            opts: Call options (defaults to the latest confirmed block)

        Returns:
            Balance in the token's smallest unit

        Raises:
            ParseError: If address is malformed (no network call is made)
            RemoteCallError: If the call fails, reverts, or returns malformed data
        """
        owner = Address.parse(address, "address")
        opts = opts or CallOptions()
        call_from = _parse_call_from(opts)
        return self._read(
            "balanceOf",
            lambda: self.contract.balance_of(owner.value, opts.block_identifier, call_from),
            (owner,),
        )

    def allowance_of(self, owner: str, spender: str, opts: Optional[CallOptions] = None) -> int:
        """Amount ``spender`` may still transfer on behalf of ``owner``.

        Raises:
            ParseError: If either address is malformed (no network call is made)
            RemoteCallError: If the call fails, reverts, or returns malformed data
        """
        owner_addr = Address.parse(owner, "owner")
        spender_addr = Address.parse(spender, "spender")
        opts = opts or CallOptions()
        call_from = _parse_call_from(opts)
        return self._read(
            "allowance",
            lambda: self.contract.allowance(
                owner_addr.value, spender_addr.value, opts.block_identifier, call_from
            ),
            (owner_addr, spender_addr),
        )

    def total_supply(self, opts: Optional[CallOptions] = None) -> int:
        """Total token supply.

        Raises:
            ParseError: If opts.from_address is malformed (no network call is made)
            RemoteCallError: If the call fails, reverts, or returns malformed data
        """
        opts = opts or CallOptions()
        call_from = _parse_call_from(opts)
        return self._read(
            "totalSupply",
            lambda: self.contract.total_supply(opts.block_identifier, call_from),
            (),
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def approve(self, key: SigningKey, spender: str, amount: int) -> TransactionHandle:
        """Allow ``spender`` to transfer up to ``amount`` from the key's account.

        Sent with a fixed gas limit of APPROVE_GAS_LIMIT.

        Raises:
            ParseError: If spender is malformed
            ValidationError: If amount does not fit uint256
            SubmissionError: If signing or broadcasting fails
        """
        spender_addr = Address.parse(spender, "spender")
        _validate_amount(amount)
        return self._submit(
            Operation.APPROVE,
            key,
            APPROVE_GAS_LIMIT,
            lambda params: self.contract.approve(spender_addr.value, amount, params),
        )

    def transfer(self, key: SigningKey, to: str, amount: int) -> TransactionHandle:
        """Transfer ``amount`` tokens from the key's account to ``to``.

        Sent with a fixed gas limit of TRANSFER_GAS_LIMIT.

        Raises:
            ParseError: If ``to`` is malformed
            ValidationError: If amount does not fit uint256
            SubmissionError: If signing or broadcasting fails
        """
        to_addr = Address.parse(to, "to")
        _validate_amount(amount)
        return self._submit(
            Operation.TRANSFER,
            key,
            TRANSFER_GAS_LIMIT,
            lambda params: self.contract.transfer(to_addr.value, amount, params),
        )

    def transfer_from(self, key: SigningKey, from_: str, to: str, amount: int) -> TransactionHandle:
        """Transfer ``amount`` from ``from_`` to ``to`` using the key's allowance.

        Sent with a fixed gas limit of TRANSFER_FROM_GAS_LIMIT.

        Raises:
            ParseError: If ``from_`` or ``to`` is malformed
            ValidationError: If amount does not fit uint256
            SubmissionError: If signing or broadcasting fails
        """
        from_addr = Address.parse(from_, "from")
        to_addr = Address.parse(to, "to")
        _validate_amount(amount)
        return self._submit(
            Operation.TRANSFER_FROM,
            key,
            TRANSFER_FROM_GAS_LIMIT,
            lambda params: self.contract.transfer_from(from_addr.value, to_addr.value, amount, params),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _read(self, fn_name: str, call: Callable[[], Any], args: Sequence[Address]) -> int:
        _logger.debug("eth_call %s(%s) on %s", fn_name, ", ".join(str(a) for a in args), self.token_address)
        try:
            result = call()
        except Exception as e:
            reason = _error_reason(e)
            _logger.warning("%s call failed: %s", fn_name, sanitize_for_logging(reason))
            raise RemoteCallError(
                f"{fn_name} call failed: {reason}",
                details={"function": fn_name, "contract": self.token_address},
            ) from e

        if isinstance(result, bool) or not isinstance(result, int) or result < 0:
            _logger.warning("%s returned malformed data: %s", fn_name, sanitize_for_logging(repr(result)))
            raise RemoteCallError(
                f"{fn_name} returned malformed data",
                details={"function": fn_name, "contract": self.token_address},
            )
        return result

    def _tx_meta(self, sender: str, gas: int) -> TxParams:
        """Build transaction metadata with the configured legacy gas price.

        Args:
            sender: Signing account address
            gas: Fixed gas limit for the operation

        Returns:
            Transaction parameters dict
        """
        return {
            "from": sender,
            "nonce": self.w3.eth.get_transaction_count(sender, "pending"),
            "chainId": self.w3.eth.chain_id,
            "gas": gas,
            "gasPrice": self.config.gas_price,
            "value": 0,
        }

    def _submit(
        self,
        operation: Operation,
        key: SigningKey,
        gas: int,
        build: Callable[[TxParams], TxParams],
    ) -> TransactionHandle:
        """Build, sign and broadcast one transaction.

        Raises:
            SubmissionError: If any step fails (nothing is retried)
        """
        account = _load_account(key)
        try:
            tx = build(self._tx_meta(account.address, gas))
            signed = account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            reason = _error_reason(e)
            _logger.warning("%s submission failed: %s", operation.value, sanitize_for_logging(reason))
            raise SubmissionError(
                f"{operation.value} submission failed: {reason}",
                details={"operation": operation.value, "sender": account.address},
            ) from e

        handle = TransactionHandle(
            tx_hash=Web3.to_hex(tx_hash),
            operation=operation,
            sender=account.address,
            gas_limit=int(tx["gas"]),
            gas_price=int(tx["gasPrice"]),
            nonce=int(tx["nonce"]),
            chain_id=int(tx["chainId"]),
        )
        _logger.info(
            "Broadcast %s tx %s (gas=%d, nonce=%d)",
            operation.value,
            handle.tx_hash,
            handle.gas_limit,
            handle.nonce,
        )
        return handle
