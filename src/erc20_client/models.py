import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from web3 import Web3

from .constants import ADDRESS_HEX_LENGTH, ADDRESS_LENGTH, DEFAULT_BLOCK_IDENTIFIER
from .errors import ParseError

__all__ = ["Address", "Operation", "CallOptions", "TransactionHandle"]

_ADDRESS_RE = re.compile(rf"^(0x|0X)?[0-9a-fA-F]{{{ADDRESS_HEX_LENGTH}}}$")


@dataclass(frozen=True)
class Address:
    """20-byte account or contract identifier.

    Always holds the EIP-55 checksummed ``0x`` form, so two addresses
    compare equal regardless of the letter case they were parsed from.
    Checksum casing on input is not enforced.
    """

    value: str

    @classmethod
    def parse(cls, raw: Union[str, bytes, "Address"], field: str = "address") -> "Address":
        if isinstance(raw, Address):
            return raw
        if isinstance(raw, (bytes, bytearray)):
            if len(raw) != ADDRESS_LENGTH:
                raise ParseError(raw, field, f"must be exactly {ADDRESS_LENGTH} bytes")
            return cls(Web3.to_checksum_address("0x" + bytes(raw).hex()))
        if not isinstance(raw, str):
            raise ParseError(raw, field, "must be a hex string")
        text = raw
        if not _ADDRESS_RE.fullmatch(text):
            raise ParseError(raw, field, f"must be {ADDRESS_HEX_LENGTH} hex characters, optionally 0x-prefixed")
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        return cls(Web3.to_checksum_address("0x" + text.lower()))

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.value[2:])

    def __str__(self) -> str:
        return self.value


class Operation(str, Enum):
    APPROVE = "approve"
    TRANSFER = "transfer"
    TRANSFER_FROM = "transferFrom"


@dataclass(frozen=True)
class CallOptions:
    """Options for read-only contract calls.

    Attributes:
        block_identifier: Block to evaluate against ("latest" by default,
            so pending state is never observed)
        from_address: Optional caller address for the eth_call
    """

    block_identifier: Any = DEFAULT_BLOCK_IDENTIFIER
    from_address: Optional[str] = None


@dataclass(frozen=True)
class TransactionHandle:
    """Reference to a broadcast transaction.

    The client does not wait for inclusion; poll for the receipt with
    ``w3.eth.wait_for_transaction_receipt(handle.tx_hash)`` if needed.

    Attributes:
        tx_hash: Transaction hash (0x-prefixed hex)
        operation: Token operation that produced the transaction
        sender: Checksummed address of the signing account
        gas_limit: Gas limit the transaction was sent with
        gas_price: Gas price in wei
        nonce: Account nonce used
        chain_id: Chain ID the transaction was signed for
    """

    tx_hash: str
    operation: Operation
    sender: str
    gas_limit: int
    gas_price: int
    nonce: int
    chain_id: int
