"""ERC20 contract binding.

Defines the six-method interface the token client relies on and a
web3.py implementation of it backed by a minimal ERC20 ABI. Address
arguments are expected to already be checksummed; the client parses
them before they get here.
"""
import json
from pathlib import Path
from typing import Any, Optional, Protocol

from web3 import Web3
from web3.contract import Contract
from web3.types import TxParams

__all__ = ["TokenContract", "Web3TokenContract", "load_abi", "ABI_DIR"]

# ABI file directory
ABI_DIR = Path(__file__).parent / "abis"

# ABI loading cache
_ABI_CACHE: dict[str, list] = {}


def load_abi(name: str) -> list:
    """Load ABI JSON with caching.

    Args:
        name: ABI filename (e.g., "erc20.json")

    Returns:
        Parsed ABI list
    """
    if name not in _ABI_CACHE:
        _ABI_CACHE[name] = json.loads((ABI_DIR / name).read_text())
    return _ABI_CACHE[name]


class TokenContract(Protocol):
    """The ERC20 calls used by TokenClient.

    Reads return the decoded uint256. Writes return the unsigned
    transaction built from ``tx_params`` with calldata filled in.
    """

    @property
    def address(self) -> str: ...

    def balance_of(self, owner: str, block_identifier: Any, call_from: Optional[str] = None) -> int: ...

    def allowance(
        self, owner: str, spender: str, block_identifier: Any, call_from: Optional[str] = None
    ) -> int: ...

    def total_supply(self, block_identifier: Any, call_from: Optional[str] = None) -> int: ...

    def approve(self, spender: str, amount: int, tx_params: TxParams) -> TxParams: ...

    def transfer(self, to: str, amount: int, tx_params: TxParams) -> TxParams: ...

    def transfer_from(self, from_: str, to: str, amount: int, tx_params: TxParams) -> TxParams: ...


class Web3TokenContract:
    """TokenContract implemented on a web3.py contract object."""

    def __init__(self, w3: Web3, address: str):
        self._contract: Contract = w3.eth.contract(address=address, abi=load_abi("erc20.json"))

    @property
    def address(self) -> str:
        return self._contract.address

    def balance_of(self, owner: str, block_identifier: Any = "latest", call_from: Optional[str] = None) -> int:
        return self._contract.functions.balanceOf(owner).call(_call_tx(call_from), block_identifier=block_identifier)

    def allowance(self, owner: str, spender: str, block_identifier: Any = "latest", call_from: Optional[str] = None) -> int:
        return self._contract.functions.allowance(owner, spender).call(
            _call_tx(call_from), block_identifier=block_identifier
        )

    def total_supply(self, block_identifier: Any = "latest", call_from: Optional[str] = None) -> int:
        return self._contract.functions.totalSupply().call(_call_tx(call_from), block_identifier=block_identifier)

    def approve(self, spender: str, amount: int, tx_params: TxParams) -> TxParams:
        return self._contract.functions.approve(spender, amount).build_transaction(tx_params)

    def transfer(self, to: str, amount: int, tx_params: TxParams) -> TxParams:
        return self._contract.functions.transfer(to, amount).build_transaction(tx_params)

    def transfer_from(self, from_: str, to: str, amount: int, tx_params: TxParams) -> TxParams:
        return self._contract.functions.transferFrom(from_, to, amount).build_transaction(tx_params)


def _call_tx(call_from: Optional[str]) -> Optional[TxParams]:
    return {"from": call_from} if call_from else None
