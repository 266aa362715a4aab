"""
Shared fixtures and stubs for token client tests.

Nothing here touches the network: web3 is replaced by a small stub and
the token contract by an in-memory ERC20 that records every built
transaction. Signing uses real eth-account on a throwaway key.
"""

import threading

import pytest
from eth_account import Account

from erc20_client import TokenClient

# =============================================================================
# Test Constants
# =============================================================================

# Private key for tests (DO NOT USE IN PRODUCTION)
TEST_PRIVATE_KEY = "0x" + "11" * 32
TEST_ACCOUNT = Account.from_key(TEST_PRIVATE_KEY)

TOKEN_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
ALICE = "0x1234567890123456789012345678901234567890"
BOB = "0xabcdefABCDEFabcdefABCDEFabcdefABCDEFabcd"
CAROL = "0x9876543210987654321098765432109876543210"

CHAIN_ID = 1337
GAS_PRICE = 2_000_000_000
TX_HASH = bytes.fromhex("ab" * 32)

SELECTORS = {
    "approve": "0x095ea7b3",
    "transfer": "0xa9059cbb",
    "transferFrom": "0x23b872dd",
}


# =============================================================================
# Stubs
# =============================================================================


class StubEth:
    def __init__(self):
        self.chain_id = CHAIN_ID
        self.nonce = 7
        self.sent = []
        self.nonce_calls = []
        self.fail_send = None
        self.fail_nonce = None

    def get_transaction_count(self, address, block_identifier):
        if self.fail_nonce is not None:
            raise self.fail_nonce
        self.nonce_calls.append((address, block_identifier))
        return self.nonce

    def send_raw_transaction(self, raw):
        if self.fail_send is not None:
            raise self.fail_send
        self.sent.append(bytes(raw))
        return TX_HASH


class StubWeb3:
    def __init__(self):
        self.eth = StubEth()


class StubToken:
    """In-memory ERC20 that never mutates state on writes."""

    def __init__(self, address=TOKEN_ADDRESS):
        self.address = address
        self.balances = {}
        self.allowances = {}
        self.supply = 1_000_000 * 10**18
        self.read_calls = []
        self.built = []
        self.fail_read = None
        self._lock = threading.Lock()

    def _record_read(self, *call):
        with self._lock:
            self.read_calls.append(call)
        if self.fail_read is not None:
            raise self.fail_read

    def balance_of(self, owner, block_identifier, call_from=None):
        self._record_read("balanceOf", owner, block_identifier, call_from)
        return self.balances.get(owner, 0)

    def allowance(self, owner, spender, block_identifier, call_from=None):
        self._record_read("allowance", owner, spender, block_identifier, call_from)
        return self.allowances.get((owner, spender), 0)

    def total_supply(self, block_identifier, call_from=None):
        self._record_read("totalSupply", block_identifier, call_from)
        return self.supply

    def _build(self, fn_name, args, tx_params):
        tx = dict(tx_params)
        tx["to"] = self.address
        tx["data"] = SELECTORS[fn_name] + "00" * 32 * len(args)
        self.built.append({"fn": fn_name, "args": args, "params": dict(tx_params)})
        return tx

    def approve(self, spender, amount, tx_params):
        return self._build("approve", (spender, amount), tx_params)

    def transfer(self, to, amount, tx_params):
        return self._build("transfer", (to, amount), tx_params)

    def transfer_from(self, from_, to, amount, tx_params):
        return self._build("transferFrom", (from_, to, amount), tx_params)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture()
def w3():
    return StubWeb3()


@pytest.fixture()
def token():
    return StubToken()


@pytest.fixture()
def client(w3, token):
    return TokenClient(
        "http://localhost:8545",
        GAS_PRICE,
        TOKEN_ADDRESS,
        web3=w3,
        contract=token,
    )
