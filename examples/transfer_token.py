#!/usr/bin/env python3
"""
Transfer Example

Sends a single ERC20 transfer and waits for its receipt. The client
itself never waits for confirmation; the polling below is the caller's
responsibility and shows one way to do it.

Usage:
    python examples/transfer_token.py <recipient> <amount>

Environment Variables:
    TOKEN_RPC_URL: RPC endpoint
    TOKEN_GAS_PRICE: Gas price in wei
    TOKEN_CONTRACT_ADDRESS: Token contract address
    SENDER_PRIVATE_KEY: Private key of the sending account
"""

import os
import sys

from dotenv import load_dotenv

from erc20_client import ClientConfig, TokenClient, TokenClientError
from erc20_client.utils import configure_logging

# Load .env file
load_dotenv()

RECEIPT_TIMEOUT_SECONDS = 120


def main() -> None:
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    recipient, amount = sys.argv[1], int(sys.argv[2])

    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    private_key = os.getenv("SENDER_PRIVATE_KEY", "")
    if not private_key:
        print("Set SENDER_PRIVATE_KEY")
        sys.exit(1)

    try:
        client = TokenClient.from_config(ClientConfig.from_env())
        handle = client.transfer(private_key, recipient, amount)
    except TokenClientError as e:
        print(f"\nTransfer failed: {e}")
        sys.exit(1)

    print(f"Sent {handle.operation.value} from {handle.sender}")
    print(f"  tx:    {handle.tx_hash}")
    print(f"  nonce: {handle.nonce}  gas: {handle.gas_limit} @ {handle.gas_price} wei")

    receipt = client.w3.eth.wait_for_transaction_receipt(handle.tx_hash, timeout=RECEIPT_TIMEOUT_SECONDS)
    status = "success" if receipt["status"] == 1 else "reverted"
    print(f"  mined in block {receipt['blockNumber']}: {status} (gas used {receipt['gasUsed']})")


if __name__ == "__main__":
    main()
