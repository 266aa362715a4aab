#!/usr/bin/env python3
"""
Token Info Example

Reads total supply, a balance and an allowance from an ERC20 token.
No private key is needed; nothing is sent to the chain.

Environment Variables:
    TOKEN_RPC_URL: RPC endpoint (http/https/ws/wss/ipc)
    TOKEN_GAS_PRICE: Gas price in wei (unused for reads but required by config)
    TOKEN_CONTRACT_ADDRESS: Token contract address
    HOLDER_ADDRESS: Account to inspect
    SPENDER_ADDRESS: Spender for the allowance query (optional)

Run with: python examples/token_info.py
"""

import os
import sys

from dotenv import load_dotenv

from erc20_client import ClientConfig, TokenClient, TokenClientError
from erc20_client.utils import configure_logging

# Load .env file
load_dotenv()


def main() -> None:
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    holder = os.getenv("HOLDER_ADDRESS", "")
    spender = os.getenv("SPENDER_ADDRESS", "")
    if not holder:
        print("Set HOLDER_ADDRESS to the account to inspect")
        sys.exit(1)

    try:
        client = TokenClient.from_config(ClientConfig.from_env())

        print("=" * 60)
        print(f"Token: {client.token_address}")
        print("=" * 60)
        print(f"  Total supply: {client.total_supply()}")
        print(f"  Balance of {holder}: {client.balance_of(holder)}")
        if spender:
            print(f"  Allowance {holder} -> {spender}: {client.allowance_of(holder, spender)}")
    except TokenClientError as e:
        print(f"\nQuery failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
