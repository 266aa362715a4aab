import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import PROVIDER_TIMEOUT_SECONDS
from .errors import ConfigError, ParseError
from .models import Address

__all__ = ["ClientConfig", "ENV_RPC_URL", "ENV_GAS_PRICE", "ENV_CONTRACT_ADDRESS", "ENV_RPC_TIMEOUT"]

ENV_RPC_URL = "TOKEN_RPC_URL"
ENV_GAS_PRICE = "TOKEN_GAS_PRICE"
ENV_CONTRACT_ADDRESS = "TOKEN_CONTRACT_ADDRESS"
ENV_RPC_TIMEOUT = "TOKEN_RPC_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    rpc_url: str
    gas_price: int
    token_address: str
    request_timeout: float = PROVIDER_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build configuration from environment variables.

        Reads TOKEN_RPC_URL, TOKEN_GAS_PRICE (wei) and TOKEN_CONTRACT_ADDRESS,
        plus the optional TOKEN_RPC_TIMEOUT (seconds). Call
        ``dotenv.load_dotenv()`` first to pick up a ``.env`` file.

        Raises:
            ConfigError: If a required variable is missing or invalid
        """
        env = os.environ if environ is None else environ

        def _required(name: str) -> str:
            value = (env.get(name) or "").strip()
            if not value:
                raise ConfigError(f"Missing environment variable {name}", details={"variable": name})
            return value

        rpc_url = _required(ENV_RPC_URL)
        token_address = _required(ENV_CONTRACT_ADDRESS)
        raw_gas_price = _required(ENV_GAS_PRICE)
        try:
            gas_price = int(raw_gas_price)
        except ValueError:
            raise ConfigError(f"{ENV_GAS_PRICE} must be an integer (wei)", details={"variable": ENV_GAS_PRICE}) from None
        if gas_price < 0:
            raise ConfigError(f"{ENV_GAS_PRICE} must be non-negative", details={"variable": ENV_GAS_PRICE})

        try:
            token_address = Address.parse(token_address, ENV_CONTRACT_ADDRESS).value
        except ParseError as e:
            raise ConfigError(
                f"{ENV_CONTRACT_ADDRESS} is not a valid address: {e.message}",
                details={"variable": ENV_CONTRACT_ADDRESS},
            ) from e

        timeout = float(PROVIDER_TIMEOUT_SECONDS)
        raw_timeout = (env.get(ENV_RPC_TIMEOUT) or "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"{ENV_RPC_TIMEOUT} must be a number of seconds", details={"variable": ENV_RPC_TIMEOUT}) from None
            if not math.isfinite(timeout) or timeout <= 0:
                raise ConfigError(f"{ENV_RPC_TIMEOUT} must be a positive, finite number", details={"variable": ENV_RPC_TIMEOUT})

        return cls(rpc_url=rpc_url, gas_price=gas_price, token_address=token_address, request_timeout=timeout)
