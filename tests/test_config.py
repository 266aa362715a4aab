import pytest

from erc20_client import ClientConfig, ConfigError

TOKEN = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


def _env(**overrides):
    env = {
        "TOKEN_RPC_URL": "https://rpc.example.org",
        "TOKEN_GAS_PRICE": "1000000000",
        "TOKEN_CONTRACT_ADDRESS": TOKEN,
    }
    env.update(overrides)
    return {k: v for k, v in env.items() if v is not None}


def test_from_env_reads_required_values():
    cfg = ClientConfig.from_env(_env())
    assert cfg.rpc_url == "https://rpc.example.org"
    assert cfg.gas_price == 1_000_000_000
    assert cfg.token_address == TOKEN
    assert cfg.request_timeout == 30


def test_from_env_timeout_override():
    cfg = ClientConfig.from_env(_env(TOKEN_RPC_TIMEOUT="2.5"))
    assert cfg.request_timeout == 2.5


@pytest.mark.parametrize("missing", ["TOKEN_RPC_URL", "TOKEN_GAS_PRICE", "TOKEN_CONTRACT_ADDRESS"])
def test_from_env_missing_variable(missing):
    with pytest.raises(ConfigError) as exc:
        ClientConfig.from_env(_env(**{missing: None}))
    assert exc.value.details["variable"] == missing


def test_from_env_blank_is_missing():
    with pytest.raises(ConfigError):
        ClientConfig.from_env(_env(TOKEN_RPC_URL="   "))


@pytest.mark.parametrize("gas_price", ["1.5", "gwei", "0x10"])
def test_from_env_bad_gas_price(gas_price):
    with pytest.raises(ConfigError):
        ClientConfig.from_env(_env(TOKEN_GAS_PRICE=gas_price))


@pytest.mark.parametrize("timeout", ["soon", "0", "-3"])
def test_from_env_bad_timeout(timeout):
    with pytest.raises(ConfigError):
        ClientConfig.from_env(_env(TOKEN_RPC_TIMEOUT=timeout))


def test_from_env_defaults_to_process_environment(monkeypatch):
    for key, value in _env(TOKEN_GAS_PRICE="7").items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("TOKEN_RPC_TIMEOUT", raising=False)
    assert ClientConfig.from_env().gas_price == 7


@pytest.mark.parametrize("gas_price", ["-5", "-1"])
def test_from_env_negative_gas_price(gas_price):
    with pytest.raises(ConfigError) as exc:
        ClientConfig.from_env(_env(TOKEN_GAS_PRICE=gas_price))
    assert exc.value.details["variable"] == "TOKEN_GAS_PRICE"


@pytest.mark.parametrize("address", ["0x1234", "0x" + "zz" * 20, "not-an-address"])
def test_from_env_bad_contract_address(address):
    with pytest.raises(ConfigError) as exc:
        ClientConfig.from_env(_env(TOKEN_CONTRACT_ADDRESS=address))
    assert exc.value.details["variable"] == "TOKEN_CONTRACT_ADDRESS"


def test_from_env_normalizes_contract_address():
    cfg = ClientConfig.from_env(_env(TOKEN_CONTRACT_ADDRESS=TOKEN.lower()[2:]))
    assert cfg.token_address == TOKEN


@pytest.mark.parametrize("timeout", ["nan", "inf", "-inf"])
def test_from_env_non_finite_timeout(timeout):
    with pytest.raises(ConfigError):
        ClientConfig.from_env(_env(TOKEN_RPC_TIMEOUT=timeout))
