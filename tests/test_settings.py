from decimal import Decimal

import pytest

from v2swap.config.contracts import EXCHANGES
from v2swap.config.settings import SwapSettings
from v2swap.config.tokens import format_token_amount, to_raw_amount
from v2swap.errors import ConfigError, InitCodeHashDecodeError

from conftest import PRIVATE_KEY, WALLET, make_settings


def _env(**extra):
    env = {"RPC_URL": "http://localhost:8545", "PRIVATE_KEY": PRIVATE_KEY}
    env.update(extra)
    return env


def test_defaults_from_preset():
    settings = SwapSettings.from_env(_env())

    preset = EXCHANGES["uniswap_v2"]
    assert settings.router_address.lower() == preset["router"]
    assert settings.factory_address.lower() == preset["factory"]
    assert settings.init_code_hash == preset["init_code_hash"]
    assert settings.wallet_address == WALLET
    assert settings.gas_limit == 300_000
    assert settings.rpc_timeout == 5.0
    assert settings.poll_interval == 1.0
    assert settings.confirm_timeout == 600.0
    assert settings.gas_price_wei is None
    assert settings.amount_in == Decimal("1000000")
    assert settings.amount_out_min == Decimal("10")


def test_sushiswap_preset():
    settings = SwapSettings.from_env(_env(EXCHANGE="sushiswap"))
    assert settings.factory_address.lower() == EXCHANGES["sushiswap"]["factory"]
    assert settings.init_code_hash == EXCHANGES["sushiswap"]["init_code_hash"]


def test_overrides():
    settings = SwapSettings.from_env(
        _env(
            TOKEN_IN_ADDRESS="0x1111111111111111111111111111111111111111",
            TOKEN_IN_DECIMALS="6",
            AMOUNT_IN="12.5",
            AMOUNT_OUT_MIN="0",
            GAS_PRICE_GWEI="1.5",
            CONFIRM_TIMEOUT="0",
            WALLET_ADDRESS=WALLET.lower(),
        )
    )
    assert settings.token_in.decimals == 6
    assert settings.amount_in_raw == 12_500_000
    assert settings.amount_out_min_raw == 0
    assert settings.gas_price_wei == 1_500_000_000
    assert settings.confirm_timeout is None


@pytest.mark.parametrize(
    "env",
    [
        {"RPC_URL": ""},
        {"PRIVATE_KEY": ""},
        {"PRIVATE_KEY": "0x1234"},
        {"EXCHANGE": "pancake"},
        {"ROUTER_ADDRESS": "0x1234"},
        {"TOKEN_IN_DECIMALS": "eighteen"},
        {"AMOUNT_IN": "-1"},
        {"AMOUNT_IN": "0"},
        {"GAS_LIMIT": "0"},
        {"AMOUNT_IN": "Infinity"},
        {"AMOUNT_OUT_MIN": "NaN"},
        {"GAS_PRICE_GWEI": "-1"},
        {"CONFIRM_TIMEOUT": "-5"},
        {"INIT_CODE_HASH": "0x1234"},
        {"INIT_CODE_HASH": "zz" * 32},
        {"WALLET_ADDRESS": "0x0000000000000000000000000000000000000001"},
        {"TOKEN_OUT_ADDRESS": "0xc7ad46e0b8a400bb3c915120d284aafba8fc4735"},
    ],
)
def test_invalid_values_raise_config_error(env):
    with pytest.raises(ConfigError):
        SwapSettings.from_env(_env(**env))


def test_private_key_not_in_repr():
    assert PRIVATE_KEY[2:] not in repr(make_settings())


def test_amount_shifting_is_exact():
    assert to_raw_amount(Decimal("1000000"), 18) == 10**24
    assert to_raw_amount("0.1", 18) == 10**17
    assert to_raw_amount(2**256 - 1, 0) == 2**256 - 1
    assert format_token_amount(1234, 2) == Decimal("12.34")
    assert format_token_amount(0, 18) <= 0


def test_bad_init_code_hash_fails_at_load():
    with pytest.raises(InitCodeHashDecodeError):
        SwapSettings.from_env(_env(INIT_CODE_HASH="0x" + "00" * 31))


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount_in": Decimal("Infinity")},
        {"amount_in": Decimal("NaN")},
        {"amount_out_min": Decimal("-Infinity")},
        {"gas_price_wei": -1},
        {"confirm_timeout": -5.0},
        {"confirm_timeout": 0.0},
    ],
)
def test_direct_construction_is_validated(overrides):
    with pytest.raises(ConfigError):
        make_settings(**overrides)
