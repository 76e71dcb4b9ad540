"""
Runtime settings for a swap run.

All knobs of a run live in one immutable ``SwapSettings`` object which is
built once (normally from the environment) and handed to the executor.

Environment variables
---------------------
RPC_URL, PRIVATE_KEY                          required
EXCHANGE                                      preset name (default uniswap_v2)
ROUTER_ADDRESS, FACTORY_ADDRESS, INIT_CODE_HASH, WETH_ADDRESS
                                              override the preset
TOKEN_IN_ADDRESS, TOKEN_IN_DECIMALS, TOKEN_IN_SYMBOL
TOKEN_OUT_ADDRESS, TOKEN_OUT_DECIMALS, TOKEN_OUT_SYMBOL
AMOUNT_IN, AMOUNT_OUT_MIN                     human-readable amounts
WALLET_ADDRESS                                optional, must match the key
GAS_LIMIT, GAS_PRICE_GWEI
RPC_TIMEOUT, POLL_INTERVAL, CONFIRM_TIMEOUT, DEADLINE_SECONDS
"""
from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from eth_account import Account
from eth_typing import ChecksumAddress
from eth_utils import is_address, to_checksum_address
from web3 import Web3

from v2swap.config.contracts import get_exchange_config
from v2swap.config.tokens import (
    DEFAULT_SWAP_CONFIG,
    TOKEN_CONFIG,
    TokenSpec,
    to_raw_amount,
)
from v2swap.errors import ConfigError
from v2swap.helpers.pair_address import decode_init_code_hash

__all__ = ["SwapSettings", "parse_address", "parse_decimal", "parse_float"]

DEFAULT_GAS_LIMIT = 300_000
DEFAULT_RPC_TIMEOUT = 5.0
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_CONFIRM_TIMEOUT = 600.0
DEFAULT_DEADLINE_SECONDS = 600


def parse_address(value: str, name: str) -> ChecksumAddress:
    """Return *value* as a checksum address or raise ConfigError."""
    if not value or not is_address(value):
        raise ConfigError(f"{name} is not a valid address: {value!r}")
    return to_checksum_address(value)


def parse_decimal(value: str | Decimal, name: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ConfigError(f"{name} is not a number: {value!r}") from exc
    if not parsed.is_finite() or parsed < 0:
        raise ConfigError(f"{name} must be a non-negative number: {value!r}")
    return parsed


def _int(value: str | int, name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} is not an integer: {value!r}") from exc
    if parsed < 0:
        raise ConfigError(f"{name} must be non-negative: {value!r}")
    return parsed


def parse_float(value: str | float, name: str) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} is not a number: {value!r}") from exc
    if math.isnan(parsed) or parsed < 0:
        raise ConfigError(f"{name} must be a non-negative number: {value!r}")
    return parsed


@dataclass(frozen=True)
class SwapSettings:
    rpc_url: str
    router_address: ChecksumAddress
    factory_address: ChecksumAddress
    init_code_hash: str
    token_in: TokenSpec
    token_out: TokenSpec
    amount_in: Decimal
    amount_out_min: Decimal
    wallet_address: ChecksumAddress
    private_key: str = field(repr=False)
    weth_address: ChecksumAddress | None = None
    gas_limit: int = DEFAULT_GAS_LIMIT
    gas_price_wei: int | None = None
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    confirm_timeout: float | None = DEFAULT_CONFIRM_TIMEOUT
    deadline_seconds: int = DEFAULT_DEADLINE_SECONDS

    def __post_init__(self):
        if self.token_in.address == self.token_out.address:
            raise ConfigError("token in and token out must differ")
        if self.gas_limit <= 0:
            raise ConfigError("gas limit must be positive")
        if not self.amount_in.is_finite() or self.amount_in <= 0:
            raise ConfigError(f"amount in must be a positive number: {self.amount_in}")
        if not self.amount_out_min.is_finite() or self.amount_out_min < 0:
            raise ConfigError(f"amount out min must be a non-negative number: {self.amount_out_min}")
        if self.gas_price_wei is not None and self.gas_price_wei < 0:
            raise ConfigError("gas price must not be negative")
        if self.confirm_timeout is not None and not self.confirm_timeout > 0:
            raise ConfigError(f"confirm timeout must be positive: {self.confirm_timeout}")

    @property
    def amount_in_raw(self) -> int:
        return to_raw_amount(self.amount_in, self.token_in.decimals)

    @property
    def amount_out_min_raw(self) -> int:
        return to_raw_amount(self.amount_out_min, self.token_out.decimals)

    @property
    def swap_path(self) -> list[ChecksumAddress]:
        return [self.token_in.address, self.token_out.address]

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "SwapSettings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigError: If a required variable is missing or malformed.
        """
        env = os.environ if env is None else env

        rpc_url = env.get("RPC_URL")
        if not rpc_url:
            raise ConfigError("RPC_URL is not set")
        private_key = env.get("PRIVATE_KEY")
        if not private_key:
            raise ConfigError("PRIVATE_KEY is not set")

        try:
            preset = get_exchange_config(env.get("EXCHANGE"))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        try:
            signer = Account.from_key(private_key).address
        except Exception as exc:  # eth_keys raises its own ValidationError
            raise ConfigError("PRIVATE_KEY is not a valid private key") from exc

        wallet = env.get("WALLET_ADDRESS")
        if wallet:
            wallet = parse_address(wallet, "WALLET_ADDRESS")
            if wallet != signer:
                raise ConfigError(f"WALLET_ADDRESS {wallet} does not match PRIVATE_KEY address {signer}")
        else:
            wallet = to_checksum_address(signer)

        init_code_hash = env.get("INIT_CODE_HASH", preset["init_code_hash"])
        decode_init_code_hash(init_code_hash)

        gas_price_gwei = env.get("GAS_PRICE_GWEI")
        confirm_timeout = parse_float(env.get("CONFIRM_TIMEOUT", DEFAULT_CONFIRM_TIMEOUT), "CONFIRM_TIMEOUT")

        return cls(
            rpc_url=rpc_url,
            router_address=parse_address(env.get("ROUTER_ADDRESS", preset["router"]), "ROUTER_ADDRESS"),
            factory_address=parse_address(env.get("FACTORY_ADDRESS", preset["factory"]), "FACTORY_ADDRESS"),
            weth_address=parse_address(env.get("WETH_ADDRESS", preset["weth"]), "WETH_ADDRESS"),
            init_code_hash=init_code_hash,
            token_in=_token_from_env(env, "TOKEN_IN", TOKEN_CONFIG["token_in"]),
            token_out=_token_from_env(env, "TOKEN_OUT", TOKEN_CONFIG["token_out"]),
            amount_in=parse_decimal(env.get("AMOUNT_IN", DEFAULT_SWAP_CONFIG["amount_in"]), "AMOUNT_IN"),
            amount_out_min=parse_decimal(env.get("AMOUNT_OUT_MIN", DEFAULT_SWAP_CONFIG["amount_out_min"]), "AMOUNT_OUT_MIN"),
            wallet_address=wallet,
            private_key=private_key,
            gas_limit=_int(env.get("GAS_LIMIT", DEFAULT_GAS_LIMIT), "GAS_LIMIT"),
            gas_price_wei=(
                Web3.to_wei(parse_decimal(gas_price_gwei, "GAS_PRICE_GWEI"), "gwei") if gas_price_gwei else None
            ),
            rpc_timeout=parse_float(env.get("RPC_TIMEOUT", DEFAULT_RPC_TIMEOUT), "RPC_TIMEOUT"),
            poll_interval=parse_float(env.get("POLL_INTERVAL", DEFAULT_POLL_INTERVAL), "POLL_INTERVAL"),
            # 0 disables the bound
            confirm_timeout=confirm_timeout or None,
            deadline_seconds=_int(env.get("DEADLINE_SECONDS", DEFAULT_DEADLINE_SECONDS), "DEADLINE_SECONDS"),
        )


def _token_from_env(env: Mapping[str, str], prefix: str, default: dict) -> TokenSpec:
    return TokenSpec(
        address=parse_address(env.get(f"{prefix}_ADDRESS", default["address"]), f"{prefix}_ADDRESS"),
        decimals=_int(env.get(f"{prefix}_DECIMALS", default["decimals"]), f"{prefix}_DECIMALS"),
        symbol=env.get(f"{prefix}_SYMBOL", default["symbol"]),
    )
