"""Shared fixtures: a scripted in-memory chain and ready-made settings."""

import logging
from decimal import Decimal

import pytest
from eth_utils import to_checksum_address

from v2swap.config.settings import SwapSettings
from v2swap.config.tokens import TokenSpec
from v2swap.errors import RPCError
from v2swap.helpers.chain_client import SignedTx

# anvil default[0] private key
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
WALLET = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

ROUTER = to_checksum_address("0x7a250d5630b4cf539739df2c5dacb4c659f2488d")
FACTORY = to_checksum_address("0xabc0000000000000000000000000000000000abc")
INIT_CODE_HASH = "96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"

# HIGH_TOKEN sorts after LOW_TOKEN
HIGH_TOKEN = to_checksum_address("0xd1822505796c4eba9379d5a8b4141573444042c6")
LOW_TOKEN = to_checksum_address("0x1111111111111111111111111111111111111111")


class FakeChainClient:
    """Scripted stand-in for ChainClient; records every write."""

    def __init__(
        self,
        *,
        eth_balance=10**18,
        token_balance=10**24,
        allowance=0,
        reserves=(100, 200),
        gas_price=50,
        receipt_status=1,
        nonce=7,
        pair=None,
    ):
        self.eth_balance = eth_balance
        self.token_balance_value = token_balance
        self.allowance = allowance
        self.reserves = reserves
        self.gas_price = gas_price
        self.receipt_status = receipt_status
        self.nonce = nonce
        self.pair = pair
        self.fail_reads = set()
        self.calls = []
        self.built = []
        self.sent = []
        self.waited = []

    def _read(self, name):
        self.calls.append(name)
        if name in self.fail_reads:
            raise RPCError(f"{name} failed")

    def balance(self, address):
        self._read("balance")
        return self.eth_balance

    def token_balance(self, token, address):
        self._read("token_balance")
        return self.token_balance_value

    def nonce_at(self, address):
        self._read("nonce_at")
        return self.nonce

    def suggest_gas_price(self):
        self._read("suggest_gas_price")
        return self.gas_price

    def call_contract_constant(self, address, abi, method, *args):
        self._read(method)
        if method == "getReserves":
            return [self.reserves[0], self.reserves[1], 1700000000]
        if method == "allowance":
            return [self.allowance]
        if method == "getPair":
            return [self.pair]
        raise AssertionError(f"unexpected call {method}")

    def build_call_method_tx(self, private_key, address, abi, method, opts, *args):
        self.built.append({"kind": method, "to": address, "args": args, "opts": opts})
        return SignedTx(tx_hex=f"0xsigned{len(self.built)}", tx_hash="")

    def build_call_method_tx_with_payload(self, private_key, address, payload, opts):
        self.built.append({"kind": "payload", "to": address, "payload": payload, "opts": opts})
        return SignedTx(tx_hex=f"0xsigned{len(self.built)}", tx_hash="")

    def send_raw_transaction(self, tx_hex):
        self.sent.append(tx_hex)
        self.nonce += 1
        return "0x" + f"{len(self.sent):064x}"

    def wait_confirm(self, tx_hash, poll_interval=1.0, timeout=None):
        self.waited.append((tx_hash, poll_interval, timeout))
        return {"status": self.receipt_status, "blockNumber": 1}


def make_settings(**overrides) -> SwapSettings:
    values = dict(
        rpc_url="http://localhost:8545",
        router_address=ROUTER,
        factory_address=FACTORY,
        init_code_hash=INIT_CODE_HASH,
        token_in=TokenSpec(address=HIGH_TOKEN, decimals=18, symbol="TKA"),
        token_out=TokenSpec(address=LOW_TOKEN, decimals=6, symbol="TKB"),
        amount_in=Decimal("1"),
        amount_out_min=Decimal("10"),
        wallet_address=WALLET,
        private_key=PRIVATE_KEY,
    )
    values.update(overrides)
    return SwapSettings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def chain():
    return FakeChainClient()


@pytest.fixture(autouse=True)
def _log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("V2SWAP_LOG_DIR", str(tmp_path / "logs"))


@pytest.fixture(autouse=True)
def _reset_cli_loggers():
    yield
    for name in ("v2swap", "trade_v2swap"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
