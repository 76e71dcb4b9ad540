"""
Thin blocking wrapper around a Web3 instance.

Everything the swap path needs from the chain goes through ``ChainClient``:
balances, constant calls, nonce and gas price reads, building + signing
transactions, broadcasting and waiting for receipts. Transport and node
errors are translated into the tool's own exceptions so callers never see
raw web3 / requests errors.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests
from eth_account import Account
from eth_typing import ChecksumAddress
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception

from v2swap.config.abis import ERC20_ABI
from v2swap.errors import (
    BroadcastFailure,
    ConfirmationTimeout,
    RPCError,
    SwapBuildFailure,
)
from v2swap.helpers.web3_setup import get_web3_instance

__all__ = ["CallMethodOpts", "SignedTx", "ChainClient"]

logger = logging.getLogger(__name__)

# Errors a node round-trip can raise: web3 wraps most, requests the transport
_NODE_ERRORS = (Web3Exception, requests.RequestException, ValueError)


@dataclass(frozen=True)
class CallMethodOpts:
    nonce: int
    gas_price: int
    gas_limit: int


@dataclass(frozen=True)
class SignedTx:
    tx_hex: str
    tx_hash: str


class ChainClient:
    """Blocking chain access for a single account."""

    def __init__(self, w3: Web3, rpc_timeout: float = 5.0):
        self.w3 = w3
        self.rpc_timeout = rpc_timeout
        self._chain_id: int | None = None

    @classmethod
    def from_rpc_url(cls, rpc_url: str, rpc_timeout: float = 5.0) -> "ChainClient":
        return cls(get_web3_instance(rpc_url, timeout=rpc_timeout), rpc_timeout=rpc_timeout)

    # ------------------------------ reads ------------------------------------

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            try:
                self._chain_id = int(self.w3.eth.chain_id)
            except _NODE_ERRORS as exc:
                raise RPCError(f"get chain id: {exc}") from exc
        return self._chain_id

    def balance(self, address: ChecksumAddress) -> int:
        """Native currency balance in wei."""
        try:
            return int(self.w3.eth.get_balance(address))
        except _NODE_ERRORS as exc:
            raise RPCError(f"get eth balance: {exc}") from exc

    def token_balance(self, token: ChecksumAddress, address: ChecksumAddress) -> int:
        """ERC20 balance of *address* in the token's raw units."""
        (amount,) = self.call_contract_constant(token, ERC20_ABI, "balanceOf", address)
        return int(amount)

    def nonce_at(self, address: ChecksumAddress) -> int:
        """Current transaction count of *address*, bounded by the provider timeout."""
        try:
            return int(self.w3.eth.get_transaction_count(address))
        except _NODE_ERRORS as exc:
            raise RPCError(f"get nonce: {exc}") from exc

    def suggest_gas_price(self) -> int:
        try:
            return int(self.w3.eth.gas_price)
        except _NODE_ERRORS as exc:
            raise RPCError(f"suggest gas price: {exc}") from exc

    def call_contract_constant(
        self,
        address: ChecksumAddress,
        abi: list[dict[str, Any]],
        method: str,
        *args: Any,
    ) -> list[Any]:
        """Run a read-only contract call and return its outputs as a list."""
        try:
            contract = self.w3.eth.contract(address=address, abi=abi)
            result = getattr(contract.functions, method)(*args).call()
        except _NODE_ERRORS as exc:
            raise RPCError(f"call {method} on {address}: {exc}") from exc
        if isinstance(result, (list, tuple)):
            return list(result)
        return [result]

    # ------------------------------ writes -----------------------------------

    def build_call_method_tx(
        self,
        private_key: str,
        address: ChecksumAddress,
        abi: list[dict[str, Any]],
        method: str,
        opts: CallMethodOpts,
        *args: Any,
    ) -> SignedTx:
        """Encode ``method(*args)`` against *abi* and sign it."""
        try:
            contract = self.w3.eth.contract(address=address, abi=abi)
            payload = getattr(contract.functions, method)(*args)._encode_transaction_data()
        except (Web3Exception, ValueError, TypeError) as exc:
            raise SwapBuildFailure(f"encode {method}: {exc}") from exc
        return self.build_call_method_tx_with_payload(private_key, address, payload, opts)

    def build_call_method_tx_with_payload(
        self,
        private_key: str,
        address: ChecksumAddress,
        payload: str,
        opts: CallMethodOpts,
    ) -> SignedTx:
        """Sign a legacy transaction carrying pre-encoded calldata."""
        tx = {
            "to": address,
            "data": payload,
            "value": 0,
            "nonce": opts.nonce,
            "gasPrice": opts.gas_price,
            "gas": opts.gas_limit,
            "chainId": self.chain_id,
        }
        try:
            signed = Account.sign_transaction(tx, private_key)
        except (ValueError, TypeError) as exc:
            raise SwapBuildFailure(f"sign transaction: {exc}") from exc
        return SignedTx(tx_hex=Web3.to_hex(signed.raw_transaction), tx_hash=Web3.to_hex(signed.hash))

    def send_raw_transaction(self, tx_hex: str) -> str:
        try:
            tx_hash = self.w3.eth.send_raw_transaction(tx_hex)
        except _NODE_ERRORS as exc:
            raise BroadcastFailure(f"send raw transaction: {exc}") from exc
        return Web3.to_hex(tx_hash)

    def wait_confirm(
        self,
        tx_hash: str,
        poll_interval: float = 1.0,
        timeout: float | None = None,
    ) -> Any:
        """Wait until *tx_hash* is mined and return its receipt.

        Raises ConfirmationTimeout once *timeout* seconds have passed; with
        ``timeout=None`` the wait is unbounded.
        """
        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=float("inf") if timeout is None else timeout,
                poll_latency=poll_interval,
            )
        except TimeExhausted as exc:
            raise ConfirmationTimeout(tx_hash, timeout) from exc
        except _NODE_ERRORS as exc:
            raise BroadcastFailure(f"get receipt of {tx_hash}: {exc}") from exc

        logger.debug("%s mined in block %s", tx_hash, receipt["blockNumber"])
        return receipt
