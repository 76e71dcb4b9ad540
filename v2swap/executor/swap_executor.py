"""
Single-swap executor.

Runs one tokenIn -> tokenOut swap through a V2 router:

    reserves before -> balance check -> allowance check -> [approve] ->
    swap -> reserves after

Each step either advances ``SwapState`` or aborts the whole run. Nothing is
retried and nothing already broadcast is compensated; the caller gets a
``SwapOutcome`` describing how far the run got.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from web3 import Web3

from v2swap.config.settings import SwapSettings
from v2swap.config.tokens import format_token_amount
from v2swap.errors import (
    ApprovalFailure,
    ConfirmationTimeout,
    InsufficientBalanceError,
    SwapError,
    TransactionReverted,
)
from v2swap.helpers.allowance import check_approved, submit_approval
from v2swap.helpers.chain_client import ChainClient
from v2swap.helpers.reserves import PoolReserves, query_pool_reserves
from v2swap.helpers.swap_tx import submit_swap

__all__ = ["SwapState", "SwapOutcome", "SwapExecutor"]

logger = logging.getLogger(__name__)

# One approval plus one swap
GAS_SAFETY_FACTOR = 2


class SwapState(str, Enum):
    IDLE = "idle"
    RESERVES_QUERIED_BEFORE = "reserves_queried_before"
    BALANCE_CHECKED = "balance_checked"
    APPROVAL_CHECKED = "approval_checked"
    APPROVING = "approving"
    APPROVED = "approved"
    SWAPPING = "swapping"
    SWAPPED = "swapped"
    RESERVES_QUERIED_AFTER = "reserves_queried_after"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class SwapOutcome:
    state: SwapState = SwapState.IDLE
    error: SwapError | None = None
    aborted_in: SwapState | None = None
    approval_tx_hash: str | None = None
    swap_tx_hash: str | None = None
    reserves_before: PoolReserves | None = None
    reserves_after: PoolReserves | None = None
    history: list[SwapState] = field(default_factory=lambda: [SwapState.IDLE])

    @property
    def ok(self) -> bool:
        return self.state is SwapState.DONE

    @property
    def swap_mined(self) -> bool:
        """The swap landed on chain, even if the reserve read after it failed."""
        return self.ok or self.aborted_in is SwapState.SWAPPED


class SwapExecutor:
    """Sequences the read / approve / swap calls for one run."""

    def __init__(self, settings: SwapSettings, client: ChainClient):
        self.settings = settings
        self.client = client
        self.outcome = SwapOutcome()

    @property
    def history(self) -> list[SwapState]:
        return self.outcome.history

    def _transition(self, state: SwapState) -> None:
        logger.debug("state %s -> %s", self.outcome.state.value, state.value)
        self.outcome.state = state
        self.outcome.history.append(state)

    def _gas_price(self) -> int:
        if self.settings.gas_price_wei is not None:
            return self.settings.gas_price_wei
        gas_price = self.client.suggest_gas_price()
        logger.info("suggested gasPrice is: %s", gas_price)
        return gas_price

    # ------------------------------------------------------------------ steps

    def check_balances(self, gas_price: int) -> None:
        """Abort unless the wallet holds the spend token and enough gas money."""
        s = self.settings
        eth_amount = self.client.balance(s.wallet_address)
        token_amount = self.client.token_balance(s.token_in.address, s.wallet_address)
        human_token_amount = format_token_amount(token_amount, s.token_in.decimals)

        if human_token_amount <= 0:
            raise InsufficientBalanceError(f"address {s.token_in} amount is: 0")
        if token_amount < s.amount_in_raw:
            raise InsufficientBalanceError(
                f"address {s.token_in} amount {human_token_amount:f} is below amount in {s.amount_in:f}"
            )

        required_fee = gas_price * s.gas_limit * GAS_SAFETY_FACTOR
        if eth_amount < required_fee:
            raise InsufficientBalanceError(
                f"eth balance {eth_amount} wei cannot cover fee {required_fee} wei"
            )

        logger.info(
            "address: %s eth amount is: %s, token amount is: %s",
            s.wallet_address,
            Web3.from_wei(eth_amount, "ether"),
            f"{human_token_amount:f}",
        )

    def run(self) -> SwapOutcome:
        s = self.settings
        outcome = self.outcome
        try:
            logger.info(">>>>>>>> before swap")
            outcome.reserves_before = query_pool_reserves(self.client, s)
            self._transition(SwapState.RESERVES_QUERIED_BEFORE)

            gas_price = self._gas_price()
            self.check_balances(gas_price)
            self._transition(SwapState.BALANCE_CHECKED)

            approved = check_approved(self.client, s.wallet_address, s.router_address, s.token_in.address)
            self._transition(SwapState.APPROVAL_CHECKED)
            if not approved:
                logger.info("router is not approved, approving...")
                self._transition(SwapState.APPROVING)
                outcome.approval_tx_hash = submit_approval(self.client, s, gas_price)
            self._transition(SwapState.APPROVED)

            logger.info(">>>>>>>> start swap")
            self._transition(SwapState.SWAPPING)
            outcome.swap_tx_hash = submit_swap(self.client, s, self._gas_price())
            self._transition(SwapState.SWAPPED)

            logger.info(">>>>>>>> after swap")
            outcome.reserves_after = query_pool_reserves(self.client, s)
            self._transition(SwapState.RESERVES_QUERIED_AFTER)
        except SwapError as exc:
            if outcome.state is SwapState.APPROVING and isinstance(exc, ApprovalFailure):
                outcome.approval_tx_hash = exc.tx_hash
            elif outcome.state is SwapState.SWAPPING and isinstance(exc, (ConfirmationTimeout, TransactionReverted)):
                outcome.swap_tx_hash = exc.tx_hash
            outcome.error = exc
            outcome.aborted_in = outcome.state
            logger.error("swap aborted in state %s: %s", outcome.state.value, exc)
            self._transition(SwapState.ABORTED)
            return outcome

        self._transition(SwapState.DONE)
        return outcome
