"""
swapExactTokensForTokens calldata and submission.

The router call is encoded by hand (fixed selector + ABI-encoded arguments)
rather than through a contract object, so the exact bytes sent are visible
and testable.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError

from v2swap.config.abis import (
    SWAP_EXACT_TOKENS_FOR_TOKENS_ARG_TYPES,
    SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR,
)
from v2swap.errors import SwapBuildFailure, TransactionReverted
from v2swap.helpers.chain_client import CallMethodOpts

__all__ = [
    "swap_deadline",
    "encode_swap_exact_tokens_for_tokens",
    "submit_swap",
]

logger = logging.getLogger(__name__)


def swap_deadline(seconds: int = 600) -> int:
    """Return a unix timestamp ``seconds`` in the future."""

    return int(time.time()) + seconds


def encode_swap_exact_tokens_for_tokens(
    amount_in: int,
    amount_out_min: int,
    path: Sequence[str],
    to: str,
    deadline: int,
) -> str:
    try:
        params = encode(
            SWAP_EXACT_TOKENS_FOR_TOKENS_ARG_TYPES,
            [int(amount_in), int(amount_out_min), list(path), to, int(deadline)],
        )
    except (EncodingError, TypeError, ValueError) as exc:
        raise SwapBuildFailure(f"packed params: {exc}") from exc
    return SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR + params.hex()


def submit_swap(client, settings, gas_price: int) -> str:
    """Sign, broadcast and confirm the swap. Returns the swap tx hash."""
    nonce = client.nonce_at(settings.wallet_address)
    logger.info("start swap, current nonce: %s", nonce)

    payload = encode_swap_exact_tokens_for_tokens(
        settings.amount_in_raw,
        settings.amount_out_min_raw,
        settings.swap_path,
        settings.wallet_address,
        swap_deadline(settings.deadline_seconds),
    )
    opts = CallMethodOpts(nonce=nonce, gas_price=gas_price, gas_limit=settings.gas_limit)
    tx = client.build_call_method_tx_with_payload(settings.private_key, settings.router_address, payload, opts)

    tx_hash = client.send_raw_transaction(tx.tx_hex)
    logger.info("swap tx sent: %s", tx_hash)

    receipt = client.wait_confirm(tx_hash, settings.poll_interval, settings.confirm_timeout)
    if receipt["status"] != 1:
        raise TransactionReverted(tx_hash)
    logger.info("swap transaction is packed, tx hash: %s", tx_hash)
    return tx_hash
