"""Pool reserve reads for a V2 pair."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from eth_typing import ChecksumAddress

from v2swap.config.abis import UNISWAP_V2_PAIR_ABI
from v2swap.config.tokens import format_token_amount
from v2swap.errors import RPCError
from v2swap.helpers.pair_address import compute_pair_address

__all__ = ["PoolReserves", "get_reserves", "resolve_reserves", "query_pool_reserves"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolReserves:
    """Pair reserves already mapped to (token in, token out) order."""
    pair_address: ChecksumAddress
    token_a_amount: int
    token_b_amount: int


def get_reserves(client, pair_address: ChecksumAddress) -> tuple[int, int]:
    """Return (reserve0, reserve1) as stored by the pair; blockTimestampLast is dropped."""
    result = client.call_contract_constant(pair_address, UNISWAP_V2_PAIR_ABI, "getReserves")
    if len(result) < 2:
        raise RPCError(f"getReserves on {pair_address} returned {result!r}")
    return int(result[0]), int(result[1])


def resolve_reserves(token_a: str, token_b: str, reserve0: int, reserve1: int) -> tuple[int, int]:
    """Map pair-ordered reserves onto (token_a, token_b).

    The pair stores the numerically smaller token first.
    """
    if int(token_a, 16) > int(token_b, 16):
        return reserve1, reserve0
    return reserve0, reserve1


def query_pool_reserves(client, settings) -> PoolReserves:
    token_a, token_b = settings.token_in, settings.token_out
    pair_address = compute_pair_address(
        settings.factory_address, token_a.address, token_b.address, settings.init_code_hash
    )
    reserve0, reserve1 = get_reserves(client, pair_address)
    amount_a, amount_b = resolve_reserves(token_a.address, token_b.address, reserve0, reserve1)

    logger.info(
        "in liquid pool %s %s amount is: %s, %s amount is: %s",
        pair_address,
        token_a,
        f"{format_token_amount(amount_a, token_a.decimals):f}",
        token_b,
        f"{format_token_amount(amount_b, token_b.decimals):f}",
    )
    return PoolReserves(pair_address=pair_address, token_a_amount=amount_a, token_b_amount=amount_b)
