import pytest

from v2swap.config.tokens import TokenSpec
from v2swap.errors import RPCError
from v2swap.helpers.pair_address import compute_pair_address
from v2swap.helpers.reserves import get_reserves, query_pool_reserves, resolve_reserves

from conftest import FACTORY, FakeChainClient, HIGH_TOKEN, INIT_CODE_HASH, LOW_TOKEN, make_settings


def test_resolve_reserves_swaps_when_token_a_is_higher():
    assert resolve_reserves(HIGH_TOKEN, LOW_TOKEN, 100, 200) == (200, 100)


def test_resolve_reserves_direct_when_token_a_is_lower():
    assert resolve_reserves(LOW_TOKEN, HIGH_TOKEN, 100, 200) == (100, 200)


def test_get_reserves_drops_timestamp():
    chain = FakeChainClient(reserves=(5, 6))
    assert get_reserves(chain, "0x0000000000000000000000000000000000000001") == (5, 6)


def test_get_reserves_surfaces_read_failure():
    chain = FakeChainClient()
    chain.fail_reads.add("getReserves")
    with pytest.raises(RPCError):
        get_reserves(chain, "0x0000000000000000000000000000000000000001")


def test_query_pool_reserves_resolves_order_for_higher_token_in():
    settings = make_settings()
    chain = FakeChainClient(reserves=(100, 200))

    reserves = query_pool_reserves(chain, settings)

    assert reserves.pair_address == compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, INIT_CODE_HASH)
    assert reserves.token_a_amount == 200
    assert reserves.token_b_amount == 100


def test_query_pool_reserves_direct_for_lower_token_in():
    settings = make_settings(
        token_in=TokenSpec(address=LOW_TOKEN, decimals=6, symbol="TKB"),
        token_out=TokenSpec(address=HIGH_TOKEN, decimals=18, symbol="TKA"),
    )
    reserves = query_pool_reserves(FakeChainClient(reserves=(100, 200)), settings)

    assert (reserves.token_a_amount, reserves.token_b_amount) == (100, 200)
