import pytest
from eth_utils import to_checksum_address

from v2swap.errors import ConfigError, InitCodeHashDecodeError
from v2swap.helpers.pair_address import (
    compute_pair_address,
    decode_init_code_hash,
    fetch_pair_from_factory,
    sort_tokens,
)

from conftest import FACTORY, FakeChainClient, HIGH_TOKEN, INIT_CODE_HASH, LOW_TOKEN

UNISWAP_FACTORY = "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"


def test_known_mainnet_pairs():
    assert compute_pair_address(UNISWAP_FACTORY, WETH, USDC, INIT_CODE_HASH).lower() == (
        "0xb4e16d0168e52d35cacd2c6185b44281ec28c9dc"
    )
    assert compute_pair_address(UNISWAP_FACTORY, DAI, WETH, INIT_CODE_HASH).lower() == (
        "0xa478c2975ab1ea89e8196811f51a7b7ade33eb11"
    )


def test_accepts_0x_prefixed_init_code_hash():
    assert compute_pair_address(UNISWAP_FACTORY, WETH, USDC, "0x" + INIT_CODE_HASH) == compute_pair_address(
        UNISWAP_FACTORY, WETH, USDC, INIT_CODE_HASH
    )


def test_order_independent():
    assert compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, INIT_CODE_HASH) == compute_pair_address(
        FACTORY, LOW_TOKEN, HIGH_TOKEN, INIT_CODE_HASH
    )


def test_result_is_20_byte_checksum_address():
    pair = compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, INIT_CODE_HASH)
    assert pair == to_checksum_address(pair)
    assert len(bytes.fromhex(pair[2:])) == 20


def test_any_input_change_changes_address():
    base = compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, INIT_CODE_HASH)
    other_factory = FACTORY[:-1] + ("d" if FACTORY[-1].lower() != "d" else "e")
    other_token = LOW_TOKEN[:-1] + "2"
    other_hash = INIT_CODE_HASH[:-1] + "e"

    assert compute_pair_address(other_factory, HIGH_TOKEN, LOW_TOKEN, INIT_CODE_HASH) != base
    assert compute_pair_address(FACTORY, HIGH_TOKEN, other_token, INIT_CODE_HASH) != base
    assert compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, other_hash) != base


def test_sort_tokens_numeric_order():
    assert sort_tokens(HIGH_TOKEN, LOW_TOKEN) == (LOW_TOKEN, HIGH_TOKEN)
    assert sort_tokens(LOW_TOKEN, HIGH_TOKEN) == (LOW_TOKEN, HIGH_TOKEN)


@pytest.mark.parametrize("bad", ["zz" * 32, "96e8ac42", "", INIT_CODE_HASH + "00"])
def test_bad_init_code_hash_raises_decode_error(bad):
    with pytest.raises(InitCodeHashDecodeError):
        compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, bad)


def test_decode_error_is_config_error():
    with pytest.raises(ConfigError):
        decode_init_code_hash("not hex")


def test_fetch_pair_from_factory():
    expected = compute_pair_address(FACTORY, HIGH_TOKEN, LOW_TOKEN, INIT_CODE_HASH)
    chain = FakeChainClient(pair=expected.lower())

    assert fetch_pair_from_factory(chain, FACTORY, HIGH_TOKEN, LOW_TOKEN) == expected
    assert chain.calls == ["getPair"]
