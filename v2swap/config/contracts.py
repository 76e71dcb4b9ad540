"""
Contract addresses for the supported Uniswap-V2 style exchanges.

Each preset bundles the router, the factory, the wrapped-native token and the
pair init-code hash. The init-code hash is the keccak of the pair contract
creation bytecode and differs per fork, so it travels with the factory.
"""

from typing import Any

# Mainnet addresses unless noted otherwise; checksummed when settings load
EXCHANGES: dict[str, dict[str, Any]] = {
    "uniswap_v2": {
        "name": "Uniswap V2",
        "router": "0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
        "factory": "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
        # Rinkeby WETH; not part of the swap path
        "weth": "0xc778417e063141139fce010982780140aa0cd5ab",
        "init_code_hash": "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f",
    },
    "sushiswap": {
        "name": "SushiSwap",
        "router": "0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f",
        "factory": "0xc0aee478e3658e2610c5f7a4a2e1777ce9e4f2ac",
        "weth": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
        "init_code_hash": "0xe18a34eb0e04b04f7a0ac29a6e80748dca96319b42c520a3da8cb7d8a1d8b4e1",
    },
}

DEFAULT_EXCHANGE = "uniswap_v2"


def get_exchange_config(exchange: str | None = None) -> dict[str, Any]:
    """Get the contract preset for an exchange.

    Args:
        exchange: Preset name (e.g., 'uniswap_v2', 'sushiswap').
                  If None, uses DEFAULT_EXCHANGE.

    Returns:
        Exchange configuration dictionary.

    Raises:
        ValueError: If the exchange is not supported.
    """
    exchange = (exchange or DEFAULT_EXCHANGE).lower()
    if exchange not in EXCHANGES:
        raise ValueError(f"Unsupported exchange: {exchange}. Supported: {list(EXCHANGES.keys())}")
    return EXCHANGES[exchange]
