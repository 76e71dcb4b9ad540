"""
Configuration package for the swap tool.

Exchange presets, token defaults and ABIs. Runtime settings live in
``v2swap.config.settings``.
"""

from v2swap.config.contracts import (
    EXCHANGES,
    DEFAULT_EXCHANGE,
    get_exchange_config,
)

from v2swap.config.tokens import (
    TOKEN_CONFIG,
    DEFAULT_SWAP_CONFIG,
    TokenSpec,
    to_raw_amount,
    format_token_amount,
)

from v2swap.config.abis import (
    ERC20_ABI,
    UNISWAP_V2_PAIR_ABI,
    UNISWAP_V2_FACTORY_ABI,
)

__all__ = [
    # Contracts
    'EXCHANGES',
    'DEFAULT_EXCHANGE',
    'get_exchange_config',

    # Tokens
    'TOKEN_CONFIG',
    'DEFAULT_SWAP_CONFIG',
    'TokenSpec',
    'to_raw_amount',
    'format_token_amount',

    # ABIs
    'ERC20_ABI',
    'UNISWAP_V2_PAIR_ABI',
    'UNISWAP_V2_FACTORY_ABI',
]
