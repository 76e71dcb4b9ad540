"""
Contract ABI package.

Contains the contract ABIs organized by protocol/type.
"""

from .erc20 import ERC20_ABI
from .uniswap_v2 import (
    UNISWAP_V2_PAIR_ABI,
    UNISWAP_V2_FACTORY_ABI,
    SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR,
    SWAP_EXACT_TOKENS_FOR_TOKENS_ARG_TYPES,
)

__all__ = [
    # ERC20
    'ERC20_ABI',

    # Uniswap V2
    'UNISWAP_V2_PAIR_ABI',
    'UNISWAP_V2_FACTORY_ABI',
    'SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR',
    'SWAP_EXACT_TOKENS_FOR_TOKENS_ARG_TYPES',
]
