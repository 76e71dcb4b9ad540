"""Uniswap-V2 style pair address derivation and single-path token swaps."""

__version__ = "0.1.0"
