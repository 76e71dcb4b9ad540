"""
Token configurations and decimal shifting helpers.

On-chain amounts are always integers; human-readable amounts are the integer
divided by ``10 ** decimals``.
"""

from dataclasses import dataclass
from decimal import Decimal, localcontext

from eth_typing import ChecksumAddress

# Default token pair: spend Dai, receive the target token (Rinkeby)
TOKEN_CONFIG = {
    "token_in": {
        "name": "Dai Stablecoin",
        "symbol": "DAI",
        "address": "0xc7ad46e0b8a400bb3c915120d284aafba8fc4735",
        "decimals": 18,
    },
    "token_out": {
        "name": "Target Token",
        "symbol": "TKN",
        "address": "0xd1822505796c4eba9379d5a8b4141573444042c6",
        "decimals": 18,
    },
}

# Default swap configuration (human-readable amounts)
DEFAULT_SWAP_CONFIG = {
    "amount_in": Decimal("1000000"),
    # Zero means unlimited slippage
    "amount_out_min": Decimal("10"),
}

# Wide enough for any uint256 at any decimals a token can declare
_PRECISION = 100


@dataclass(frozen=True)
class TokenSpec:
    address: ChecksumAddress
    decimals: int
    symbol: str = ""

    def __str__(self) -> str:
        return self.symbol or self.address


def to_raw_amount(amount: Decimal | int | str, decimals: int) -> int:
    """Shift a human-readable amount up to its on-chain integer value.

    Fractions below the token's smallest unit are truncated.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return int(Decimal(amount).scaleb(decimals))


def format_token_amount(amount: int, decimals: int) -> Decimal:
    """Shift an on-chain integer amount down to its human-readable value."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(amount).scaleb(-decimals)
