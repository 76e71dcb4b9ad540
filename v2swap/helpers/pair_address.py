"""
Deterministic Uniswap-V2 pair address derivation.

A V2 factory deploys each pair with CREATE2, salted by the keccak of the two
token addresses in canonical (ascending) order. The pair address is therefore

    keccak256(0xff ++ factory ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]

and can be computed offline from the factory, the two tokens and the
fork-specific init-code hash.
"""
from __future__ import annotations

from eth_typing import ChecksumAddress
from eth_utils import keccak, to_bytes, to_canonical_address, to_checksum_address
from eth_utils.exceptions import ValidationError

from v2swap.config.abis import UNISWAP_V2_FACTORY_ABI
from v2swap.errors import InitCodeHashDecodeError

__all__ = [
    "sort_tokens",
    "decode_init_code_hash",
    "compute_pair_address",
    "fetch_pair_from_factory",
]

CREATE2_PREFIX = b"\xff"


def sort_tokens(token_a: str, token_b: str) -> tuple[ChecksumAddress, ChecksumAddress]:
    """Order two token addresses ascending by their integer value."""
    a = to_checksum_address(token_a)
    b = to_checksum_address(token_b)
    if int(a, 16) > int(b, 16):
        a, b = b, a
    return a, b


def decode_init_code_hash(init_code_hash: str) -> bytes:
    """Decode a 32-byte hex literal (with or without 0x)."""
    try:
        decoded = to_bytes(hexstr=init_code_hash)
    except (ValueError, TypeError, ValidationError) as exc:
        raise InitCodeHashDecodeError(f"decode init code hash {init_code_hash!r}: {exc}") from exc
    if len(decoded) != 32:
        raise InitCodeHashDecodeError(
            f"init code hash must be 32 bytes, got {len(decoded)}: {init_code_hash!r}"
        )
    return decoded


def compute_pair_address(
    factory: str,
    token_a: str,
    token_b: str,
    init_code_hash: str,
) -> ChecksumAddress:
    """Return the pair address for (token_a, token_b) under *factory*.

    The result does not depend on argument order.
    """
    token0, token1 = sort_tokens(token_a, token_b)
    salt = keccak(to_canonical_address(token0) + to_canonical_address(token1))
    message = (
        CREATE2_PREFIX
        + to_canonical_address(factory)
        + salt
        + decode_init_code_hash(init_code_hash)
    )
    return to_checksum_address(keccak(message)[12:])


def fetch_pair_from_factory(client, factory: str, token_a: str, token_b: str) -> ChecksumAddress:
    """Ask the factory for the registered pair; the zero address means none."""
    (pair,) = client.call_contract_constant(
        to_checksum_address(factory),
        UNISWAP_V2_FACTORY_ABI,
        "getPair",
        to_checksum_address(token_a),
        to_checksum_address(token_b),
    )
    return to_checksum_address(pair)
