"""CLI for pair lookup, reserve queries and a single swap.

Usage:
    # Derived pair address (optionally cross-checked against factory.getPair)
    python -m v2swap pair --verify

    # Current pool reserves in token-in / token-out order
    python -m v2swap reserves

    # Run the swap (default command)
    python -m v2swap swap --amount 100 --min-out 0 --confirm-timeout 300

All addresses, amounts and the private key come from the environment (or a
.env file); see v2swap.config.settings for the variable names.
"""

import argparse
import dataclasses
import sys

from dotenv import find_dotenv, load_dotenv
from web3 import Web3

from v2swap.config.logging_config import get_package_logger, log_swap, setup_trade_logger
from v2swap.config.settings import SwapSettings, parse_decimal, parse_float
from v2swap.config.tokens import format_token_amount
from v2swap.errors import ConfigError, SwapError
from v2swap.executor.swap_executor import SwapExecutor
from v2swap.helpers.chain_client import ChainClient
from v2swap.helpers.pair_address import compute_pair_address, fetch_pair_from_factory
from v2swap.helpers.reserves import query_pool_reserves

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _apply_overrides(settings: SwapSettings, args) -> SwapSettings:
    """Fold swap options into *settings*, validated like their env variables."""
    overrides = {}
    if getattr(args, "amount", None) is not None:
        overrides["amount_in"] = parse_decimal(args.amount, "--amount")
    if getattr(args, "min_out", None) is not None:
        overrides["amount_out_min"] = parse_decimal(args.min_out, "--min-out")
    if getattr(args, "gas_price_gwei", None) is not None:
        overrides["gas_price_wei"] = Web3.to_wei(parse_decimal(args.gas_price_gwei, "--gas-price-gwei"), "gwei")
    if getattr(args, "confirm_timeout", None) is not None:
        overrides["confirm_timeout"] = parse_float(args.confirm_timeout, "--confirm-timeout") or None
    return dataclasses.replace(settings, **overrides) if overrides else settings


def cmd_pair(settings: SwapSettings, client_factory, args) -> int:
    """Print the derived pair address."""
    pair = compute_pair_address(
        settings.factory_address,
        settings.token_in.address,
        settings.token_out.address,
        settings.init_code_hash,
    )
    print(f"Pair {settings.token_in}/{settings.token_out}: {pair}")

    if args.verify:
        registered = fetch_pair_from_factory(
            client_factory(), settings.factory_address, settings.token_in.address, settings.token_out.address
        )
        if int(registered, 16) == 0:
            print("Factory has no pair for these tokens")
            return EXIT_FAILED
        if registered != pair:
            print(f"Factory reports a different pair: {registered}")
            return EXIT_FAILED
        print("Factory getPair matches")
    return EXIT_OK


def cmd_reserves(settings: SwapSettings, client_factory, args) -> int:
    """Print the pool reserves in token-in / token-out order."""
    reserves = query_pool_reserves(client_factory(), settings)
    amount_a = format_token_amount(reserves.token_a_amount, settings.token_in.decimals)
    amount_b = format_token_amount(reserves.token_b_amount, settings.token_out.decimals)
    print(f"Pair: {reserves.pair_address}")
    print(f"{settings.token_in}: {amount_a:f}")
    print(f"{settings.token_out}: {amount_b:f}")
    return EXIT_OK


def cmd_swap(settings: SwapSettings, client_factory, args) -> int:
    """Run the full swap sequence."""
    outcome = SwapExecutor(settings, client_factory()).run()

    log_swap(
        setup_trade_logger("v2swap"),
        token_in=str(settings.token_in),
        token_out=str(settings.token_out),
        amount_in=settings.amount_in,
        amount_out_min=settings.amount_out_min,
        tx_hash=outcome.swap_tx_hash,
        success=outcome.swap_mined,
        reason=str(outcome.error) if outcome.error else None,
    )

    if outcome.approval_tx_hash:
        print(f"Approval tx: {outcome.approval_tx_hash}")
    if outcome.swap_tx_hash:
        print(f"Swap tx: {outcome.swap_tx_hash}")
    if not outcome.ok:
        print(f"Swap aborted in state {outcome.aborted_in.value}: {outcome.error}")
        return EXIT_FAILED
    print("Swap done")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="v2swap",
        description="Derive a V2 pair address and swap token in for token out",
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: ./.env)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command")

    pair = subparsers.add_parser("pair", help="Print the derived pair address")
    pair.add_argument("--verify", action="store_true", help="Cross-check with factory.getPair")
    pair.set_defaults(func=cmd_pair)

    reserves = subparsers.add_parser("reserves", help="Print current pool reserves")
    reserves.set_defaults(func=cmd_reserves)

    swap = subparsers.add_parser("swap", help="Run the swap (default)")
    swap.add_argument("--amount", help="Token-in amount (human readable)")
    swap.add_argument("--min-out", help="Minimum token-out amount; 0 accepts any price")
    swap.add_argument("--gas-price-gwei", help="Fixed gas price instead of the suggested one")
    swap.add_argument(
        "--confirm-timeout",
        help="Seconds to wait for each confirmation; 0 waits forever",
    )
    swap.set_defaults(func=cmd_swap)

    return parser


def main(argv=None, client_factory=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args([*(argv if argv is not None else sys.argv[1:]), "swap"])

    load_dotenv(args.env_file or find_dotenv(usecwd=True))
    get_package_logger(debug=args.debug)

    try:
        settings = _apply_overrides(SwapSettings.from_env(), args)
    except ConfigError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG

    if client_factory is None:
        def client_factory():
            return ChainClient.from_rpc_url(settings.rpc_url, settings.rpc_timeout)

    try:
        return args.func(settings, client_factory, args)
    except SwapError as e:
        print(f"Error: {e}")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
