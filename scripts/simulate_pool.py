#!/usr/bin/env python3
"""Run a pool lifecycle against an in-memory engine and print the state.

Usage:
    # Default scenario: 1e9/1e9 pool, 2.5% protocol fee, one 1e7 swap
    python scripts/simulate_pool.py

    # Custom reserves, fee and trades
    python scripts/simulate_pool.py --deposit 5000000 2000000 --fee-bps 30 \\
        --swap 100000 --swap 250000 --reverse
"""

import argparse
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from amm.engine import Engine  # noqa: E402
from amm.errors import AmmError  # noqa: E402
from amm.ledger import InMemoryLedger  # noqa: E402
from amm.logging_config import configure_logging  # noqa: E402
from amm.pools.types import Pair  # noqa: E402

logger = structlog.get_logger()

ADMIN = "admin"
PROVIDER = "provider"
TRADER = "trader"
TREASURY = "treasury"


def print_pair(label: str, pair: Pair) -> None:
    print(
        f"{label:<12} reserve_a={pair.reserve_a:>14} reserve_b={pair.reserve_b:>14} "
        f"shares={pair.share_supply_total:>14}"
    )


def simulate(args: argparse.Namespace) -> int:
    ledger = InMemoryLedger()
    engine = Engine(ledger=ledger)
    amount_a, amount_b = args.deposit

    engine.configure_platform(ADMIN, args.fee_bps, args.asset_a, TREASURY)
    engine.create_pair(ADMIN, args.asset_a, args.asset_b)

    ledger.credit(PROVIDER, args.asset_a, amount_a)
    ledger.credit(PROVIDER, args.asset_b, amount_b)
    deposit = engine.add_liquidity(PROVIDER, args.asset_a, args.asset_b, amount_a, amount_b)
    print_pair("deposit", deposit.pair)

    input_is_asset_a = not args.reverse
    asset_in = args.asset_a if input_is_asset_a else args.asset_b
    for amount_in in args.swap:
        ledger.credit(TRADER, asset_in, amount_in)
        try:
            result = engine.swap(TRADER, args.asset_a, args.asset_b, amount_in, 0, input_is_asset_a)
        except AmmError as err:
            print(f"swap {amount_in} rejected: {err.code} ({err})")
            continue
        print(
            f"swap {amount_in}: fee={result.protocol_fee} net={result.amount_in_net} "
            f"out={result.amount_out}"
        )
        print_pair("after swap", result.pair)

    if not args.keep_liquidity:
        withdrawal = engine.remove_liquidity(
            PROVIDER, args.asset_a, args.asset_b, deposit.shares
        )
        print(f"withdrawn: amount_a={withdrawal.amount_a} amount_b={withdrawal.amount_b}")
        print_pair("final", withdrawal.pair)

    stats = engine.get_stats()
    print(
        f"stats: pairs={stats.pair_count} volume={stats.total_volume} fees={stats.total_fees} "
        f"treasury={ledger.balance_of(TREASURY, asset_in)}"
    )
    return 0


def main() -> int:
    """Main entry point for the pool simulation."""
    parser = argparse.ArgumentParser(
        description="Simulate a constant-product pool lifecycle in memory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--asset-a", default="MOJO", help="First pooled asset (default: MOJO)")
    parser.add_argument("--asset-b", default="USDC", help="Second pooled asset (default: USDC)")
    parser.add_argument(
        "--deposit",
        type=int,
        nargs=2,
        metavar=("AMOUNT_A", "AMOUNT_B"),
        default=[1_000_000_000, 1_000_000_000],
        help="Initial deposit (default: 1e9 1e9)",
    )
    parser.add_argument(
        "--fee-bps",
        type=int,
        default=250,
        help="Protocol fee rate in basis points (default: 250)",
    )
    parser.add_argument(
        "--swap",
        type=int,
        action="append",
        help="Swap input amount; repeat for several swaps (default: 10000000)",
    )
    parser.add_argument(
        "--reverse",
        action="store_true",
        help="Sell asset B for asset A instead",
    )
    parser.add_argument(
        "--keep-liquidity",
        action="store_true",
        help="Skip the final withdrawal",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()
    if args.swap is None:
        args.swap = [10_000_000]

    configure_logging("DEBUG" if args.verbose else "INFO")

    try:
        return simulate(args)
    except AmmError as err:
        logger.error("simulation_failed", error=err.code, detail=str(err))
        return 1


if __name__ == "__main__":
    sys.exit(main())
