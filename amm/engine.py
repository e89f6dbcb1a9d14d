"""Pool engine that orchestrates platform gating, pricing and commits.

The Engine is the entry point for all operations. Each mutating operation
follows the same sequence for its pair:

1. resolve the Pair in the registry
2. gate on the platform (authorization, pause)
3. compute the new snapshot and its effects (LiquidityAccounting / SwapEngine)
4. hand the effects to the ledger, which executes all of them or raises
5. commit the new snapshot

Steps 1-5 run under the pair's lock, so two operations on the same pair
never interleave while different pairs proceed independently. Any error
before step 5 leaves both the registry and the ledger untouched.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from amm.errors import AmmError, Unauthorized
from amm.ledger import InMemoryLedger, Ledger
from amm.liquidity import LiquidityAccounting, LiquidityResult, liquidity_accounting
from amm.platform.config import Platform, PlatformConfig, PlatformStats
from amm.pools.registry import PoolRegistry
from amm.pools.types import Pair, PairKey
from amm.swap import SwapEngine, SwapResult, swap_engine

logger = structlog.get_logger()

# Authorization hook: (caller, operation name) -> allowed
Authorizer = Callable[[str, str], bool]


class Engine:
    """Constant-product pool engine.

    Args:
        platform: Platform configuration handle. If None, starts unconfigured.
        registry: Pair registry. If None, starts empty.
        ledger: Ledger executing effects. If None, uses an InMemoryLedger.
        authorize: Capability check supplied by the custody layer. If None,
                   every caller is allowed (set_pause still requires the admin).
        liquidity: Share accounting implementation (injectable for tests).
        swaps: Swap pricing implementation (injectable for tests).
    """

    def __init__(
        self,
        platform: Platform | None = None,
        registry: PoolRegistry | None = None,
        ledger: Ledger | None = None,
        authorize: Authorizer | None = None,
        liquidity: LiquidityAccounting | None = None,
        swaps: SwapEngine | None = None,
    ) -> None:
        self.platform = platform if platform is not None else Platform()
        self.registry = registry if registry is not None else PoolRegistry()
        self.ledger: Ledger = ledger if ledger is not None else InMemoryLedger()
        self.liquidity = liquidity if liquidity is not None else liquidity_accounting
        self.swaps = swaps if swaps is not None else swap_engine
        self._authorize = authorize
        self._stats = PlatformStats(pair_count=len(self.registry))
        self._stats_lock = threading.Lock()
        self._pair_locks: dict[PairKey, threading.Lock] = {}
        self._pair_locks_guard = threading.Lock()

    # --- Internals ---

    def _pair_lock(self, key: PairKey) -> threading.Lock:
        """Lock serializing operations on one existing pair.

        Raises:
            PairNotFound: If the pair does not exist (no lock is created)
        """
        # Pairs are never removed, so a key that exists now keeps its lock
        self.registry.lookup(key.asset_a, key.asset_b)
        with self._pair_locks_guard:
            lock = self._pair_locks.get(key)
            if lock is None:
                lock = self._pair_locks[key] = threading.Lock()
            return lock

    def _check_caller(self, caller: str, operation: str) -> None:
        if self._authorize is not None and not self._authorize(caller, operation):
            raise Unauthorized(f"{caller} is not authorized for {operation}")

    @contextmanager
    def _operation(self, operation: str, **context: Any) -> Iterator[None]:
        """Log rejected operations and re-raise."""
        try:
            yield
        except AmmError as err:
            logger.info(
                "operation_rejected",
                operation=operation,
                error=err.code,
                detail=str(err),
                **context,
            )
            raise

    # --- Platform ---

    def configure_platform(
        self,
        caller: str,
        fee_rate_bps: int,
        base_asset: str,
        fee_collector: str,
    ) -> PlatformConfig:
        """Create the platform configuration; the caller becomes admin.

        Raises:
            InvalidFeeRate: If fee_rate_bps is outside [0, 10000]
            AlreadyConfigured: If the platform is already configured
        """
        with self._operation("configure_platform", caller=caller):
            self._check_caller(caller, "configure_platform")
            return self.platform.configure(
                fee_rate_bps=fee_rate_bps,
                base_asset=base_asset,
                fee_collector=fee_collector,
                admin=caller,
            )

    def set_pause(self, caller: str, pause: bool) -> PlatformConfig:
        """Pause or resume trading and liquidity changes (admin only).

        Raises:
            Unauthorized: If caller is not the platform admin
        """
        with self._operation("set_pause", caller=caller, pause=pause):
            self._check_caller(caller, "set_pause")
            return self.platform.set_pause(caller, pause)

    def get_platform(self) -> PlatformConfig:
        """Current platform configuration.

        Raises:
            PlatformNotConfigured: If the platform is not configured yet
        """
        return self.platform.snapshot()

    def get_stats(self) -> PlatformStats:
        """Copy of the running platform totals."""
        with self._stats_lock:
            return PlatformStats(
                pair_count=self._stats.pair_count,
                total_volume=self._stats.total_volume,
                total_fees=self._stats.total_fees,
            )

    # --- Pairs ---

    def create_pair(self, caller: str, asset_a: str, asset_b: str) -> Pair:
        """Register an empty pair under the literal (asset_a, asset_b) key.

        Raises:
            InvalidPair: If asset_a == asset_b or an asset id contains ":"
            PairAlreadyExists: If the key is taken
        """
        with self._operation("create_pair", caller=caller, asset_a=asset_a, asset_b=asset_b):
            self._check_caller(caller, "create_pair")
            pair = self.registry.create_pair(asset_a, asset_b)

        with self._stats_lock:
            self._stats.pair_count += 1
        return pair

    def get_pair(self, asset_a: str, asset_b: str) -> Pair:
        """Current snapshot of a pair.

        Raises:
            PairNotFound: If the pair does not exist
        """
        return self.registry.lookup(asset_a, asset_b)

    # --- Liquidity ---

    def add_liquidity(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        amount_a: int,
        amount_b: int,
    ) -> LiquidityResult:
        """Deposit both assets and mint shares to the caller.

        Raises:
            PairNotFound: If the pair does not exist
            PlatformPaused: If the platform is paused
            ZeroAmount: If either amount is zero
            InsufficientLiquidityMinted: If no share would be minted
            InsufficientFunds: If the caller cannot cover the deposit
            ArithmeticOverflow: If reserves or supply would overflow
        """
        key = PairKey(asset_a, asset_b)
        with self._operation("add_liquidity", caller=caller, pair=str(key)):
            self._check_caller(caller, "add_liquidity")
            with self._pair_lock(key):
                pair = self.registry.lookup(asset_a, asset_b)
                self.platform.require_active()
                result = self.liquidity.add_liquidity(pair, amount_a, amount_b)
                self.ledger.execute(result.deposit_effects(caller))
                self.registry.replace(result.pair)

        logger.info(
            "liquidity_added",
            provider=caller,
            pair=str(key),
            amount_a=amount_a,
            amount_b=amount_b,
            shares_minted=result.shares,
            share_supply_total=result.pair.share_supply_total,
        )
        return result

    def remove_liquidity(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        share_amount: int,
        min_amount_a: int = 0,
        min_amount_b: int = 0,
    ) -> LiquidityResult:
        """Burn the caller's shares and pay out the proportional reserves.

        Raises:
            PairNotFound: If the pair does not exist
            PlatformPaused: If the platform is paused
            ZeroAmount: If share_amount is zero
            InsufficientShares: If the caller (or the pool) has fewer shares
            SlippageExceeded: If a payout is below its minimum
        """
        key = PairKey(asset_a, asset_b)
        with self._operation("remove_liquidity", caller=caller, pair=str(key)):
            self._check_caller(caller, "remove_liquidity")
            with self._pair_lock(key):
                pair = self.registry.lookup(asset_a, asset_b)
                self.platform.require_active()
                result = self.liquidity.remove_liquidity(
                    pair, share_amount, min_amount_a, min_amount_b
                )
                self.ledger.execute(result.withdrawal_effects(caller))
                self.registry.replace(result.pair)

        logger.info(
            "liquidity_removed",
            provider=caller,
            pair=str(key),
            shares_burned=share_amount,
            amount_a=result.amount_a,
            amount_b=result.amount_b,
        )
        return result

    # --- Swaps ---

    def quote(
        self,
        asset_a: str,
        asset_b: str,
        amount_in: int,
        input_is_asset_a: bool,
    ) -> SwapResult:
        """Price a swap at the current reserves without executing it.

        Raises:
            PairNotFound: If the pair does not exist
            PlatformNotConfigured: If there is no fee rate yet
            ZeroAmount: If amount_in is zero
            InsufficientLiquidity: If the pool cannot serve the trade
        """
        pair = self.registry.lookup(asset_a, asset_b)
        config = self.platform.snapshot()
        return self.swaps.quote(pair, amount_in, input_is_asset_a, config.protocol_fee_rate_bps)

    def swap(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        amount_in: int,
        min_amount_out: int,
        input_is_asset_a: bool,
    ) -> SwapResult:
        """Execute a single-hop swap against a pair.

        Raises:
            PairNotFound: If the pair does not exist
            PlatformPaused: If the platform is paused
            ZeroAmount: If amount_in is zero
            InsufficientLiquidity: If the pool cannot serve the trade
            SlippageExceeded: If the output is below min_amount_out
            InsufficientFunds: If the caller cannot cover amount_in
        """
        key = PairKey(asset_a, asset_b)
        with self._operation("swap", caller=caller, pair=str(key), amount_in=amount_in):
            self._check_caller(caller, "swap")
            with self._pair_lock(key):
                pair = self.registry.lookup(asset_a, asset_b)
                config = self.platform.require_active()
                result = self.swaps.swap(
                    pair,
                    amount_in,
                    min_amount_out,
                    input_is_asset_a,
                    config.protocol_fee_rate_bps,
                )
                self.ledger.execute(result.effects(caller, config.fee_collector))
                self.registry.replace(result.pair)

        with self._stats_lock:
            self._stats.total_volume += result.amount_in
            self._stats.total_fees += result.protocol_fee

        logger.info(
            "swap_executed",
            trader=caller,
            pair=str(key),
            asset_in=result.asset_in,
            amount_in=result.amount_in,
            protocol_fee=result.protocol_fee,
            amount_out=result.amount_out,
            reserve_a=result.pair.reserve_a,
            reserve_b=result.pair.reserve_b,
        )
        return result


# Process-wide default engine used by the API
_default_engine: Engine | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> Engine:
    """Get (creating on first use) the default in-memory engine.

    Returns:
        The shared Engine instance
    """
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = Engine()
            logger.info("default_engine_created", ledger=type(_default_engine.ledger).__name__)
        return _default_engine


__all__ = ["Authorizer", "Engine", "get_default_engine"]
