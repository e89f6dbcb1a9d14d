"""End-to-end pool lifecycle tests against the in-memory ledger."""

import threading

import pytest

from amm.engine import Engine
from amm.errors import PlatformPaused
from amm.ledger import InMemoryLedger
from amm.pools.types import PairKey
from tests.helpers import ADMIN, ALICE, BOB, MOJO, ONE_BILLION, SOL, TREASURY, USDC, fund, make_engine


def assert_custody_matches(engine: Engine, ledger: InMemoryLedger, asset_a: str, asset_b: str):
    """Pool account balances mirror the engine-tracked reserves."""
    pair = engine.get_pair(asset_a, asset_b)
    pool = pair.key.pool_account
    assert ledger.balance_of(pool, asset_a) == pair.reserve_a
    assert ledger.balance_of(pool, asset_b) == pair.reserve_b


class TestPoolLifecycle:
    """Configure, deposit, trade, pause and withdraw."""

    def test_full_lifecycle(self):
        engine, ledger = make_engine()
        fund(ledger, ALICE, MOJO=ONE_BILLION, USDC=ONE_BILLION)
        fund(ledger, BOB, MOJO=50_000_000, USDC=50_000_000)

        deposit = engine.add_liquidity(ALICE, MOJO, USDC, ONE_BILLION, ONE_BILLION)
        engine.swap(BOB, MOJO, USDC, 10_000_000, 0, True)
        engine.swap(BOB, MOJO, USDC, 5_000_000, 0, False)
        assert_custody_matches(engine, ledger, MOJO, USDC)

        engine.set_pause(ADMIN, True)
        with pytest.raises(PlatformPaused):
            engine.swap(BOB, MOJO, USDC, 1_000, 0, True)
        engine.set_pause(ADMIN, False)

        withdrawal = engine.remove_liquidity(ALICE, MOJO, USDC, deposit.shares)
        assert withdrawal.pair.is_empty
        assert ledger.balance_of(engine.get_pair(MOJO, USDC).key.pool_account, MOJO) == 0

        stats = engine.get_stats()
        assert stats.total_volume == 15_000_000
        assert stats.total_fees == ledger.balance_of(TREASURY, MOJO) + ledger.balance_of(
            TREASURY, USDC
        )

        # Every unit is accounted for across traders, provider and treasury
        for asset in (MOJO, USDC):
            total = sum(ledger.balance_of(account, asset) for account in (ALICE, BOB, TREASURY))
            assert total == ONE_BILLION + 50_000_000

    def test_reversed_pair_is_independent(self):
        engine, ledger = make_engine(pairs=[(MOJO, USDC), (USDC, MOJO)])
        fund(ledger, ALICE, MOJO=2_000, USDC=2_000)

        engine.add_liquidity(ALICE, MOJO, USDC, 1_000, 1_000)
        assert engine.get_pair(USDC, MOJO).is_empty
        assert engine.get_pair(MOJO, USDC).reserve_a == 1_000


class TestConcurrency:
    """Operations on one pair are serialized; pairs are independent."""

    def test_concurrent_swaps_keep_custody_consistent(self):
        engine, ledger = make_engine(pairs=[(MOJO, USDC), (MOJO, SOL)])
        fund(ledger, ALICE, MOJO=2 * ONE_BILLION, USDC=ONE_BILLION, SOL=ONE_BILLION)
        engine.add_liquidity(ALICE, MOJO, USDC, ONE_BILLION, ONE_BILLION)
        engine.add_liquidity(ALICE, MOJO, SOL, ONE_BILLION, ONE_BILLION)

        traders = [f"trader-{i}" for i in range(8)]
        for trader in traders:
            fund(ledger, trader, MOJO=10_000_000, USDC=10_000_000, SOL=10_000_000)

        errors: list[Exception] = []

        def trade(trader: str, index: int) -> None:
            asset_b = USDC if index % 2 == 0 else SOL
            try:
                for i in range(25):
                    engine.swap(trader, MOJO, asset_b, 100_000, 0, i % 2 == 0)
            except Exception as err:  # noqa: BLE001
                errors.append(err)

        threads = [threading.Thread(target=trade, args=(t, i)) for i, t in enumerate(traders)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert engine.get_stats().total_volume == 8 * 25 * 100_000
        assert_custody_matches(engine, ledger, MOJO, USDC)
        assert_custody_matches(engine, ledger, MOJO, SOL)
        assert ledger.shares_of(PairKey(MOJO, USDC), ALICE) == ONE_BILLION
