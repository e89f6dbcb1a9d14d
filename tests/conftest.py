"""Pytest configuration and fixtures."""

import pytest

from amm.engine import Engine
from amm.ledger import InMemoryLedger
from amm.pools.types import Pair
from tests.helpers import ALICE, MOJO, ONE_BILLION, USDC, fund, make_engine, make_pair


@pytest.fixture
def empty_pair() -> Pair:
    """An empty MOJO/USDC pair."""
    return make_pair()


@pytest.fixture
def balanced_pair() -> Pair:
    """A MOJO/USDC pair with 1e9 of each asset and 1e9 shares."""
    return make_pair(
        reserve_a=ONE_BILLION,
        reserve_b=ONE_BILLION,
        share_supply_total=ONE_BILLION,
    )


@pytest.fixture
def engine_and_ledger() -> tuple[Engine, InMemoryLedger]:
    """Configured engine (2.5% fee) with an empty MOJO/USDC pair."""
    return make_engine()


@pytest.fixture
def engine(engine_and_ledger: tuple[Engine, InMemoryLedger]) -> Engine:
    return engine_and_ledger[0]


@pytest.fixture
def ledger(engine_and_ledger: tuple[Engine, InMemoryLedger]) -> InMemoryLedger:
    return engine_and_ledger[1]


@pytest.fixture
def seeded_engine(engine: Engine, ledger: InMemoryLedger) -> Engine:
    """Engine whose MOJO/USDC pair holds 1e9/1e9, all shares owned by ALICE."""
    fund(ledger, ALICE, MOJO=ONE_BILLION, USDC=ONE_BILLION)
    engine.add_liquidity(ALICE, MOJO, USDC, ONE_BILLION, ONE_BILLION)
    return engine
