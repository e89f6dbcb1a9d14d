"""Test helpers module for shared test utilities.

- constants: Asset names, accounts and common amounts
- factories: Pair and engine factory functions
"""

from tests.helpers.constants import (
    ADMIN,
    ALICE,
    BOB,
    FEE_RATE_BPS,
    MALLORY,
    MOJO,
    ONE_BILLION,
    SOL,
    TREASURY,
    USDC,
)
from tests.helpers.factories import fund, make_engine, make_pair

__all__ = [
    # Constants
    "ADMIN",
    "ALICE",
    "BOB",
    "FEE_RATE_BPS",
    "MALLORY",
    "MOJO",
    "ONE_BILLION",
    "SOL",
    "TREASURY",
    "USDC",
    # Factories
    "fund",
    "make_engine",
    "make_pair",
]
