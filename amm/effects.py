"""Side-effect instructions produced by engine operations.

The core never moves balances itself. Each operation returns the list of
effects the ledger collaborator must execute together with the state commit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from amm.pools.types import PairKey


@dataclass(frozen=True)
class Transfer:
    """Move ``amount`` of ``asset`` from one account to another."""

    asset: str
    source: str
    destination: str
    amount: int


@dataclass(frozen=True)
class MintShares:
    """Credit ``amount`` liquidity shares of ``pair`` to ``owner``."""

    pair: PairKey
    owner: str
    amount: int


@dataclass(frozen=True)
class BurnShares:
    """Debit ``amount`` liquidity shares of ``pair`` from ``owner``."""

    pair: PairKey
    owner: str
    amount: int


Effect: TypeAlias = Transfer | MintShares | BurnShares


def transfers(*items: Transfer) -> list[Effect]:
    """Build an effect list, dropping zero-amount transfers."""
    return [t for t in items if t.amount > 0]


__all__ = ["Transfer", "MintShares", "BurnShares", "Effect", "transfers"]
