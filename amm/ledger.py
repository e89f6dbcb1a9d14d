"""Ledger collaborator interface and an in-memory reference ledger.

The engine hands each operation's effect list to a Ledger. A ledger must
execute the whole list or nothing: if any effect cannot be applied it raises
(InsufficientFunds / InsufficientShares) and leaves every balance as it was.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import structlog

from amm.effects import BurnShares, Effect, MintShares, Transfer
from amm.errors import InsufficientFunds, InsufficientShares
from amm.pools.types import PairKey

logger = structlog.get_logger()


@runtime_checkable
class Ledger(Protocol):
    """Protocol for the balance ledger that executes engine effects."""

    def execute(self, effects: Sequence[Effect]) -> None:
        """Apply all effects atomically.

        Args:
            effects: Effects in the order the engine produced them

        Raises:
            InsufficientFunds: If a transfer source lacks the asset
            InsufficientShares: If a burn exceeds the owner's shares
        """
        ...


class InMemoryLedger:
    """Reference ledger keeping balances and share holdings in dictionaries.

    Pool custody accounts are ordinary accounts (see PairKey.pool_account),
    so a pool paying out more than it holds is reported as InsufficientFunds.
    """

    def __init__(self) -> None:
        self._balances: defaultdict[tuple[str, str], int] = defaultdict(int)
        self._shares: defaultdict[tuple[PairKey, str], int] = defaultdict(int)
        self._lock = threading.Lock()

    def credit(self, account: str, asset: str, amount: int) -> None:
        """Fund an account out of band (deposits from outside the engine)."""
        if amount < 0:
            raise ValueError(f"credit amount must be non-negative: {amount}")
        with self._lock:
            self._balances[(account, asset)] += amount

    def balance_of(self, account: str, asset: str) -> int:
        with self._lock:
            return self._balances.get((account, asset), 0)

    def shares_of(self, pair: PairKey, owner: str) -> int:
        with self._lock:
            return self._shares.get((pair, owner), 0)

    def execute(self, effects: Sequence[Effect]) -> None:
        """Apply effects in order, undoing the applied ones if any fails.

        Only the entries an effect touches are journaled, so the cost is
        proportional to the effect list rather than to the number of accounts.
        """
        saved_balances: dict[tuple[str, str], int] = {}
        saved_shares: dict[tuple[PairKey, str], int] = {}

        with self._lock:
            try:
                for effect in effects:
                    if isinstance(effect, Transfer):
                        source_key = (effect.source, effect.asset)
                        destination_key = (effect.destination, effect.asset)
                        available = self._balances[source_key]
                        if available < effect.amount:
                            raise InsufficientFunds(
                                f"{effect.source} holds {available} {effect.asset}, "
                                f"needs {effect.amount}"
                            )
                        saved_balances.setdefault(source_key, available)
                        saved_balances.setdefault(destination_key, self._balances[destination_key])
                        self._balances[source_key] -= effect.amount
                        self._balances[destination_key] += effect.amount
                    elif isinstance(effect, MintShares):
                        share_key = (effect.pair, effect.owner)
                        saved_shares.setdefault(share_key, self._shares[share_key])
                        self._shares[share_key] += effect.amount
                    elif isinstance(effect, BurnShares):
                        share_key = (effect.pair, effect.owner)
                        held = self._shares[share_key]
                        if held < effect.amount:
                            raise InsufficientShares(
                                f"{effect.owner} holds {held} shares of {effect.pair}, "
                                f"needs {effect.amount}"
                            )
                        saved_shares.setdefault(share_key, held)
                        self._shares[share_key] -= effect.amount
                    else:
                        raise TypeError(f"Unknown effect type: {type(effect)}")
            except Exception:
                self._balances.update(saved_balances)
                self._shares.update(saved_shares)
                raise

        logger.debug("ledger_effects_executed", effect_count=len(effects))


__all__ = ["Ledger", "InMemoryLedger"]
