"""Pair record and key definitions.

A Pair is an immutable snapshot. Operations never mutate a Pair in place;
they compute a new snapshot and the engine commits it to the registry.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple

from amm.constants import POOL_ACCOUNT_PREFIX, POOL_ACCOUNT_SEPARATOR


class PairKey(NamedTuple):
    """Registry key: the literal ordered (asset_a, asset_b) pair.

    The key is not canonicalized, so (X, Y) and (Y, X) address two
    distinct pools.
    """

    asset_a: str
    asset_b: str

    @property
    def pool_account(self) -> str:
        """Custody account holding this pair's reserves."""
        return POOL_ACCOUNT_SEPARATOR.join((POOL_ACCOUNT_PREFIX, self.asset_a, self.asset_b))

    def __str__(self) -> str:
        return f"{self.asset_a}/{self.asset_b}"


@dataclass(frozen=True)
class Pair:
    """Engine-tracked state of one constant-product pool."""

    asset_a: str
    asset_b: str
    reserve_a: int = 0
    reserve_b: int = 0
    # Outstanding liquidity-share units
    share_supply_total: int = 0

    @property
    def key(self) -> PairKey:
        return PairKey(self.asset_a, self.asset_b)

    @property
    def is_empty(self) -> bool:
        """True before the first deposit (and after the last full withdrawal)."""
        return self.share_supply_total == 0

    def get_reserves(self, input_is_asset_a: bool) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if input_is_asset_a:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def get_assets(self, input_is_asset_a: bool) -> tuple[str, str]:
        """Get assets ordered as (asset_in, asset_out)."""
        if input_is_asset_a:
            return self.asset_a, self.asset_b
        return self.asset_b, self.asset_a

    def with_reserves(
        self,
        reserve_in: int,
        reserve_out: int,
        input_is_asset_a: bool,
    ) -> Pair:
        """Return a copy with (reserve_in, reserve_out) mapped back to (a, b)."""
        if input_is_asset_a:
            return replace(self, reserve_a=reserve_in, reserve_b=reserve_out)
        return replace(self, reserve_a=reserve_out, reserve_b=reserve_in)


__all__ = ["Pair", "PairKey"]
