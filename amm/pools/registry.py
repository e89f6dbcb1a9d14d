"""Pair registry.

PoolRegistry stores one Pair snapshot per literal (asset_a, asset_b) key.
Creation is unique per key; lookups by an unknown key raise PairNotFound.

The registry itself only guards its dictionary. Serializing the
read-compute-commit sequence of a single pair is the engine's job (see
amm.engine), which also owns the per-pair locks.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

import structlog

from amm.constants import POOL_ACCOUNT_SEPARATOR
from amm.errors import InvalidPair, PairAlreadyExists, PairNotFound
from amm.pools.types import Pair, PairKey

logger = structlog.get_logger()


def validate_assets(asset_a: str, asset_b: str) -> None:
    """Check that two asset ids can form a pair with its own custody account.

    Raises:
        InvalidPair: If the assets are equal, or an id contains the pool
            account separator (two pairs could then share one account)
    """
    if asset_a == asset_b:
        raise InvalidPair(f"Pair needs two distinct assets, got {asset_a} twice")
    for asset in (asset_a, asset_b):
        if POOL_ACCOUNT_SEPARATOR in asset:
            raise InvalidPair(f"Asset id may not contain '{POOL_ACCOUNT_SEPARATOR}': {asset}")


class PoolRegistry:
    """Registry of constant-product pairs keyed by ordered asset pair."""

    def __init__(self, pairs: list[Pair] | None = None) -> None:
        """Initialize the registry with optional pairs.

        Args:
            pairs: Initial pair snapshots, e.g. restored from storage.
                   If None, starts empty.

        Raises:
            InvalidPair: If an initial pair has invalid asset ids
            PairAlreadyExists: If two initial pairs share a key
        """
        self._pairs: dict[PairKey, Pair] = {}
        self._lock = threading.Lock()

        if pairs:
            for pair in pairs:
                validate_assets(pair.asset_a, pair.asset_b)
                if pair.key in self._pairs:
                    raise PairAlreadyExists(f"Duplicate pair in initial state: {pair.key}")
                self._pairs[pair.key] = pair

    def create_pair(self, asset_a: str, asset_b: str) -> Pair:
        """Create an empty pair for the literal (asset_a, asset_b) key.

        Args:
            asset_a: First pooled asset
            asset_b: Second pooled asset

        Returns:
            The new Pair with zero reserves and zero share supply

        Raises:
            InvalidPair: If both assets are the same, or an asset id contains
                the pool account separator
            PairAlreadyExists: If the key is already registered
        """
        validate_assets(asset_a, asset_b)

        key = PairKey(asset_a, asset_b)
        with self._lock:
            if key in self._pairs:
                raise PairAlreadyExists(f"Pair already exists: {key}")
            pair = Pair(asset_a=asset_a, asset_b=asset_b)
            self._pairs[key] = pair

        logger.info("pair_created", asset_a=asset_a, asset_b=asset_b)
        return pair

    def get_pair(self, asset_a: str, asset_b: str) -> Pair | None:
        """Get the pair for a key, or None if it does not exist."""
        return self._pairs.get(PairKey(asset_a, asset_b))

    def lookup(self, asset_a: str, asset_b: str) -> Pair:
        """Get the pair for a key.

        Raises:
            PairNotFound: If no pair is registered under (asset_a, asset_b)
        """
        pair = self.get_pair(asset_a, asset_b)
        if pair is None:
            raise PairNotFound(f"No pair for {asset_a}/{asset_b}")
        return pair

    def replace(self, pair: Pair) -> None:
        """Commit a new snapshot for an existing pair.

        Raises:
            PairNotFound: If the pair was never created
        """
        with self._lock:
            if pair.key not in self._pairs:
                raise PairNotFound(f"No pair for {pair.key}")
            self._pairs[pair.key] = pair

    def pairs(self) -> list[Pair]:
        """All registered pairs in creation order."""
        return list(self._pairs.values())

    def __contains__(self, key: object) -> bool:
        return key in self._pairs

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs())

    def __len__(self) -> int:
        return len(self._pairs)


__all__ = ["PoolRegistry", "validate_assets"]
