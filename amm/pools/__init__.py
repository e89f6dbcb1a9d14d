"""Pair management package.

Provides PoolRegistry for creating and looking up constant-product pairs.
"""

from .registry import PoolRegistry
from .types import Pair, PairKey

__all__ = [
    "PoolRegistry",
    "Pair",
    "PairKey",
]
