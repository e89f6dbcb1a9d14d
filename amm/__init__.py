"""Constant-product liquidity pool engine."""

__version__ = "0.1.0"

from amm.engine import Engine, get_default_engine  # noqa: E402

__all__ = ["Engine", "get_default_engine", "__version__"]
