"""Platform configuration package.

Usage:
    from amm.platform import Platform

    platform = Platform()
    platform.configure(fee_rate_bps=250, base_asset="MOJO", fee_collector="treasury", admin="alice")
    config = platform.require_active()
"""

from amm.platform.config import Platform, PlatformConfig, PlatformStats

__all__ = [
    "Platform",
    "PlatformConfig",
    "PlatformStats",
]
