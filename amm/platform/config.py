"""Platform configuration record and its guarded handle."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace

import structlog

from amm.constants import MAX_FEE_RATE_BPS
from amm.errors import (
    AlreadyConfigured,
    InvalidFeeRate,
    PlatformNotConfigured,
    PlatformPaused,
    Unauthorized,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class PlatformConfig:
    """Process-wide platform configuration.

    Attributes:
        admin: Identity with exclusive rights to pause and unpause
        base_asset: The platform's canonical quote asset
        fee_collector: Account receiving protocol fee revenue
        protocol_fee_rate_bps: Fee skimmed from each swap input, in [0, 10000]
        paused: When True, swaps and liquidity changes are rejected
        pause_count: Number of times the platform was paused
    """

    admin: str
    base_asset: str
    fee_collector: str
    protocol_fee_rate_bps: int
    paused: bool = False
    pause_count: int = 0


@dataclass
class PlatformStats:
    """Running totals over committed operations.

    total_volume sums gross swap inputs across all assets, so it is a
    trade-count-like activity measure rather than a value in one unit.
    """

    pair_count: int = 0
    total_volume: int = 0
    total_fees: int = 0


class Platform:
    """Handle owning the single PlatformConfig record.

    The record is created once by configure() and afterwards only changed
    by set_pause(). Readers get immutable snapshots; every read and write
    goes through the handle's lock.
    """

    def __init__(self, config: PlatformConfig | None = None) -> None:
        """Initialize the handle.

        Args:
            config: Existing configuration (e.g. restored from storage).
                    If None, the platform starts unconfigured.
        """
        self._lock = threading.Lock()
        self._config = config

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    def configure(
        self,
        fee_rate_bps: int,
        base_asset: str,
        fee_collector: str,
        admin: str,
    ) -> PlatformConfig:
        """Create the platform configuration; the first valid caller wins.

        Args:
            fee_rate_bps: Protocol fee rate in basis points
            base_asset: Canonical quote asset
            fee_collector: Account receiving protocol fees
            admin: Identity that becomes the platform admin

        Returns:
            The new configuration

        Raises:
            InvalidFeeRate: If fee_rate_bps is outside [0, 10000]
            AlreadyConfigured: If the platform was configured before
        """
        if not 0 <= fee_rate_bps <= MAX_FEE_RATE_BPS:
            raise InvalidFeeRate(
                f"fee_rate_bps must be in [0, {MAX_FEE_RATE_BPS}]: {fee_rate_bps}"
            )

        with self._lock:
            if self._config is not None:
                raise AlreadyConfigured("Platform is already configured")
            self._config = PlatformConfig(
                admin=admin,
                base_asset=base_asset,
                fee_collector=fee_collector,
                protocol_fee_rate_bps=fee_rate_bps,
            )
            config = self._config

        logger.info(
            "platform_configured",
            admin=admin,
            base_asset=base_asset,
            fee_collector=fee_collector,
            protocol_fee_rate_bps=fee_rate_bps,
        )
        return config

    def snapshot(self) -> PlatformConfig:
        """Current configuration.

        Raises:
            PlatformNotConfigured: If configure() has not succeeded yet
        """
        config = self._config
        if config is None:
            raise PlatformNotConfigured("Platform has not been configured")
        return config

    def set_pause(self, caller: str, pause: bool) -> PlatformConfig:
        """Pause or resume swaps and liquidity changes.

        Setting the flag to its current value is allowed and changes nothing
        but the pause counter when pausing.

        Raises:
            PlatformNotConfigured: If there is no admin yet
            Unauthorized: If caller is not the admin
        """
        with self._lock:
            config = self.snapshot()
            if caller != config.admin:
                raise Unauthorized(f"Only the platform admin can change the pause flag: {caller}")
            pause_count = config.pause_count + 1 if pause else config.pause_count
            self._config = replace(config, paused=pause, pause_count=pause_count)
            updated = self._config

        logger.info("platform_pause_changed", admin=caller, paused=pause, pause_count=pause_count)
        return updated

    def require_active(self) -> PlatformConfig:
        """Snapshot for a mutating operation.

        Raises:
            PlatformNotConfigured: If configure() has not succeeded yet
            PlatformPaused: If the platform is paused
        """
        config = self.snapshot()
        if config.paused:
            raise PlatformPaused("Platform is paused")
        return config
