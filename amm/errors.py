"""Engine error classes.

Every failure of a public operation is an AmmError subclass. Errors are
terminal for the attempted operation: when one is raised, no pair state has
been committed and no effect has been executed.

Each class carries a stable ``code`` (used in API responses and logs) and the
HTTP ``status_code`` the transport maps it to.
"""


class AmmError(Exception):
    """Base error for pool engine operations."""

    code = "amm_error"
    status_code = 400


class InvalidFeeRate(AmmError):
    """Protocol fee rate outside [0, 10000] basis points."""

    code = "invalid_fee_rate"


class AlreadyConfigured(AmmError):
    """Platform configuration can only be created once."""

    code = "already_configured"
    status_code = 409


class PlatformNotConfigured(AmmError):
    """Operation requires a configured platform."""

    code = "platform_not_configured"
    status_code = 409


class Unauthorized(AmmError):
    """Caller is not allowed to perform this operation."""

    code = "unauthorized"
    status_code = 403


class PlatformPaused(AmmError):
    """Swaps and liquidity changes are rejected while paused."""

    code = "platform_paused"
    status_code = 409


class InvalidPair(AmmError):
    """A pair needs two distinct assets."""

    code = "invalid_pair"


class PairAlreadyExists(AmmError):
    """A pair with this exact (asset_a, asset_b) key already exists."""

    code = "pair_already_exists"
    status_code = 409


class PairNotFound(AmmError):
    """No pair is registered under the requested key."""

    code = "pair_not_found"
    status_code = 404


class ZeroAmount(AmmError):
    """An amount that must be positive was zero."""

    code = "zero_amount"


class InsufficientFunds(AmmError):
    """Source account does not hold enough of an asset."""

    code = "insufficient_funds"


class InsufficientShares(AmmError):
    """Owner does not hold enough liquidity shares."""

    code = "insufficient_shares"


class InsufficientLiquidity(AmmError):
    """Pool has no liquidity for this trade, or the trade would drain it."""

    code = "insufficient_liquidity"
    status_code = 409


class InsufficientLiquidityMinted(AmmError):
    """Deposit is too small to mint a single share."""

    code = "insufficient_liquidity_minted"


class SlippageExceeded(AmmError):
    """Computed output is below the caller's minimum."""

    code = "slippage_exceeded"
    status_code = 409


class ArithmeticOverflow(AmmError, ArithmeticError):
    """Fee, reserve or share arithmetic left its representable range."""

    code = "arithmetic_overflow"
