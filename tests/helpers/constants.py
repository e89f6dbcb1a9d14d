"""Shared asset and account constants for tests.

Usage:
    from tests.helpers import MOJO, USDC, ALICE
    # or
    from tests.helpers.constants import MOJO, USDC
"""

# =============================================================================
# Assets
# =============================================================================

MOJO = "MOJO"  # Platform base asset
USDC = "USDC"
SOL = "SOL"

# =============================================================================
# Accounts
# =============================================================================

ADMIN = "admin"  # Configures the platform, only one allowed to pause
TREASURY = "treasury"  # Fee collector
ALICE = "alice"  # First liquidity provider
BOB = "bob"  # Second liquidity provider / trader
MALLORY = "mallory"  # Rejected by the authorization hook in tests

# =============================================================================
# Amounts
# =============================================================================

ONE_BILLION = 1_000_000_000
FEE_RATE_BPS = 250  # 2.5%
