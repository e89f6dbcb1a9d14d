"""Protocol constants for the pool engine.

Centralizes numeric limits and account naming used across components.
"""

# Basis points denominator (10_000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Protocol fee rate may take the whole input but never more
MAX_FEE_RATE_BPS = BPS_DENOMINATOR

# Stored quantities (reserves, share supply, amounts) are unsigned 64-bit
U64_MAX = 2**64 - 1

# Intermediate products (k, amount * supply) are computed in 128 bits
U128_MAX = 2**128 - 1

# Prefix for the custody account holding a pair's reserves
POOL_ACCOUNT_PREFIX = "pool"

# Joins the prefix and asset ids in a pool account id; asset ids may not contain it
POOL_ACCOUNT_SEPARATOR = ":"
