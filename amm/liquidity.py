"""Liquidity share accounting.

Deposits mint shares, withdrawals burn them:

    first deposit:       shares = floor(sqrt(amount_a * amount_b))
    later deposits:      shares = min(amount_a * T // reserve_a, amount_b * T // reserve_b)
    withdrawal of s:     amount_x = s * reserve_x // T

where T is the outstanding share supply. Rounding is always floor, so the
pool never pays out in the provider's favor.

Deposits are not clipped to the pool ratio. Both amounts are added to the
reserves in full and the limiting side determines the shares, so an
unbalanced deposit simply earns fewer shares.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from amm.effects import BurnShares, Effect, MintShares, Transfer
from amm.errors import (
    InsufficientLiquidityMinted,
    InsufficientShares,
    SlippageExceeded,
    ZeroAmount,
)
from amm.pools.types import Pair
from amm.safe_int import S


@dataclass(frozen=True)
class LiquidityResult:
    """Outcome of a deposit or withdrawal computation."""

    pair: Pair  # Pair snapshot after the operation
    amount_a: int
    amount_b: int
    shares: int

    def deposit_effects(self, provider: str) -> list[Effect]:
        """Transfers into the pool, then the share mint."""
        pool = self.pair.key.pool_account
        return [
            Transfer(self.pair.asset_a, provider, pool, self.amount_a),
            Transfer(self.pair.asset_b, provider, pool, self.amount_b),
            MintShares(self.pair.key, provider, self.shares),
        ]

    def withdrawal_effects(self, provider: str) -> list[Effect]:
        """Share burn, then transfers out of the pool."""
        pool = self.pair.key.pool_account
        effects: list[Effect] = [BurnShares(self.pair.key, provider, self.shares)]
        effects.extend(
            t
            for t in (
                Transfer(self.pair.asset_a, pool, provider, self.amount_a),
                Transfer(self.pair.asset_b, pool, provider, self.amount_b),
            )
            if t.amount > 0
        )
        return effects


class LiquidityAccounting:
    """Share minting and burning for a constant-product pair."""

    def get_shares_minted(
        self,
        amount_a: int,
        amount_b: int,
        reserve_a: int,
        reserve_b: int,
        share_supply: int,
    ) -> int:
        """Calculate shares minted for a deposit.

        Args:
            amount_a: Deposit of asset A
            amount_b: Deposit of asset B
            reserve_a: Current reserve of asset A
            reserve_b: Current reserve of asset B
            share_supply: Current outstanding shares (0 for an empty pool)

        Returns:
            Shares to mint (floor-rounded)

        Raises:
            ArithmeticOverflow: If an intermediate or the result leaves its range
        """
        sa, sb = S(amount_a), S(amount_b)

        if share_supply == 0:
            return (sa * sb).isqrt().to_u64()

        supply = S(share_supply)
        from_a = (sa * supply) // S(reserve_a)
        from_b = (sb * supply) // S(reserve_b)
        return from_a.min(from_b).to_u64()

    def get_amounts_out(
        self,
        share_amount: int,
        reserve_a: int,
        reserve_b: int,
        share_supply: int,
    ) -> tuple[int, int]:
        """Calculate the (amount_a, amount_b) released by burning shares.

        Raises:
            ArithmeticOverflow: If share_supply is zero or a product overflows
        """
        shares, supply = S(share_amount), S(share_supply)
        amount_a = (shares * S(reserve_a)) // supply
        amount_b = (shares * S(reserve_b)) // supply
        return amount_a.to_u64(), amount_b.to_u64()

    def add_liquidity(self, pair: Pair, amount_a: int, amount_b: int) -> LiquidityResult:
        """Compute the pair state after a deposit.

        Args:
            pair: Current pair snapshot
            amount_a: Deposit of asset A (added to reserve A in full)
            amount_b: Deposit of asset B (added to reserve B in full)

        Returns:
            LiquidityResult with the new snapshot and shares to mint

        Raises:
            ZeroAmount: If either amount is zero
            InsufficientLiquidityMinted: If the deposit would mint no shares
            ArithmeticOverflow: If reserves or supply would leave the u64 range
        """
        if amount_a == 0 or amount_b == 0:
            raise ZeroAmount(f"Deposit amounts must be positive: ({amount_a}, {amount_b})")

        shares = self.get_shares_minted(
            amount_a,
            amount_b,
            pair.reserve_a,
            pair.reserve_b,
            pair.share_supply_total,
        )
        if shares == 0:
            raise InsufficientLiquidityMinted(
                f"Deposit ({amount_a}, {amount_b}) mints no shares of {pair.key}"
            )

        new_pair = replace(
            pair,
            reserve_a=(S(pair.reserve_a) + amount_a).to_u64(),
            reserve_b=(S(pair.reserve_b) + amount_b).to_u64(),
            share_supply_total=(S(pair.share_supply_total) + shares).to_u64(),
        )
        return LiquidityResult(pair=new_pair, amount_a=amount_a, amount_b=amount_b, shares=shares)

    def remove_liquidity(
        self,
        pair: Pair,
        share_amount: int,
        min_amount_a: int = 0,
        min_amount_b: int = 0,
    ) -> LiquidityResult:
        """Compute the pair state after burning shares.

        Burning the entire supply returns the entire reserves, so a pool that
        is emptied goes back to (0, 0, 0).

        Args:
            pair: Current pair snapshot
            share_amount: Shares to burn
            min_amount_a: Minimum acceptable asset A payout
            min_amount_b: Minimum acceptable asset B payout

        Returns:
            LiquidityResult with the new snapshot and payout amounts

        Raises:
            ZeroAmount: If share_amount is zero
            InsufficientShares: If share_amount exceeds the outstanding supply
            SlippageExceeded: If a payout is below its minimum
        """
        if share_amount == 0:
            raise ZeroAmount("Share amount must be positive")
        if share_amount > pair.share_supply_total:
            raise InsufficientShares(
                f"Cannot burn {share_amount} shares, supply is {pair.share_supply_total}"
            )

        amount_a, amount_b = self.get_amounts_out(
            share_amount,
            pair.reserve_a,
            pair.reserve_b,
            pair.share_supply_total,
        )
        if amount_a < min_amount_a or amount_b < min_amount_b:
            raise SlippageExceeded(
                f"Withdrawal ({amount_a}, {amount_b}) below minimum ({min_amount_a}, {min_amount_b})"
            )

        new_pair = replace(
            pair,
            reserve_a=(S(pair.reserve_a) - amount_a).to_u64(),
            reserve_b=(S(pair.reserve_b) - amount_b).to_u64(),
            share_supply_total=(S(pair.share_supply_total) - share_amount).to_u64(),
        )
        return LiquidityResult(
            pair=new_pair, amount_a=amount_a, amount_b=amount_b, shares=share_amount
        )


# Singleton instance
liquidity_accounting = LiquidityAccounting()


__all__ = ["LiquidityAccounting", "LiquidityResult", "liquidity_accounting"]
