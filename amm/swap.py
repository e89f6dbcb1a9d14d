"""Constant-product swap pricing with an input-side protocol fee.

The protocol fee is skimmed from the input before pricing; the remaining
net input is priced against the pre-trade reserves:

    protocol_fee    = amount_in * fee_rate_bps // 10000
    amount_in_net   = amount_in - protocol_fee
    k               = reserve_in * reserve_out
    new_reserve_in  = reserve_in + amount_in_net
    new_reserve_out = k // new_reserve_in
    amount_out      = reserve_out - new_reserve_out

There is no separate liquidity-provider fee and nothing is charged on the
output leg. The fee leaves the pool (it is paid to the fee collector), so
new_reserve_in * new_reserve_out <= k, short of k by less than new_reserve_in
due to the floor division.
"""

from __future__ import annotations

from dataclasses import dataclass

from amm.constants import BPS_DENOMINATOR
from amm.effects import Effect, Transfer, transfers
from amm.errors import InsufficientLiquidity, SlippageExceeded, ZeroAmount
from amm.pools.types import Pair
from amm.safe_int import S


@dataclass(frozen=True)
class SwapResult:
    """Outcome of pricing a single-hop swap."""

    pair: Pair  # Pair snapshot after the swap
    input_is_asset_a: bool
    amount_in: int
    protocol_fee: int
    amount_in_net: int
    amount_out: int

    @property
    def asset_in(self) -> str:
        return self.pair.get_assets(self.input_is_asset_a)[0]

    @property
    def asset_out(self) -> str:
        return self.pair.get_assets(self.input_is_asset_a)[1]

    def effects(self, trader: str, fee_collector: str) -> list[Effect]:
        """Fee to the collector, net input into the pool, output to the trader."""
        pool = self.pair.key.pool_account
        return transfers(
            Transfer(self.asset_in, trader, fee_collector, self.protocol_fee),
            Transfer(self.asset_in, trader, pool, self.amount_in_net),
            Transfer(self.asset_out, pool, trader, self.amount_out),
        )


class SwapEngine:
    """Constant-product pricing for a single hop.

    Formula: amount_out = reserve_out - (reserve_in * reserve_out) // (reserve_in + amount_in_net)
    """

    def get_protocol_fee(self, amount_in: int, fee_rate_bps: int) -> int:
        """Protocol fee taken from the input (floor-rounded)."""
        return ((S(amount_in) * S(fee_rate_bps)) // BPS_DENOMINATOR).to_u64()

    def get_amount_out(
        self,
        amount_in_net: int,
        reserve_in: int,
        reserve_out: int,
    ) -> tuple[int, int, int]:
        """Price a net input against the pre-trade reserves.

        Args:
            amount_in_net: Input after the protocol fee
            reserve_in: Reserve of the input asset
            reserve_out: Reserve of the output asset

        Returns:
            Tuple of (amount_out, new_reserve_in, new_reserve_out)

        Raises:
            ArithmeticOverflow: If k or the new input reserve leaves its range
        """
        k = S(reserve_in) * S(reserve_out)
        new_reserve_in = S(reserve_in) + S(amount_in_net)
        new_reserve_out = k // new_reserve_in
        amount_out = S(reserve_out) - new_reserve_out
        return amount_out.to_u64(), new_reserve_in.to_u64(), new_reserve_out.to_u64()

    def quote(
        self,
        pair: Pair,
        amount_in: int,
        input_is_asset_a: bool,
        fee_rate_bps: int,
    ) -> SwapResult:
        """Compute a swap without the slippage check.

        Args:
            pair: Current pair snapshot
            amount_in: Gross input, protocol fee included
            input_is_asset_a: True to sell asset A for asset B
            fee_rate_bps: Platform protocol fee rate

        Returns:
            SwapResult with the post-trade snapshot

        Raises:
            ZeroAmount: If amount_in is zero
            InsufficientLiquidity: If the pool is empty or the trade would drain
                the output reserve
            ArithmeticOverflow: On fee, reserve or product overflow
        """
        if amount_in == 0:
            raise ZeroAmount("Swap amount_in must be positive")
        if pair.is_empty:
            raise InsufficientLiquidity(f"Pair {pair.key} has no liquidity")

        reserve_in, reserve_out = pair.get_reserves(input_is_asset_a)

        protocol_fee = self.get_protocol_fee(amount_in, fee_rate_bps)
        amount_in_net = (S(amount_in) - protocol_fee).to_u64()
        amount_out, new_reserve_in, new_reserve_out = self.get_amount_out(
            amount_in_net, reserve_in, reserve_out
        )
        if new_reserve_out == 0:
            raise InsufficientLiquidity(f"Swap would drain the output reserve of {pair.key}")

        return SwapResult(
            pair=pair.with_reserves(new_reserve_in, new_reserve_out, input_is_asset_a),
            input_is_asset_a=input_is_asset_a,
            amount_in=amount_in,
            protocol_fee=protocol_fee,
            amount_in_net=amount_in_net,
            amount_out=amount_out,
        )

    def swap(
        self,
        pair: Pair,
        amount_in: int,
        min_amount_out: int,
        input_is_asset_a: bool,
        fee_rate_bps: int,
    ) -> SwapResult:
        """Compute a swap and enforce the caller's minimum output.

        Raises:
            SlippageExceeded: If amount_out < min_amount_out
            (plus everything quote() raises)
        """
        result = self.quote(pair, amount_in, input_is_asset_a, fee_rate_bps)
        if result.amount_out < min_amount_out:
            raise SlippageExceeded(
                f"amount_out {result.amount_out} below min_amount_out {min_amount_out}"
            )
        return result


# Singleton instance
swap_engine = SwapEngine()


__all__ = ["SwapEngine", "SwapResult", "swap_engine"]
