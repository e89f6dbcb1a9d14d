"""Tests for constant-product swap pricing."""

import pytest

from amm.effects import Transfer
from amm.errors import InsufficientLiquidity, SlippageExceeded, ZeroAmount
from amm.swap import SwapEngine, swap_engine
from tests.helpers import BOB, FEE_RATE_BPS, MOJO, ONE_BILLION, TREASURY, USDC, make_pair

POOL = "pool:MOJO:USDC"


class TestSwapPricing:
    """Tests for the fee split and output formula."""

    def test_reference_swap(self, balanced_pair):
        """1e9/1e9 pool, 250 bps, 1e7 in: exact floor chain."""
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, True, FEE_RATE_BPS)

        assert result.protocol_fee == 250_000
        assert result.amount_in_net == 9_750_000
        assert result.pair.reserve_a == 1_009_750_000
        assert result.pair.reserve_b == 10**18 // 1_009_750_000 == 990_344_144
        assert result.amount_out == 9_655_856
        assert result.pair.share_supply_total == ONE_BILLION

    def test_reverse_direction(self, balanced_pair):
        """Selling asset B maps the new reserves back to (A, B)."""
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, False, FEE_RATE_BPS)

        assert result.asset_in == USDC
        assert result.asset_out == MOJO
        assert result.pair.reserve_a == 990_344_144
        assert result.pair.reserve_b == 1_009_750_000
        assert result.amount_out == 9_655_856

    def test_zero_fee(self, balanced_pair):
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, True, 0)

        assert result.protocol_fee == 0
        assert result.amount_in_net == 10_000_000
        assert result.amount_out == 9_900_991

    def test_full_fee_leaves_nothing_to_price(self, balanced_pair):
        """At 10000 bps the whole input is fee and nothing comes out."""
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, True, 10_000)

        assert result.protocol_fee == 10_000_000
        assert result.amount_out == 0
        assert result.pair == balanced_pair

    def test_product_never_increases_beyond_rounding(self, balanced_pair):
        """new_in * new_out <= k and falls short by less than new_in."""
        k = balanced_pair.reserve_a * balanced_pair.reserve_b
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, True, FEE_RATE_BPS)
        product = result.pair.reserve_a * result.pair.reserve_b

        assert product == 999_999_999_404_000_000
        assert product <= k
        assert k - product < result.pair.reserve_a

    def test_get_protocol_fee_floors(self):
        engine = SwapEngine()
        assert engine.get_protocol_fee(39, 250) == 0
        assert engine.get_protocol_fee(40, 250) == 1


class TestSwapRejections:
    """Tests for rejected swaps."""

    def test_zero_amount(self, balanced_pair):
        with pytest.raises(ZeroAmount):
            swap_engine.swap(balanced_pair, 0, 0, True, FEE_RATE_BPS)

    def test_slippage(self, balanced_pair):
        """min_amount_out one above the output is rejected; equal passes."""
        with pytest.raises(SlippageExceeded):
            swap_engine.swap(balanced_pair, 10_000_000, 9_655_857, True, FEE_RATE_BPS)
        result = swap_engine.swap(balanced_pair, 10_000_000, 9_655_856, True, FEE_RATE_BPS)
        assert result.amount_out == 9_655_856

    def test_empty_pair(self, empty_pair):
        with pytest.raises(InsufficientLiquidity):
            swap_engine.swap(empty_pair, 1_000, 0, True, FEE_RATE_BPS)

    def test_draining_output_reserve(self):
        pair = make_pair(reserve_a=1, reserve_b=1, share_supply_total=1)
        with pytest.raises(InsufficientLiquidity):
            swap_engine.swap(pair, 1, 0, True, 0)

    def test_quote_skips_slippage_check(self, balanced_pair):
        result = swap_engine.quote(balanced_pair, 10_000_000, True, FEE_RATE_BPS)
        assert result.amount_out == 9_655_856


class TestSwapEffects:
    """Tests for the effect list of a swap."""

    def test_effects(self, balanced_pair):
        """Fee to the collector, net input to the pool, output to the trader."""
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, True, FEE_RATE_BPS)

        assert result.effects(BOB, TREASURY) == [
            Transfer(MOJO, BOB, TREASURY, 250_000),
            Transfer(MOJO, BOB, POOL, 9_750_000),
            Transfer(USDC, POOL, BOB, 9_655_856),
        ]

    def test_zero_fee_transfer_omitted(self, balanced_pair):
        result = swap_engine.swap(balanced_pair, 10_000_000, 0, True, 0)
        effects = result.effects(BOB, TREASURY)

        assert len(effects) == 2
        assert all(e.amount > 0 for e in effects)
