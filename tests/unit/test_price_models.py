"""
Unit tests for the simulated price models.

Tests cover:
- Random-walk band selection, interpolation and direction
- The minimum price floor
- Fixed-income daily accrual (pre and post-fixed)
- Policy lookups for bands, fees and taxes
"""

from decimal import Decimal

import pytest

from miubank.domain.models import Asset, AssetType, RateType
from miubank.domain.policies import AccrualPolicy, FeePolicy, PriceWalkPolicy, VariationBand
from miubank.providers import FixedIncomeAccrualModel, RandomWalkPriceModel


def make_stock(price: str) -> Asset:
    return Asset(
        asset_id="asset-1",
        name="Acao XPTO",
        asset_type=AssetType.STOCK,
        current_price=Decimal(price),
        symbol="XPTO3",
    )


def make_fixed_income(price: str, rate=Decimal("0.1095"), rate_type=RateType.PRE) -> Asset:
    return Asset(
        asset_id="asset-2",
        name="CDB Banco A",
        asset_type=AssetType.CDB,
        current_price=Decimal(price),
        rate=rate,
        rate_type=rate_type,
    )


# =============================================================================
# RANDOM WALK TESTS
# =============================================================================


class TestRandomWalkPriceModel:
    """Tests for RandomWalkPriceModel."""

    def test_small_band_upward_move(self, scripted_random):
        """
        GIVEN draws selecting the first band, its midpoint and an upward move
        WHEN the next price of a 100.00 stock is computed
        THEN the price rises by 1.05%
        """
        model = RandomWalkPriceModel(rng=scripted_random([0.10, 0.5, 0.3]))

        assert model.next_price(make_stock("100.00")) == Decimal("101.05")

    def test_second_band_downward_move(self, scripted_random):
        """
        GIVEN draws selecting the second band at its lower edge and a downward move
        WHEN the next price of a 100.00 stock is computed
        THEN the price falls by 2%
        """
        model = RandomWalkPriceModel(rng=scripted_random([0.40, 0.0, 0.9]))

        assert model.next_price(make_stock("100.00")) == Decimal("98")

    @pytest.mark.parametrize(
        "band_draw,expected_low,expected_high",
        [
            (0.0, Decimal("0.001"), Decimal("0.02")),
            (0.69, Decimal("0.02"), Decimal("0.03")),
            (0.70, Decimal("0.03"), Decimal("0.04")),
            (0.95, Decimal("0.04"), Decimal("0.05")),
        ],
    )
    def test_variation_stays_inside_selected_band(
        self, scripted_random, band_draw, expected_low, expected_high
    ):
        """
        GIVEN a band draw and an upward direction
        WHEN a variation is drawn with the in-band position at 0.99
        THEN the variation lies within that band
        """
        model = RandomWalkPriceModel(rng=scripted_random([band_draw, 0.99, 0.1]))

        variation = model.variation()

        assert expected_low <= variation < expected_high

    def test_price_never_falls_below_floor(self, scripted_random):
        """
        GIVEN a stock already at the minimum price
        WHEN it takes the largest possible downward step repeatedly
        THEN the price stays at 0.01
        """
        model = RandomWalkPriceModel(rng=scripted_random([0.99, 0.99, 0.99]))
        asset = make_stock("0.01")

        for _ in range(10):
            asset.current_price = model.next_price(asset)

        assert asset.current_price == Decimal("0.01")

    def test_seeded_models_are_reproducible(self):
        """
        GIVEN two models with the same seed
        WHEN each advances the same stock five times
        THEN both produce the same price path
        """
        first = RandomWalkPriceModel(seed=7)
        second = RandomWalkPriceModel(seed=7)
        a, b = make_stock("50.00"), make_stock("50.00")

        path_a, path_b = [], []
        for _ in range(5):
            a.current_price = first.next_price(a)
            b.current_price = second.next_price(b)
            path_a.append(a.current_price)
            path_b.append(b.current_price)

        assert path_a == path_b

    def test_custom_policy_floor(self, scripted_random):
        """
        GIVEN a policy with a 1.00 floor
        WHEN a 1.00 stock moves down
        THEN the price is held at 1.00
        """
        policy = PriceWalkPolicy(min_price=Decimal("1.00"))
        model = RandomWalkPriceModel(policy=policy, rng=scripted_random([0.5, 0.5, 0.9]))

        assert model.next_price(make_stock("1.00")) == Decimal("1.00")


# =============================================================================
# FIXED INCOME TESTS
# =============================================================================


class TestFixedIncomeAccrualModel:
    """Tests for FixedIncomeAccrualModel."""

    def test_prefixed_accrues_one_day_of_rate(self):
        """
        GIVEN a pre-fixed CDB at 1000.00 paying 10.95% a year
        WHEN one day accrues
        THEN the price is 1000.30
        """
        model = FixedIncomeAccrualModel()

        assert model.next_price(make_fixed_income("1000.00")) == Decimal("1000.300000")

    def test_postfixed_adds_daily_inflation(self):
        """
        GIVEN a post-fixed CDB at 1000.00 paying 10.95% a year
        WHEN one day accrues
        THEN the rate and the 1.0001 inflation factor both apply
        """
        model = FixedIncomeAccrualModel()
        asset = make_fixed_income("1000.00", rate_type=RateType.POS)

        assert model.next_price(asset) == Decimal("1000.400030")

    @pytest.mark.parametrize(
        "rate,rate_type",
        [(None, RateType.PRE), (Decimal("0.10"), None)],
    )
    def test_missing_rate_data_keeps_price(self, rate, rate_type):
        """
        GIVEN a fixed-income asset without a rate or a rate type
        WHEN the next price is computed
        THEN the price is unchanged
        """
        model = FixedIncomeAccrualModel()
        asset = make_fixed_income("1000.00", rate=rate, rate_type=rate_type)

        assert model.next_price(asset) == Decimal("1000.00")

    def test_custom_day_count(self):
        """
        GIVEN an accrual policy with a 360-day year
        WHEN a 3.6% pre-fixed asset accrues one day
        THEN the daily rate is exactly 0.01%
        """
        model = FixedIncomeAccrualModel(policy=AccrualPolicy(days_per_year=360))
        asset = make_fixed_income("100.00", rate=Decimal("0.036"))

        assert model.next_price(asset) == Decimal("100.010000")


# =============================================================================
# POLICY TESTS
# =============================================================================


class TestPolicies:
    """Tests for the policy dataclasses."""

    def test_band_for_falls_back_to_last_band(self):
        """
        GIVEN a policy whose bands end below 1.0
        WHEN a draw beyond every bound is looked up
        THEN the last band is returned
        """
        policy = PriceWalkPolicy(
            bands=(
                VariationBand(0.5, Decimal("0.01"), Decimal("0.02")),
                VariationBand(0.8, Decimal("0.02"), Decimal("0.03")),
            )
        )

        assert policy.band_for(0.99).upper_bound == 0.8

    def test_brokerage_only_for_stocks(self):
        """
        GIVEN the default fee policy
        WHEN the brokerage rate is looked up per asset type
        THEN only STOCK pays 1%
        """
        fees = FeePolicy()

        assert fees.brokerage_rate_for(AssetType.STOCK) == Decimal("0.01")
        assert fees.brokerage_rate_for(AssetType.CDB) == Decimal("0")
        assert fees.brokerage_rate_for(AssetType.TREASURY) == Decimal("0")

    def test_tax_rates_by_asset_type(self):
        """
        GIVEN the default fee policy
        WHEN tax rates are looked up for a positive profit
        THEN STOCK pays 15% and fixed income pays 22%
        """
        fees = FeePolicy()

        assert fees.tax_rate_for(AssetType.STOCK, Decimal("10")) == Decimal("0.15")
        assert fees.tax_rate_for(AssetType.CDB, Decimal("10")) == Decimal("0.22")
        assert fees.tax_rate_for(AssetType.TREASURY, Decimal("10")) == Decimal("0.22")

    @pytest.mark.parametrize("profit", [Decimal("0"), Decimal("-50")])
    def test_no_tax_without_profit(self, profit):
        """
        GIVEN zero or negative gross profit
        WHEN the tax rate is looked up
        THEN it is zero
        """
        assert FeePolicy().tax_rate_for(AssetType.STOCK, profit) == Decimal("0")
