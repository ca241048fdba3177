"""Policy constants for the simulated market, fees and taxes."""

from dataclasses import dataclass, field
from decimal import Decimal

from miubank.domain.models.enums import AssetType


@dataclass(frozen=True)
class VariationBand:
    """Stock price variation range selected when the band draw is below upper_bound."""

    upper_bound: float
    low: Decimal
    high: Decimal


def _default_bands() -> tuple[VariationBand, ...]:
    return (
        VariationBand(0.40, Decimal("0.001"), Decimal("0.02")),
        VariationBand(0.70, Decimal("0.02"), Decimal("0.03")),
        VariationBand(0.90, Decimal("0.03"), Decimal("0.04")),
        VariationBand(1.00, Decimal("0.04"), Decimal("0.05")),
    )


@dataclass(frozen=True)
class PriceWalkPolicy:
    """
    Random-walk parameters for STOCK assets.

    Bands are ordered by upper_bound; the last band catches any draw.
    min_price is an inclusive floor: a walk can land exactly on it but
    never below.
    """

    bands: tuple[VariationBand, ...] = field(default_factory=_default_bands)
    up_probability: float = 0.5
    min_price: Decimal = Decimal("0.01")

    def band_for(self, draw: float) -> VariationBand:
        for band in self.bands:
            if draw < band.upper_bound:
                return band
        return self.bands[-1]


@dataclass(frozen=True)
class AccrualPolicy:
    """Daily accrual parameters for fixed-income assets."""

    days_per_year: int = 365
    daily_inflation_factor: Decimal = Decimal("1.0001")


def _default_tax_rates() -> dict[AssetType, Decimal]:
    return {
        AssetType.STOCK: Decimal("0.15"),
        AssetType.CDB: Decimal("0.22"),
        AssetType.TREASURY: Decimal("0.22"),
    }


@dataclass(frozen=True)
class FeePolicy:
    """Brokerage fee, external transfer fee and capital-gains tax rates."""

    brokerage_fee_rate: Decimal = Decimal("0.01")
    external_transfer_fee_rate: Decimal = Decimal("0.005")
    tax_rates: dict[AssetType, Decimal] = field(default_factory=_default_tax_rates)

    def brokerage_rate_for(self, asset_type: AssetType) -> Decimal:
        """Only stock purchases pay brokerage."""
        return self.brokerage_fee_rate if asset_type == AssetType.STOCK else Decimal("0")

    def tax_rate_for(self, asset_type: AssetType, gross_profit: Decimal) -> Decimal:
        """Tax applies to positive gross profit only."""
        if gross_profit <= 0:
            return Decimal("0")
        return self.tax_rates.get(asset_type, Decimal("0"))
