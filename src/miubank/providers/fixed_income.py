"""Daily accrual price model for CDB and TREASURY assets."""

from decimal import Decimal
from typing import Optional

from miubank.core.money import to_price
from miubank.domain.models import Asset, RateType
from miubank.domain.policies import AccrualPolicy


class FixedIncomeAccrualModel:
    """Compounds one day of the annual rate per step; post-fixed assets also get inflation."""

    def __init__(self, policy: Optional[AccrualPolicy] = None):
        self._policy = policy or AccrualPolicy()

    def next_price(self, asset: Asset) -> Decimal:
        if asset.rate is None or asset.rate_type is None:
            return asset.current_price

        daily_rate = asset.rate / self._policy.days_per_year
        new_price = asset.current_price * (1 + daily_rate)
        if asset.rate_type == RateType.POS:
            new_price *= self._policy.daily_inflation_factor
        return to_price(new_price)
