"""Random-walk price model for STOCK assets."""

import random
from decimal import Decimal
from typing import Optional

from miubank.core.money import to_price
from miubank.domain.models import Asset
from miubank.domain.policies import PriceWalkPolicy


class RandomWalkPriceModel:
    """
    Banded random walk.

    Each step takes three draws from the random source: the band, the
    position inside the band, and the direction. Prices never fall below
    policy.min_price.
    """

    def __init__(
        self,
        policy: Optional[PriceWalkPolicy] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """Initialize with an injected random source, or a new one seeded with seed."""
        self._policy = policy or PriceWalkPolicy()
        self._rng = rng if rng is not None else random.Random(seed)

    @property
    def policy(self) -> PriceWalkPolicy:
        return self._policy

    def variation(self) -> Decimal:
        """Draw a signed relative variation."""
        band = self._policy.band_for(self._rng.random())
        magnitude = band.low + (band.high - band.low) * Decimal(str(self._rng.random()))
        direction = 1 if self._rng.random() < self._policy.up_probability else -1
        return direction * magnitude

    def next_price(self, asset: Asset) -> Decimal:
        new_price = to_price(asset.current_price * (1 + self.variation()))
        return max(new_price, self._policy.min_price)
