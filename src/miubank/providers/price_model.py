"""Price model protocol."""

from decimal import Decimal
from typing import Protocol

from miubank.domain.models import Asset


class PriceModel(Protocol):
    """
    Protocol for simulated price models.

    Implementations compute the next price of an asset from its current
    state. They never persist anything; the market engine owns writes.
    """

    def next_price(self, asset: Asset) -> Decimal:
        """Return the asset's price after one market step."""
        ...
