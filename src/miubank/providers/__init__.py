"""Simulated market price models."""

from miubank.providers.price_model import PriceModel
from miubank.providers.random_walk import RandomWalkPriceModel
from miubank.providers.fixed_income import FixedIncomeAccrualModel

__all__ = [
    "PriceModel",
    "RandomWalkPriceModel",
    "FixedIncomeAccrualModel",
]
