"""Core utilities and shared functionality."""

from miubank.core.timezone import (
    now_brt,
    to_brt,
    parse_datetime_brt,
    start_of_day,
    end_of_day,
    SAO_PAULO_TZ,
)
from miubank.core.exceptions import (
    AppError,
    ValidationError,
    InvalidQuantityError,
    NotFoundError,
    AccountNotFoundError,
    RecipientNotFoundError,
    AlreadySoldError,
    InsufficientFundsError,
    PendingInvestmentsError,
    ConflictError,
    StorageError,
)
from miubank.core.money import to_decimal, to_money, to_price, to_quantity

__all__ = [
    "now_brt",
    "to_brt",
    "parse_datetime_brt",
    "start_of_day",
    "end_of_day",
    "SAO_PAULO_TZ",
    "AppError",
    "ValidationError",
    "InvalidQuantityError",
    "NotFoundError",
    "AccountNotFoundError",
    "RecipientNotFoundError",
    "AlreadySoldError",
    "InsufficientFundsError",
    "PendingInvestmentsError",
    "ConflictError",
    "StorageError",
    "to_decimal",
    "to_money",
    "to_price",
    "to_quantity",
]
