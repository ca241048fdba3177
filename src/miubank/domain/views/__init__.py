"""View models for service outputs."""

from miubank.domain.views.operations import (
    InternalTransferResult,
    ExternalTransferResult,
    PurchaseResult,
    SaleResult,
)
from miubank.domain.views.reports import (
    StatementLine,
    AccountStatement,
    InvestmentPosition,
    TaxBreakdown,
    TaxReport,
)

__all__ = [
    "InternalTransferResult",
    "ExternalTransferResult",
    "PurchaseResult",
    "SaleResult",
    "StatementLine",
    "AccountStatement",
    "InvestmentPosition",
    "TaxBreakdown",
    "TaxReport",
]
