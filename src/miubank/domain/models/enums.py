"""Enumerations for domain models."""

from enum import Enum


class AccountType(str, Enum):
    """Each user owns exactly one account of each type."""

    CORRENTE = "CORRENTE"  # checking
    INVESTIMENTO = "INVESTIMENTO"  # funds buys, receives sale proceeds


class MovementType(str, Enum):
    """Types of ledger movements."""

    DEPOSITO = "DEPOSITO"
    SAQUE = "SAQUE"
    TRANSFERENCIA_INTERNA = "TRANSFERENCIA_INTERNA"
    TRANSFERENCIA_EXTERNA = "TRANSFERENCIA_EXTERNA"
    COMPRA_ATIVO = "COMPRA_ATIVO"
    VENDA_ATIVO = "VENDA_ATIVO"


class AssetType(str, Enum):
    """Tradeable instrument classes."""

    STOCK = "STOCK"
    CDB = "CDB"
    TREASURY = "TREASURY"

    @property
    def is_fixed_income(self) -> bool:
        return self in (AssetType.CDB, AssetType.TREASURY)


class RateType(str, Enum):
    """Fixed-income remuneration: prefixed or post-fixed (inflation-indexed)."""

    PRE = "pre"
    POS = "pos"
