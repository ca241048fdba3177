"""Movement (ledger) repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from miubank.domain.models import Movement, MovementType


class MovementRepository(Protocol):
    """
    Interface for the append-only movement log.

    Entries are never updated or deleted.
    """

    def append(self, movement: Movement) -> Movement:
        """Insert a new movement."""
        ...

    def list_by_account(
        self,
        account_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        movement_types: Optional[list[MovementType]] = None,
    ) -> list[Movement]:
        """List movements touching an account, ordered by created_at."""
        ...

    def list_by_investment(self, investment_id: str) -> list[Movement]:
        """List movements referencing an investment, ordered by created_at."""
        ...
