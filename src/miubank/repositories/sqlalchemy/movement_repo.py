"""SQLAlchemy implementation of MovementRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from miubank.core.money import to_money
from miubank.core.timezone import to_brt
from miubank.domain.models import Movement, MovementType
from miubank.repositories.sqlalchemy.orm_models import MovementORM


class SqlAlchemyMovementRepository:
    """SQLAlchemy-backed append-only movement log."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, movement: Movement) -> Movement:
        """Insert a new movement."""
        orm_movement = MovementORM(
            movement_id=movement.movement_id,
            from_account_id=movement.from_account_id,
            to_account_id=movement.to_account_id,
            amount=movement.amount,
            movement_type=movement.movement_type,
            description=movement.description,
            investment_id=movement.investment_id,
            booked_account_id=movement.booked_account_id,
            created_at=movement.created_at,
        )
        self._db.add(orm_movement)
        self._db.flush()
        return self._to_domain(orm_movement)

    def list_by_account(
        self,
        account_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        movement_types: Optional[list[MovementType]] = None,
    ) -> list[Movement]:
        """
        List movements touching an account, ordered by created_at.

        External transfer legs are booked to a single account, so they only
        appear for the account named in booked_account_id.
        """
        query = self._db.query(MovementORM).filter(
            or_(
                MovementORM.from_account_id == account_id,
                MovementORM.to_account_id == account_id,
            ),
            or_(
                MovementORM.booked_account_id.is_(None),
                MovementORM.booked_account_id == account_id,
            ),
        )
        if start_date is not None:
            query = query.filter(MovementORM.created_at >= start_date)
        if end_date is not None:
            query = query.filter(MovementORM.created_at <= end_date)
        if movement_types:
            query = query.filter(MovementORM.movement_type.in_(movement_types))

        orm_movements = query.order_by(MovementORM.created_at, MovementORM.movement_id).all()
        return [self._to_domain(m) for m in orm_movements]

    def list_by_investment(self, investment_id: str) -> list[Movement]:
        """List movements referencing an investment, ordered by created_at."""
        orm_movements = (
            self._db.query(MovementORM)
            .filter(MovementORM.investment_id == investment_id)
            .order_by(MovementORM.created_at, MovementORM.movement_id)
            .all()
        )
        return [self._to_domain(m) for m in orm_movements]

    @staticmethod
    def _to_domain(orm: MovementORM) -> Movement:
        """Convert ORM model to domain model."""
        return Movement(
            movement_id=orm.movement_id,
            from_account_id=orm.from_account_id,
            to_account_id=orm.to_account_id,
            amount=to_money(orm.amount),
            movement_type=orm.movement_type,
            description=orm.description,
            investment_id=orm.investment_id,
            booked_account_id=orm.booked_account_id,
            created_at=to_brt(orm.created_at) if orm.created_at else None,
        )
