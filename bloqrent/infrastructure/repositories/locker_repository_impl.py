from __future__ import annotations

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bloqrent.core.entities.locker import Locker, LockerStatus
from bloqrent.core.repositories.locker_repository import LockerRepository
from bloqrent.infrastructure.models.models import LockerModel


def locker_from_row(row: LockerModel) -> Locker:
    return Locker(
        locker_id=row.locker_id,
        bloq_id=row.bloq_id,
        status=LockerStatus(row.status) if not isinstance(row.status, LockerStatus) else row.status,
        is_occupied=bool(row.is_occupied),
    )


class LockerRepositoryImpl(LockerRepository):
    """
    Simple SQLAlchemy implementation for Locker.

    Occupancy changes tied to a rent go through RentRepositoryImpl so that they
    share the rent's transaction.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, locker_id: str) -> Locker | None:
        row = self._db.get(LockerModel, locker_id)
        if row is None:
            return None
        return locker_from_row(row)

    def list_by_bloq(self, bloq_id: str) -> list[Locker]:
        rows = self._db.query(LockerModel).filter(LockerModel.bloq_id == bloq_id).all()
        return [locker_from_row(row) for row in rows]

    def add_if_absent(self, locker: Locker) -> bool:
        if self._db.get(LockerModel, locker.locker_id) is not None:
            return False

        self._db.add(
            LockerModel(
                locker_id=locker.locker_id,
                bloq_id=locker.bloq_id,
                status=locker.status,
                is_occupied=locker.is_occupied,
            )
        )
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            return False
        return True

    def upsert(self, locker: Locker) -> None:
        row = self._db.get(LockerModel, locker.locker_id)
        if row is None:
            row = LockerModel(locker_id=locker.locker_id)

        row.bloq_id = locker.bloq_id
        row.status = locker.status
        row.is_occupied = locker.is_occupied

        self._db.add(row)
        self._db.commit()

    def set_status(self, locker_id: str, status: LockerStatus) -> bool:
        return self._update_columns(locker_id, status=status)

    def move_to_bloq(self, locker_id: str, bloq_id: str) -> bool:
        return self._update_columns(locker_id, bloq_id=bloq_id)

    def delete(self, locker_id: str) -> None:
        row = self._db.get(LockerModel, locker_id)
        if row is None:
            return

        # rents go with it (cascade="all, delete-orphan")
        self._db.delete(row)
        self._db.commit()

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _update_columns(self, locker_id: str, **values) -> bool:
        # is_occupied is never part of `values`: rents own that column.
        try:
            result = self._db.execute(
                update(LockerModel)
                .where(LockerModel.locker_id == locker_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

        return result.rowcount == 1
