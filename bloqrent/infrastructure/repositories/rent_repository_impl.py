from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bloqrent.core.entities.rent import Rent, RentSize, RentStatus
from bloqrent.core.repositories.rent_repository import LockerClaim, RentRepository
from bloqrent.infrastructure.models.models import LockerModel, RentModel


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands datetimes back without tzinfo; everything is stored in UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def rent_from_row(row: RentModel) -> Rent:
    return Rent(
        rent_id=row.rent_id,
        locker_id=row.locker_id,
        weight=row.weight,
        size=RentSize(row.size) if not isinstance(row.size, RentSize) else row.size,
        status=RentStatus(row.status) if not isinstance(row.status, RentStatus) else row.status,
        dropped_off_at=_as_utc(row.dropped_off_at),
        picked_up_at=_as_utc(row.picked_up_at),
    )


class RentRepositoryImpl(RentRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, rent_id: str) -> Rent | None:
        row = self._db.get(RentModel, rent_id)
        if row is None:
            return None
        return rent_from_row(row)

    def list_by_locker(self, locker_id: str) -> list[Rent]:
        rows = self._db.query(RentModel).filter(RentModel.locker_id == locker_id).all()
        return [rent_from_row(row) for row in rows]

    def has_active_for_locker(self, locker_id: str) -> bool:
        return self._count_active(locker_id) > 0

    def add_claiming_locker(self, rent: Rent) -> LockerClaim:
        if self._db.get(RentModel, rent.rent_id) is not None:
            return LockerClaim.DUPLICATE_ID

        try:
            claim = self._claim_locker(rent.locker_id)
            if claim is not LockerClaim.CLAIMED:
                return claim

            self._db.add(self._copy_to_row(rent))
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            return LockerClaim.DUPLICATE_ID
        except SQLAlchemyError:
            self._db.rollback()
            raise

        return LockerClaim.CLAIMED

    def update_if_status(self, rent: Rent, *, expected: RentStatus) -> bool:
        try:
            if not self._write_if_status(rent, expected):
                self._db.rollback()
                return False
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

        return True

    def update_releasing_locker(self, rent: Rent, *, expected: RentStatus) -> bool:
        try:
            if not self._write_if_status(rent, expected):
                self._db.rollback()
                return False
            self._set_locker_occupied(rent.locker_id, False)
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

        return True

    def update_claiming_locker(self, rent: Rent) -> LockerClaim:
        try:
            claim = self._claim_locker(rent.locker_id)
            if claim is not LockerClaim.CLAIMED:
                return claim

            self._db.add(self._copy_to_row(rent))
            self._db.flush()

            # A forced-free flag must not let a second rent go active.
            if self._count_active(rent.locker_id) > 1:
                self._db.rollback()
                return LockerClaim.LOCKER_OCCUPIED

            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

        return LockerClaim.CLAIMED

    def update_syncing_locker(self, rent: Rent) -> bool:
        try:
            self._db.add(self._copy_to_row(rent))
            self._db.flush()

            occupied = self.has_active_for_locker(rent.locker_id)
            self._set_locker_occupied(rent.locker_id, occupied)
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

        return occupied

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _count_active(self, locker_id: str) -> int:
        q = (
            self._db.query(func.count(RentModel.rent_id))
            .filter(RentModel.locker_id == locker_id)
            .filter(RentModel.status != RentStatus.DELIVERED)
        )
        return int(q.scalar() or 0)

    def _claim_locker(self, locker_id: str) -> LockerClaim:
        """Check-then-set in a single statement: only a free locker matches the WHERE clause."""
        result = self._db.execute(
            update(LockerModel)
            .where(LockerModel.locker_id == locker_id)
            .where(LockerModel.is_occupied.is_(False))
            .values(is_occupied=True)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return LockerClaim.CLAIMED

        self._db.rollback()
        if self._db.get(LockerModel, locker_id) is None:
            return LockerClaim.LOCKER_MISSING
        return LockerClaim.LOCKER_OCCUPIED

    def _write_if_status(self, rent: Rent, expected: RentStatus) -> bool:
        result = self._db.execute(
            update(RentModel)
            .where(RentModel.rent_id == rent.rent_id)
            .where(RentModel.status == expected)
            .values(
                status=rent.status,
                dropped_off_at=rent.dropped_off_at,
                picked_up_at=rent.picked_up_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _copy_to_row(self, rent: Rent) -> RentModel:
        row = self._db.get(RentModel, rent.rent_id)
        if row is None:
            row = RentModel(rent_id=rent.rent_id)

        row.locker_id = rent.locker_id
        row.weight = rent.weight
        row.size = rent.size
        row.status = rent.status
        row.dropped_off_at = rent.dropped_off_at
        row.picked_up_at = rent.picked_up_at
        return row

    def _set_locker_occupied(self, locker_id: str, is_occupied: bool) -> None:
        self._db.execute(
            update(LockerModel)
            .where(LockerModel.locker_id == locker_id)
            .values(is_occupied=is_occupied)
            .execution_options(synchronize_session=False)
        )
