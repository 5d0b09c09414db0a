from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bloqrent.core.entities.bloq import Bloq
from bloqrent.core.repositories.bloq_repository import BloqRepository
from bloqrent.infrastructure.models.models import BloqModel
from bloqrent.infrastructure.repositories.locker_repository_impl import locker_from_row


def bloq_from_row(row: BloqModel) -> Bloq:
    return Bloq(
        bloq_id=row.bloq_id,
        title=row.title,
        address=row.address,
        lockers=[locker_from_row(locker_row) for locker_row in row.lockers],
    )


class BloqRepositoryImpl(BloqRepository):
    """SQLAlchemy implementation for Bloq persistence."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, bloq_id: str) -> Bloq | None:
        row = self._db.get(BloqModel, bloq_id)
        if row is None:
            return None
        return bloq_from_row(row)

    def list_all(self) -> list[Bloq]:
        return [bloq_from_row(row) for row in self._db.query(BloqModel).all()]

    def add_if_absent(self, bloq: Bloq) -> bool:
        if self._db.get(BloqModel, bloq.bloq_id) is not None:
            return False

        self._db.add(BloqModel(bloq_id=bloq.bloq_id, title=bloq.title, address=bloq.address))
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            return False
        return True

    def update(self, bloq: Bloq) -> None:
        row = self._db.get(BloqModel, bloq.bloq_id)
        if row is None:
            row = BloqModel(bloq_id=bloq.bloq_id)

        row.title = bloq.title
        row.address = bloq.address

        self._db.add(row)
        self._db.commit()

    def delete(self, bloq_id: str) -> None:
        row = self._db.get(BloqModel, bloq_id)
        if row is None:
            return

        self._db.delete(row)
        self._db.commit()
