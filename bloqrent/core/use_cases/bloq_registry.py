from __future__ import annotations

import logging
from typing import Callable

from bloqrent.core.entities.bloq import Bloq
from bloqrent.core.errors import ConflictError, NotFoundError, ValidationError
from bloqrent.core.identifiers import generate_id
from bloqrent.core.repositories.bloq_repository import BloqRepository
from bloqrent.core.repositories.locker_repository import LockerRepository

logger = logging.getLogger(__name__)


class BloqRegistry:
    def __init__(
            self,
            *,
            bloq_repo: BloqRepository,
            locker_repo: LockerRepository,
            id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._bloq_repo = bloq_repo
        self._locker_repo = locker_repo
        self._id_factory = id_factory

    def create(self, *, title: str, address: str) -> Bloq:
        bloq = Bloq(
            bloq_id=self._id_factory(),
            title=self._require_text(title, "Title"),
            address=self._require_text(address, "Address"),
        )

        if not self._bloq_repo.add_if_absent(bloq):
            logger.warning("Bloq id collision on %s, retrying with a fresh id", bloq.bloq_id)
            bloq.bloq_id = self._id_factory()
            if not self._bloq_repo.add_if_absent(bloq):
                raise ConflictError("Could not allocate a unique bloq id")

        logger.info("Created bloq %s", bloq.bloq_id)
        return bloq

    def get(self, bloq_id: str) -> Bloq:
        bloq = self._bloq_repo.get(bloq_id)
        if bloq is None:
            raise NotFoundError("Bloq not found")
        return bloq

    def list_all(self) -> list[Bloq]:
        return self._bloq_repo.list_all()

    def update(self, bloq_id: str, *, title: str, address: str) -> Bloq:
        title = self._require_text(title, "Title")
        address = self._require_text(address, "Address")

        bloq = self.get(bloq_id)
        bloq.update_details(title=title, address=address)
        self._bloq_repo.update(bloq)
        return bloq

    def delete(self, bloq_id: str) -> None:
        bloq = self.get(bloq_id)
        if bloq.has_lockers():
            logger.warning("Refused to delete bloq %s: %d lockers still attached", bloq_id, len(bloq.lockers))
            raise ConflictError("Bloq still has lockers")

        self._bloq_repo.delete(bloq_id)
        logger.info("Deleted bloq %s", bloq_id)

    def add_locker(self, bloq_id: str, locker_id: str) -> Bloq:
        """Associate an existing locker with the bloq. The locker leaves its previous bloq."""
        self.get(bloq_id)

        if self._locker_repo.get(locker_id) is None:
            raise NotFoundError("Locker not found")

        if not self._locker_repo.move_to_bloq(locker_id, bloq_id):
            raise NotFoundError("Locker not found")

        logger.info("Locker %s associated with bloq %s", locker_id, bloq_id)
        return self.get(bloq_id)

    @staticmethod
    def _require_text(value: str, name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{name} is required")
        return value
