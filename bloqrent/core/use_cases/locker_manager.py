from __future__ import annotations

import logging
from typing import Callable

from bloqrent.core.entities.locker import Locker, LockerStatus
from bloqrent.core.entities.rent import Rent
from bloqrent.core.errors import ConflictError, NotFoundError, ValidationError
from bloqrent.core.identifiers import generate_id
from bloqrent.core.repositories.bloq_repository import BloqRepository
from bloqrent.core.repositories.locker_repository import LockerRepository
from bloqrent.core.repositories.rent_repository import RentRepository

logger = logging.getLogger(__name__)


class LockerManager:
    """
    Locker lifecycle: creation under a bloq, door status and the occupancy flag.

    `occupy` is an escape hatch; rents keep occupancy in step on their own through
    RentLifecycleEngine.
    """

    def __init__(
            self,
            *,
            locker_repo: LockerRepository,
            bloq_repo: BloqRepository,
            rent_repo: RentRepository,
            id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._locker_repo = locker_repo
        self._bloq_repo = bloq_repo
        self._rent_repo = rent_repo
        self._id_factory = id_factory

    def create(self, *, bloq_id: str) -> Locker:
        if self._bloq_repo.get(bloq_id) is None:
            raise NotFoundError("Bloq not found")

        locker = Locker(locker_id=self._id_factory(), bloq_id=bloq_id)
        if not self._locker_repo.add_if_absent(locker):
            logger.warning("Locker id collision on %s, retrying with a fresh id", locker.locker_id)
            locker.locker_id = self._id_factory()
            if not self._locker_repo.add_if_absent(locker):
                raise ConflictError("Could not allocate a unique locker id")

        logger.info("Created locker %s in bloq %s", locker.locker_id, bloq_id)
        return locker

    def get(self, locker_id: str) -> Locker:
        locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")
        return locker

    def list_by_bloq(self, bloq_id: str) -> list[Locker]:
        if self._bloq_repo.get(bloq_id) is None:
            raise NotFoundError("Bloq not found")
        return self._locker_repo.list_by_bloq(bloq_id)

    def update_status(self, locker_id: str, status: LockerStatus | str) -> Locker:
        try:
            status = LockerStatus(status)
        except ValueError as e:
            raise ValidationError("Status must be either 'OPEN' or 'CLOSED'") from e

        self.get(locker_id)
        if not self._locker_repo.set_status(locker_id, status):
            raise NotFoundError("Locker not found")

        logger.info("Locker %s is now %s", locker_id, status.value)
        return self.get(locker_id)

    def occupy(self, locker_id: str, is_occupied: bool) -> Locker:
        if not isinstance(is_occupied, bool):
            raise ValidationError("isOccupied must be a boolean")

        locker = self.get(locker_id)
        if self._rent_repo.has_active_for_locker(locker_id) != is_occupied:
            logger.warning(
                "Locker %s occupancy forced to %s, which disagrees with its rents",
                locker_id, is_occupied,
            )

        locker.set_occupied(is_occupied)
        self._locker_repo.upsert(locker)
        return locker

    def is_occupied(self, locker_id: str) -> bool:
        return self.get(locker_id).is_occupied

    def list_rents(self, locker_id: str) -> list[Rent]:
        self.get(locker_id)
        return self._rent_repo.list_by_locker(locker_id)

    def delete(self, locker_id: str) -> None:
        self.get(locker_id)
        if self._rent_repo.has_active_for_locker(locker_id):
            logger.warning("Refused to delete locker %s: it holds an active rent", locker_id)
            raise ConflictError("Locker has an active rent")

        self._locker_repo.delete(locker_id)
        logger.info("Deleted locker %s", locker_id)
