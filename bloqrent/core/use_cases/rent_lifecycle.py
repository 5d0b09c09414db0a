from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable

from bloqrent.core.entities.rent import ACTIVE_RENT_STATUSES, Rent, RentSize, RentStatus
from bloqrent.core.errors import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from bloqrent.core.identifiers import generate_id
from bloqrent.core.repositories.locker_repository import LockerRepository
from bloqrent.core.repositories.rent_repository import LockerClaim, RentRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RentLifecycleEngine:
    """
    Drives rents through CREATED -> WAITING_DROPOFF -> WAITING_PICKUP -> DELIVERED
    and keeps the locker's occupancy flag in step with it:

      - create occupies the locker in the same transaction that inserts the rent
      - record_pickup releases the locker in the same transaction that delivers the rent
      - update_status (administrative) reconciles the flag after overwriting the status
    """

    def __init__(
            self,
            *,
            rent_repo: RentRepository,
            locker_repo: LockerRepository,
            id_factory: Callable[[], str] = generate_id,
            clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._rent_repo = rent_repo
        self._locker_repo = locker_repo
        self._id_factory = id_factory
        self._clock = clock

    # -----------------------------
    # Queries
    # -----------------------------
    def get(self, rent_id: str) -> Rent:
        rent = self._rent_repo.get(rent_id)
        if rent is None:
            raise NotFoundError("Rent not found")
        return rent

    def list_by_locker(self, locker_id: str) -> list[Rent]:
        if self._locker_repo.get(locker_id) is None:
            raise NotFoundError("Locker not found")
        return self._rent_repo.list_by_locker(locker_id)

    # -----------------------------
    # Commands
    # -----------------------------
    def create(self, *, locker_id: str, weight: float, size: RentSize | str) -> Rent:
        weight = self._require_weight(weight)
        size = self._require_size(size)

        locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")
        if locker.is_occupied:
            logger.warning("Rejected rent for occupied locker %s", locker_id)
            raise ConflictError("Locker is already occupied")

        rent = Rent(rent_id=self._id_factory(), locker_id=locker_id, weight=weight, size=size)

        # The pre-check above can be stale; the guarded claim is what serializes creates per locker.
        claim = self._rent_repo.add_claiming_locker(rent)
        if claim is LockerClaim.DUPLICATE_ID:
            logger.warning("Rent id collision on %s, retrying with a fresh id", rent.rent_id)
            rent.rent_id = self._id_factory()
            claim = self._rent_repo.add_claiming_locker(rent)

        if claim is LockerClaim.LOCKER_MISSING:
            raise NotFoundError("Locker not found")
        if claim is LockerClaim.LOCKER_OCCUPIED:
            logger.warning("Lost occupancy race for locker %s", locker_id)
            raise ConflictError("Locker is already occupied")
        if claim is LockerClaim.DUPLICATE_ID:
            raise ConflictError("Could not allocate a unique rent id")

        logger.info("Created rent %s in locker %s (size=%s)", rent.rent_id, locker_id, size.value)
        return rent

    def mark_for_dropoff(self, rent_id: str) -> Rent:
        rent = self.get(rent_id)
        previous = rent.status
        self._transition(rent.mark_for_dropoff)
        if not self._rent_repo.update_if_status(rent, expected=previous):
            raise self._moved_on(rent_id, previous)

        logger.info("Rent %s is waiting for dropoff", rent_id)
        return rent

    def record_dropoff(self, rent_id: str) -> Rent:
        rent = self.get(rent_id)
        previous = rent.status
        self._transition(rent.record_dropoff, self._clock())
        if not self._rent_repo.update_if_status(rent, expected=previous):
            raise self._moved_on(rent_id, previous)

        logger.info("Recorded dropoff for rent %s", rent_id)
        return rent

    def record_pickup(self, rent_id: str) -> Rent:
        rent = self.get(rent_id)
        previous = rent.status
        self._transition(rent.record_pickup, self._clock())
        if not self._rent_repo.update_releasing_locker(rent, expected=previous):
            raise self._moved_on(rent_id, previous)

        logger.info("Recorded pickup for rent %s, locker %s released", rent_id, rent.locker_id)
        return rent

    def update_status(self, rent_id: str, status: RentStatus | str) -> Rent:
        """
        Administrative overwrite: no lifecycle guards, timestamps untouched.
        """
        status = self._require_status(status)
        rent = self.get(rent_id)

        reactivating = status in ACTIVE_RENT_STATUSES and not rent.is_active()
        previous = rent.status
        rent.status = status

        if reactivating:
            # Going active again takes the locker the same way create does.
            claim = self._rent_repo.update_claiming_locker(rent)
            if claim is LockerClaim.LOCKER_MISSING:
                raise NotFoundError("Locker not found")
            if claim is not LockerClaim.CLAIMED:
                logger.warning("Rejected reactivation of rent %s: locker %s is occupied", rent_id, rent.locker_id)
                raise ConflictError("Locker is already occupied")
            occupied = True
        else:
            occupied = self._rent_repo.update_syncing_locker(rent)

        logger.info(
            "Rent %s status overridden %s -> %s (locker %s occupied=%s)",
            rent_id, previous.value, status.value, rent.locker_id, occupied,
        )
        return rent

    # -----------------------------
    # Internal helpers
    # -----------------------------
    @staticmethod
    def _transition(step: Callable[..., None], *args) -> None:
        try:
            step(*args)
        except ValueError as e:
            logger.warning("Invalid transition: %s", e)
            raise InvalidTransitionError(str(e)) from e

    @staticmethod
    def _moved_on(rent_id: str, previous: RentStatus) -> InvalidTransitionError:
        logger.warning("Rent %s left status %s before the write landed", rent_id, previous.value)
        return InvalidTransitionError(f"Rent {rent_id!r} is no longer in status {previous.value!r}")

    @staticmethod
    def _require_weight(weight: float) -> float:
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValidationError("weight must be a number")
        if not math.isfinite(weight) or weight <= 0:
            raise ValidationError("Weight must be a positive number")
        return float(weight)

    @staticmethod
    def _require_size(size: RentSize | str) -> RentSize:
        try:
            return RentSize(size)
        except ValueError as e:
            raise ValidationError("Size must be one of: XS, S, M, L, XL") from e

    @staticmethod
    def _require_status(status: RentStatus | str) -> RentStatus:
        try:
            return RentStatus(status)
        except ValueError as e:
            raise ValidationError(
                "Status must be one of: CREATED, WAITING_DROPOFF, WAITING_PICKUP, DELIVERED"
            ) from e
