from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from bloqrent.core.entities.rent import Rent, RentStatus


class LockerClaim(str, Enum):
    """Outcome of a write that has to take a free locker."""
    CLAIMED = "CLAIMED"
    LOCKER_OCCUPIED = "LOCKER_OCCUPIED"
    LOCKER_MISSING = "LOCKER_MISSING"
    DUPLICATE_ID = "DUPLICATE_ID"


class RentRepository(ABC):
    """
    Repository interface for Rent persistence.

    Every write is a single transaction: either all of it is committed or nothing is.
    Writes taking an `expected` status only apply if the stored rent is still in it.
    """

    @abstractmethod
    def get(self, rent_id: str) -> Rent | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_locker(self, locker_id: str) -> list[Rent]:
        raise NotImplementedError

    @abstractmethod
    def has_active_for_locker(self, locker_id: str) -> bool:
        """True if a non-DELIVERED rent references the locker."""
        raise NotImplementedError

    @abstractmethod
    def add_claiming_locker(self, rent: Rent) -> LockerClaim:
        """
        Flip the locker to occupied only if it is currently free, and insert the rent.
        Anything other than CLAIMED means nothing was written.
        """
        raise NotImplementedError

    @abstractmethod
    def update_if_status(self, rent: Rent, *, expected: RentStatus) -> bool:
        """Persist rent fields only, never the locker. False if the stored status moved on."""
        raise NotImplementedError

    @abstractmethod
    def update_releasing_locker(self, rent: Rent, *, expected: RentStatus) -> bool:
        """Persist the rent and mark its locker as not occupied. False if the stored status moved on."""
        raise NotImplementedError

    @abstractmethod
    def update_claiming_locker(self, rent: Rent) -> LockerClaim:
        """
        Persist a rent that becomes active again. Like add_claiming_locker, the locker must
        be free and no other active rent may reference it; otherwise nothing is written.
        """
        raise NotImplementedError

    @abstractmethod
    def update_syncing_locker(self, rent: Rent) -> bool:
        """
        Persist the rent, then set the locker's occupancy flag from whether any active
        rent references it. Returns the resulting flag.
        """
        raise NotImplementedError
