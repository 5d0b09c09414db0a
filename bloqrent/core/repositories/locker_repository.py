from __future__ import annotations

from abc import ABC, abstractmethod

from bloqrent.core.entities.locker import Locker, LockerStatus


class LockerRepository(ABC):
    @abstractmethod
    def get(self, locker_id: str) -> Locker | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_bloq(self, bloq_id: str) -> list[Locker]:
        raise NotImplementedError

    @abstractmethod
    def add_if_absent(self, locker: Locker) -> bool:
        """Return True if inserted, False if duplicate (same locker_id)."""
        raise NotImplementedError

    @abstractmethod
    def upsert(self, locker: Locker) -> None:
        """Create or update a locker, every column included. Only for administrative overrides."""
        raise NotImplementedError

    @abstractmethod
    def set_status(self, locker_id: str, status: LockerStatus) -> bool:
        """Write the door status only. Returns False if the locker does not exist."""
        raise NotImplementedError

    @abstractmethod
    def move_to_bloq(self, locker_id: str, bloq_id: str) -> bool:
        """Write the bloq association only. Returns False if the locker does not exist."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, locker_id: str) -> None:
        """Remove the locker together with its rent history."""
        raise NotImplementedError
