from __future__ import annotations

from abc import ABC, abstractmethod

from bloqrent.core.entities.bloq import Bloq


class BloqRepository(ABC):
    @abstractmethod
    def get(self, bloq_id: str) -> Bloq | None:
        """Aggregate load: bloq + its associated lockers."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Bloq]:
        raise NotImplementedError

    @abstractmethod
    def add_if_absent(self, bloq: Bloq) -> bool:
        """Return True if inserted, False if duplicate (same bloq_id)."""
        raise NotImplementedError

    @abstractmethod
    def update(self, bloq: Bloq) -> None:
        """Persist title and address of an existing bloq."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, bloq_id: str) -> None:
        raise NotImplementedError
