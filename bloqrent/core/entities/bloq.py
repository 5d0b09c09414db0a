from __future__ import annotations

from dataclasses import dataclass, field

from bloqrent.core.entities.locker import Locker


@dataclass(slots=True)
class Bloq:
    """
    A physical site. Lockers are associated with a bloq, not owned by it.
    """
    bloq_id: str
    title: str
    address: str
    lockers: list[Locker] = field(default_factory=list)

    def update_details(self, *, title: str, address: str) -> None:
        self.title = title
        self.address = address

    def has_lockers(self) -> bool:
        return bool(self.lockers)
