from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LockerStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(slots=True)
class Locker:
    locker_id: str
    bloq_id: str
    status: LockerStatus = LockerStatus.CLOSED
    is_occupied: bool = False

    def set_occupied(self, is_occupied: bool) -> None:
        self.is_occupied = is_occupied
