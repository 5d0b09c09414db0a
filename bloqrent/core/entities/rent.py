from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class RentStatus(str, Enum):
    CREATED = "CREATED"
    WAITING_DROPOFF = "WAITING_DROPOFF"
    WAITING_PICKUP = "WAITING_PICKUP"
    DELIVERED = "DELIVERED"


class RentSize(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


ACTIVE_RENT_STATUSES = frozenset({RentStatus.CREATED, RentStatus.WAITING_DROPOFF, RentStatus.WAITING_PICKUP})


@dataclass(slots=True)
class Rent:
    """
    A parcel deposit occupying a locker from creation until delivery.

    Transition methods raise ValueError when the current status does not allow them;
    the read methods derive everything from status and timestamps only.
    """
    rent_id: str
    locker_id: str
    weight: float
    size: RentSize
    status: RentStatus = RentStatus.CREATED
    dropped_off_at: datetime | None = None
    picked_up_at: datetime | None = None

    def mark_for_dropoff(self) -> None:
        if self.status is not RentStatus.CREATED:
            raise ValueError(f"Cannot mark rent {self.rent_id!r} for dropoff in status {self.status.value!r}")
        self.status = RentStatus.WAITING_DROPOFF

    def record_dropoff(self, at: datetime) -> None:
        if self.status not in (RentStatus.CREATED, RentStatus.WAITING_DROPOFF):
            raise ValueError(f"Cannot record dropoff for rent {self.rent_id!r} in status {self.status.value!r}")
        self.status = RentStatus.WAITING_PICKUP
        self.dropped_off_at = at

    def record_pickup(self, at: datetime) -> None:
        if self.status is not RentStatus.WAITING_PICKUP:
            raise ValueError(f"Cannot record pickup for rent {self.rent_id!r} in status {self.status.value!r}")
        self.status = RentStatus.DELIVERED
        self.picked_up_at = at

    def is_in_status(self, status: RentStatus) -> bool:
        return self.status is status

    def is_active(self) -> bool:
        return self.status in ACTIVE_RENT_STATUSES

    def is_dropped_off(self) -> bool:
        return self.dropped_off_at is not None

    def is_picked_up(self) -> bool:
        return self.picked_up_at is not None

    def dropoff_duration(self, now: datetime | None = None) -> timedelta | None:
        """Time the parcel has spent in the locker, up to pickup or `now`."""
        if self.dropped_off_at is None:
            return None
        end = self.picked_up_at or now
        if end is None:
            return None
        return end - self.dropped_off_at

    def total_duration(self) -> timedelta | None:
        if self.dropped_off_at is None or self.picked_up_at is None:
            return None
        return self.picked_up_at - self.dropped_off_at
