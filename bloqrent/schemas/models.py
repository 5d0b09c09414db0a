from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bloqrent.core.entities.locker import LockerStatus
from bloqrent.core.entities.rent import RentSize, RentStatus


class _StrictBody(BaseModel):
    model_config = ConfigDict(extra="forbid")


# -----------------------------
# Request bodies
# -----------------------------
class BloqCreate(_StrictBody):
    title: str = Field(min_length=1)
    address: str = Field(min_length=1)


class BloqUpdate(_StrictBody):
    title: str = Field(min_length=1)
    address: str = Field(min_length=1)


class BloqLockerLink(_StrictBody):
    locker_id: UUID


class LockerStatusUpdate(_StrictBody):
    status: LockerStatus


class LockerOccupancyUpdate(_StrictBody):
    is_occupied: bool


class RentCreate(_StrictBody):
    weight: float = Field(gt=0)
    size: RentSize


class RentStatusUpdate(_StrictBody):
    status: RentStatus


# -----------------------------
# Responses
# -----------------------------
class Locker(BaseModel):
    locker_id: str
    bloq_id: str
    status: LockerStatus
    is_occupied: bool


class LockerOccupancy(BaseModel):
    locker_id: str
    is_occupied: bool


class Bloq(BaseModel):
    bloq_id: str
    title: str
    address: str
    lockers: List[Locker] = []


class Rent(BaseModel):
    rent_id: str
    locker_id: str
    weight: float
    size: RentSize
    status: RentStatus
    dropped_off_at: datetime | None = None
    picked_up_at: datetime | None = None
