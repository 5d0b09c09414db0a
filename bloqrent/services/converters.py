from __future__ import annotations

from bloqrent.core.entities.bloq import Bloq as CoreBloq
from bloqrent.core.entities.locker import Locker as CoreLocker
from bloqrent.core.entities.rent import Rent as CoreRent
from bloqrent.schemas.models import Bloq, Locker, Rent


def to_locker_schema(locker: CoreLocker) -> Locker:
    return Locker(
        locker_id=locker.locker_id,
        bloq_id=locker.bloq_id,
        status=locker.status,
        is_occupied=locker.is_occupied,
    )


def to_bloq_schema(bloq: CoreBloq) -> Bloq:
    return Bloq(
        bloq_id=bloq.bloq_id,
        title=bloq.title,
        address=bloq.address,
        lockers=[to_locker_schema(locker) for locker in bloq.lockers],
    )


def to_rent_schema(rent: CoreRent) -> Rent:
    return Rent(
        rent_id=rent.rent_id,
        locker_id=rent.locker_id,
        weight=rent.weight,
        size=rent.size,
        status=rent.status,
        dropped_off_at=rent.dropped_off_at,
        picked_up_at=rent.picked_up_at,
    )
