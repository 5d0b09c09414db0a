from __future__ import annotations

from sqlalchemy.orm import Session

from bloqrent.core.entities.locker import LockerStatus
from bloqrent.core.use_cases.locker_manager import LockerManager
from bloqrent.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqrent.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqrent.infrastructure.repositories.rent_repository_impl import RentRepositoryImpl
from bloqrent.schemas.models import Locker, LockerOccupancy, Rent
from bloqrent.services.converters import to_locker_schema, to_rent_schema


def _manager(db: Session) -> LockerManager:
    return LockerManager(
        locker_repo=LockerRepositoryImpl(db),
        bloq_repo=BloqRepositoryImpl(db),
        rent_repo=RentRepositoryImpl(db),
    )


def create_locker_service(bloq_id: str, db: Session) -> Locker:
    return to_locker_schema(_manager(db).create(bloq_id=bloq_id))


def get_locker_service(locker_id: str, db: Session) -> Locker:
    return to_locker_schema(_manager(db).get(locker_id))


def list_lockers_by_bloq_service(bloq_id: str, db: Session) -> list[Locker]:
    return [to_locker_schema(locker) for locker in _manager(db).list_by_bloq(bloq_id)]


def update_locker_status_service(locker_id: str, status: LockerStatus, db: Session) -> Locker:
    return to_locker_schema(_manager(db).update_status(locker_id, status))


def is_locker_occupied_service(locker_id: str, db: Session) -> LockerOccupancy:
    return LockerOccupancy(locker_id=locker_id, is_occupied=_manager(db).is_occupied(locker_id))


def occupy_locker_service(locker_id: str, is_occupied: bool, db: Session) -> Locker:
    return to_locker_schema(_manager(db).occupy(locker_id, is_occupied))


def list_locker_rents_service(locker_id: str, db: Session) -> list[Rent]:
    return [to_rent_schema(rent) for rent in _manager(db).list_rents(locker_id)]


def delete_locker_service(locker_id: str, db: Session) -> None:
    _manager(db).delete(locker_id)
