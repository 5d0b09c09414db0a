from __future__ import annotations

from sqlalchemy.orm import Session

from bloqrent.core.entities.rent import RentStatus
from bloqrent.core.use_cases.rent_lifecycle import RentLifecycleEngine
from bloqrent.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqrent.infrastructure.repositories.rent_repository_impl import RentRepositoryImpl
from bloqrent.schemas.models import Rent, RentCreate
from bloqrent.services.converters import to_rent_schema


def _engine(db: Session) -> RentLifecycleEngine:
    return RentLifecycleEngine(rent_repo=RentRepositoryImpl(db), locker_repo=LockerRepositoryImpl(db))


def create_rent_service(locker_id: str, body: RentCreate, db: Session) -> Rent:
    return to_rent_schema(_engine(db).create(locker_id=locker_id, weight=body.weight, size=body.size))


def get_rent_service(rent_id: str, db: Session) -> Rent:
    return to_rent_schema(_engine(db).get(rent_id))


def list_rents_by_locker_service(locker_id: str, db: Session) -> list[Rent]:
    return [to_rent_schema(rent) for rent in _engine(db).list_by_locker(locker_id)]


def update_rent_status_service(rent_id: str, status: RentStatus, db: Session) -> Rent:
    return to_rent_schema(_engine(db).update_status(rent_id, status))


def mark_for_dropoff_service(rent_id: str, db: Session) -> Rent:
    return to_rent_schema(_engine(db).mark_for_dropoff(rent_id))


def record_dropoff_service(rent_id: str, db: Session) -> Rent:
    return to_rent_schema(_engine(db).record_dropoff(rent_id))


def record_pickup_service(rent_id: str, db: Session) -> Rent:
    return to_rent_schema(_engine(db).record_pickup(rent_id))
