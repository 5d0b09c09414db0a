from __future__ import annotations

from sqlalchemy.orm import Session

from bloqrent.core.use_cases.bloq_registry import BloqRegistry
from bloqrent.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqrent.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqrent.schemas.models import Bloq, BloqCreate, BloqUpdate
from bloqrent.services.converters import to_bloq_schema


def _registry(db: Session) -> BloqRegistry:
    return BloqRegistry(bloq_repo=BloqRepositoryImpl(db), locker_repo=LockerRepositoryImpl(db))


def create_bloq_service(body: BloqCreate, db: Session) -> Bloq:
    return to_bloq_schema(_registry(db).create(title=body.title, address=body.address))


def get_bloq_service(bloq_id: str, db: Session) -> Bloq:
    return to_bloq_schema(_registry(db).get(bloq_id))


def list_bloqs_service(db: Session) -> list[Bloq]:
    return [to_bloq_schema(bloq) for bloq in _registry(db).list_all()]


def update_bloq_service(bloq_id: str, body: BloqUpdate, db: Session) -> Bloq:
    return to_bloq_schema(_registry(db).update(bloq_id, title=body.title, address=body.address))


def delete_bloq_service(bloq_id: str, db: Session) -> None:
    _registry(db).delete(bloq_id)


def add_locker_to_bloq_service(bloq_id: str, locker_id: str, db: Session) -> Bloq:
    return to_bloq_schema(_registry(db).add_locker(bloq_id, locker_id))
