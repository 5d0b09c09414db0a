from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy.orm import Session, sessionmaker
from starlette.testclient import TestClient

from bloqrent.core.entities.bloq import Bloq
from bloqrent.core.entities.locker import Locker
from bloqrent.core.use_cases.bloq_registry import BloqRegistry
from bloqrent.core.use_cases.locker_manager import LockerManager
from bloqrent.core.use_cases.rent_lifecycle import RentLifecycleEngine
from bloqrent.infrastructure.database import Base, build_engine
from bloqrent.infrastructure.repositories.bloq_repository_impl import BloqRepositoryImpl
from bloqrent.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from bloqrent.infrastructure.repositories.rent_repository_impl import RentRepositoryImpl
from bloqrent.main import app
from bloqrent.presentation.dependencies import get_db


@pytest.fixture()
def db() -> Iterator[Session]:
    """
    A fresh in-memory database per test, so no test sees another test's rows.
    """
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def client(db: Session) -> Iterator[TestClient]:
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def bloq_repo(db: Session) -> BloqRepositoryImpl:
    return BloqRepositoryImpl(db)


@pytest.fixture()
def locker_repo(db: Session) -> LockerRepositoryImpl:
    return LockerRepositoryImpl(db)


@pytest.fixture()
def rent_repo(db: Session) -> RentRepositoryImpl:
    return RentRepositoryImpl(db)


@pytest.fixture()
def registry(bloq_repo: BloqRepositoryImpl, locker_repo: LockerRepositoryImpl) -> BloqRegistry:
    return BloqRegistry(bloq_repo=bloq_repo, locker_repo=locker_repo)


@pytest.fixture()
def manager(
        bloq_repo: BloqRepositoryImpl,
        locker_repo: LockerRepositoryImpl,
        rent_repo: RentRepositoryImpl,
) -> LockerManager:
    return LockerManager(locker_repo=locker_repo, bloq_repo=bloq_repo, rent_repo=rent_repo)


@pytest.fixture()
def engine(rent_repo: RentRepositoryImpl, locker_repo: LockerRepositoryImpl) -> RentLifecycleEngine:
    return RentLifecycleEngine(rent_repo=rent_repo, locker_repo=locker_repo)


@pytest.fixture()
def make_bloq(registry: BloqRegistry):
    def _make(title: str = "Test Bloq", address: str = "123 Test St") -> Bloq:
        return registry.create(title=title, address=address)

    return _make


@pytest.fixture()
def make_locker(manager: LockerManager, make_bloq):
    def _make(bloq_id: str | None = None) -> Locker:
        if bloq_id is None:
            bloq_id = make_bloq().bloq_id
        return manager.create(bloq_id=bloq_id)

    return _make
