from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

import bloqrent.presentation.bloq_router as bloq_router
import bloqrent.presentation.locker_router as locker_router
import bloqrent.presentation.rent_router as rent_router
from bloqrent.core.entities.locker import LockerStatus
from bloqrent.core.entities.rent import RentSize, RentStatus
from bloqrent.core.errors import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from bloqrent.presentation.dependencies import get_db
from bloqrent.presentation.error_handlers import register_error_handlers
from bloqrent.schemas.models import Bloq, Locker, LockerOccupancy, Rent


class _DummyDB:
    """A minimal stand-in for a SQLAlchemy Session (services are monkeypatched, so it is never used)."""


@pytest.fixture()
def app() -> FastAPI:
    """
    A tiny FastAPI app with only the routers and error handlers.

    The DB dependency is overridden so router tests never touch SQLite.
    """
    test_app = FastAPI()
    register_error_handlers(test_app)
    test_app.include_router(bloq_router.router)
    test_app.include_router(locker_router.router)
    test_app.include_router(rent_router.router)

    def _override_get_db():
        yield _DummyDB()

    test_app.dependency_overrides[get_db] = _override_get_db
    return test_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _raise(exc: Exception):
    def _fake(*args, **kwargs):
        raise exc

    return _fake


def _rent(**overrides) -> Rent:
    base = {
        "rent_id": str(uuid4()),
        "locker_id": str(uuid4()),
        "weight": 5.5,
        "size": RentSize.M,
        "status": RentStatus.CREATED,
    }
    base.update(overrides)
    return Rent(**base)


# -----------------------------
# Bloqs
# -----------------------------
def test_post_bloq_returns_201(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    bloq_id = str(uuid4())

    def _fake_create_bloq_service(body, db):
        return Bloq(bloq_id=bloq_id, title=body.title, address=body.address)

    monkeypatch.setattr(bloq_router, "create_bloq_service", _fake_create_bloq_service)

    r = client.post("/api/bloqs", json={"title": "Test Bloq", "address": "123 Test St"})
    assert r.status_code == 201
    assert r.json() == {"bloq_id": bloq_id, "title": "Test Bloq", "address": "123 Test St", "lockers": []}


def test_post_bloq_missing_title_returns_400_without_calling_service(
        client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(bloq_router, "create_bloq_service", _raise(AssertionError("service must not be called")))

    r = client.post("/api/bloqs", json={"address": "123 Test St"})
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Validation failed"
    assert any(err["loc"][-1] == "title" for err in body["detail"])


def test_post_bloq_rejects_unknown_fields(client: TestClient) -> None:
    r = client.post("/api/bloqs", json={"title": "T", "address": "A", "owner": "me"})
    assert r.status_code == 400


def test_get_bloq_not_found_returns_404(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(bloq_router, "get_bloq_service", _raise(NotFoundError("Bloq not found")))

    r = client.get(f"/api/bloqs/{uuid4()}")
    assert r.status_code == 404
    assert r.json() == {"detail": "Bloq not found"}


def test_malformed_id_returns_400(client: TestClient) -> None:
    r = client.get("/api/bloqs/not-a-uuid")
    assert r.status_code == 400
    assert r.json()["error"] == "Validation failed"


def test_delete_bloq_with_lockers_returns_409(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(bloq_router, "delete_bloq_service", _raise(ConflictError("Bloq still has lockers")))

    r = client.delete(f"/api/bloqs/{uuid4()}")
    assert r.status_code == 409
    assert r.json()["detail"] == "Bloq still has lockers"


def test_delete_bloq_returns_204(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(bloq_router, "delete_bloq_service", lambda bloq_id, db: None)

    r = client.delete(f"/api/bloqs/{uuid4()}")
    assert r.status_code == 204
    assert r.text == ""


# -----------------------------
# Lockers
# -----------------------------
def test_create_locker_passes_bloq_id_as_string(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    bloq_id = uuid4()
    seen: dict[str, str] = {}

    def _fake_create_locker_service(received_bloq_id, db):
        seen["bloq_id"] = received_bloq_id
        return Locker(locker_id=str(uuid4()), bloq_id=received_bloq_id, status=LockerStatus.CLOSED, is_occupied=False)

    monkeypatch.setattr(locker_router, "create_locker_service", _fake_create_locker_service)

    r = client.post(f"/api/lockers/bloq/{bloq_id}")
    assert r.status_code == 201
    assert seen == {"bloq_id": str(bloq_id)}
    assert r.json()["status"] == "CLOSED"
    assert r.json()["is_occupied"] is False


def test_update_locker_status_rejects_unknown_value(client: TestClient) -> None:
    r = client.put(f"/api/lockers/{uuid4()}/status", json={"status": "AJAR"})
    assert r.status_code == 400


def test_is_occupied_returns_flag(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    locker_id = str(uuid4())
    monkeypatch.setattr(
        locker_router,
        "is_locker_occupied_service",
        lambda lid, db: LockerOccupancy(locker_id=lid, is_occupied=True),
    )

    r = client.get(f"/api/lockers/{locker_id}/is-occupied")
    assert r.status_code == 200
    assert r.json() == {"locker_id": locker_id, "is_occupied": True}


def test_delete_locker_with_active_rent_returns_409(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(locker_router, "delete_locker_service", _raise(ConflictError("Locker has an active rent")))

    r = client.delete(f"/api/lockers/{uuid4()}")
    assert r.status_code == 409


# -----------------------------
# Rents
# -----------------------------
def test_create_rent_returns_201(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    locker_id = str(uuid4())

    def _fake_create_rent_service(lid, body, db):
        return _rent(locker_id=lid, weight=body.weight, size=body.size)

    monkeypatch.setattr(rent_router, "create_rent_service", _fake_create_rent_service)

    r = client.post(f"/api/rents/locker/{locker_id}", json={"weight": 5.5, "size": "M"})
    assert r.status_code == 201
    body = r.json()
    assert body["locker_id"] == locker_id
    assert body["status"] == "CREATED"
    assert body["dropped_off_at"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"weight": 0, "size": "M"},
        {"weight": -1, "size": "M"},
        {"weight": "heavy", "size": "M"},
        {"weight": 1.0, "size": "XXL"},
        {"weight": 1.0},
    ],
)
def test_create_rent_invalid_body_returns_400(
        client: TestClient, monkeypatch: pytest.MonkeyPatch, payload: dict
) -> None:
    monkeypatch.setattr(rent_router, "create_rent_service", _raise(AssertionError("service must not be called")))

    r = client.post(f"/api/rents/locker/{uuid4()}", json=payload)
    assert r.status_code == 400


def test_create_rent_on_occupied_locker_returns_409(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rent_router, "create_rent_service", _raise(ConflictError("Locker is already occupied")))

    r = client.post(f"/api/rents/locker/{uuid4()}", json={"weight": 1.0, "size": "S"})
    assert r.status_code == 409
    assert r.json() == {"detail": "Locker is already occupied"}


def test_create_rent_missing_locker_returns_404(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rent_router, "create_rent_service", _raise(NotFoundError("Locker not found")))

    r = client.post(f"/api/rents/locker/{uuid4()}", json={"weight": 1.0, "size": "S"})
    assert r.status_code == 404


def test_create_rent_domain_validation_returns_400(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        rent_router, "create_rent_service", _raise(ValidationError("Weight must be a positive number"))
    )

    r = client.post(f"/api/rents/locker/{uuid4()}", json={"weight": 1.0, "size": "S"})
    assert r.status_code == 400
    assert r.json() == {"detail": "Weight must be a positive number"}


def test_pickup_from_wrong_status_returns_409(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        rent_router,
        "record_pickup_service",
        _raise(InvalidTransitionError("Cannot record pickup for rent 'x' in status 'CREATED'")),
    )

    r = client.put(f"/api/rents/{uuid4()}/pickup")
    assert r.status_code == 409
    assert "CREATED" in r.json()["detail"]


def test_update_rent_status_rejects_unknown_status(client: TestClient) -> None:
    r = client.put(f"/api/rents/{uuid4()}/status", json={"status": "LOST"})
    assert r.status_code == 400


def test_get_rent_not_found_returns_404(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rent_router, "get_rent_service", _raise(NotFoundError("Rent not found")))

    r = client.get(f"/api/rents/{uuid4()}")
    assert r.status_code == 404
    assert r.json() == {"detail": "Rent not found"}
