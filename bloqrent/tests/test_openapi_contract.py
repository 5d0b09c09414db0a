from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from fastapi.openapi.utils import get_openapi

from bloqrent.main import app


_HTTP_METHODS = {"get", "post", "put", "delete", "patch"}


def openapi_path() -> Path:
    from bloqrent.infrastructure.config import settings
    return settings.openapi_path


def _load_openapi_yaml() -> dict[str, Any]:
    with openapi_path().open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f)
    assert isinstance(doc, dict)
    return doc


def _normalize_http_methods(methods: Iterable[str]) -> set[str]:
    return {m.lower() for m in methods}


def _implemented_operations() -> dict[str, set[str]]:
    """Paths and methods as FastAPI generates them from the live routes, included routers and all."""
    generated = get_openapi(title=app.title, version=app.version, routes=app.routes)
    operations = {
        path: _normalize_http_methods(key for key in item if key in _HTTP_METHODS)
        for path, item in generated.get("paths", {}).items()
    }
    assert operations, "FastAPI reported no routes"
    return operations


def test_openapi_is_exactly_the_yaml_contract() -> None:
    """
    The app serves the committed YAML contract as its OpenAPI document.
    """
    assert app.openapi() == _load_openapi_yaml()


def test_all_fastapi_routes_are_declared_in_openapi_paths() -> None:
    paths = _load_openapi_yaml().get("paths", {})

    missing = sorted(path for path in _implemented_operations() if path not in paths)

    assert missing == [], f"Routes missing from the contract: {missing}"


def test_route_methods_match_the_contract() -> None:
    paths = _load_openapi_yaml()["paths"]

    declared = {
        path: _normalize_http_methods(key for key in item if key in _HTTP_METHODS)
        for path, item in paths.items()
    }

    assert _implemented_operations() == declared


def test_every_router_is_mounted() -> None:
    prefixes = {path.split("/")[2] for path in _implemented_operations()}

    assert prefixes == {"bloqs", "lockers", "rents"}


def test_contract_declares_the_expected_component_schemas() -> None:
    schemas = _load_openapi_yaml().get("components", {}).get("schemas", {})

    expected = {
        "Bloq",
        "BloqCreate",
        "BloqUpdate",
        "BloqLockerLink",
        "Locker",
        "LockerStatus",
        "LockerStatusUpdate",
        "LockerOccupancy",
        "LockerOccupancyUpdate",
        "Rent",
        "RentCreate",
        "RentSize",
        "RentStatus",
        "RentStatusUpdate",
        "Error",
    }

    assert expected <= set(schemas)


def test_contract_enums_match_the_domain() -> None:
    from bloqrent.core.entities.locker import LockerStatus
    from bloqrent.core.entities.rent import RentSize, RentStatus

    schemas = _load_openapi_yaml()["components"]["schemas"]

    assert schemas["LockerStatus"]["enum"] == [s.value for s in LockerStatus]
    assert schemas["RentStatus"]["enum"] == [s.value for s in RentStatus]
    assert schemas["RentSize"]["enum"] == [s.value for s in RentSize]
