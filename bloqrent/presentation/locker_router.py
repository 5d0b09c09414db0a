from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bloqrent.core.errors import DomainRuleViolation, NotFoundError, ValidationError
from bloqrent.presentation.dependencies import get_db
from bloqrent.schemas.models import Locker, LockerOccupancy, LockerOccupancyUpdate, LockerStatusUpdate, Rent
from bloqrent.services.locker_service import (
    create_locker_service,
    delete_locker_service,
    get_locker_service,
    is_locker_occupied_service,
    list_locker_rents_service,
    list_lockers_by_bloq_service,
    occupy_locker_service,
    update_locker_status_service,
)

router = APIRouter(prefix="/api/lockers", tags=["lockers"])


@router.post("/bloq/{bloq_id}", response_model=Locker, status_code=201)
def post_lockers_bloq_bloq_id(bloq_id: UUID, db: Session = Depends(get_db)) -> Locker:
    """
    Create a closed, unoccupied locker in a bloq
    """
    try:
        return create_locker_service(str(bloq_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/bloq/{bloq_id}", response_model=list[Locker])
def get_lockers_bloq_bloq_id(bloq_id: UUID, db: Session = Depends(get_db)) -> list[Locker]:
    """
    List the lockers of a bloq
    """
    try:
        return list_lockers_by_bloq_service(str(bloq_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{locker_id}", response_model=Locker)
def get_lockers_locker_id(locker_id: UUID, db: Session = Depends(get_db)) -> Locker:
    """
    Get a locker
    """
    try:
        return get_locker_service(str(locker_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{locker_id}/status", response_model=Locker)
def put_lockers_locker_id_status(
    locker_id: UUID,
    body: LockerStatusUpdate,
    db: Session = Depends(get_db),
) -> Locker:
    """
    Open or close the locker door
    """
    try:
        return update_locker_status_service(str(locker_id), body.status, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{locker_id}/is-occupied", response_model=LockerOccupancy)
def get_lockers_locker_id_is_occupied(locker_id: UUID, db: Session = Depends(get_db)) -> LockerOccupancy:
    """
    Get the occupancy flag of a locker
    """
    try:
        return is_locker_occupied_service(str(locker_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{locker_id}/occupy", response_model=Locker)
def put_lockers_locker_id_occupy(
    locker_id: UUID,
    body: LockerOccupancyUpdate,
    db: Session = Depends(get_db),
) -> Locker:
    """
    Force the occupancy flag of a locker (administrative)
    """
    try:
        return occupy_locker_service(str(locker_id), body.is_occupied, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{locker_id}/rents", response_model=list[Rent])
def get_lockers_locker_id_rents(locker_id: UUID, db: Session = Depends(get_db)) -> list[Rent]:
    """
    List current and past rents of a locker
    """
    try:
        return list_locker_rents_service(str(locker_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{locker_id}", status_code=204, response_model=None)
def delete_lockers_locker_id(locker_id: UUID, db: Session = Depends(get_db)) -> Response:
    """
    Delete a locker and its delivered rent history

    Returns:
      - 204 when deleted
      - 404 if the locker does not exist
      - 409 while the locker holds an active rent
    """
    try:
        delete_locker_service(str(locker_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))

    return Response(status_code=204)
