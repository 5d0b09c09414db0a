from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bloqrent.core.errors import DomainRuleViolation, NotFoundError, ValidationError
from bloqrent.presentation.dependencies import get_db
from bloqrent.schemas.models import Rent, RentCreate, RentStatusUpdate
from bloqrent.services.rent_service import (
    create_rent_service,
    get_rent_service,
    list_rents_by_locker_service,
    mark_for_dropoff_service,
    record_dropoff_service,
    record_pickup_service,
    update_rent_status_service,
)

router = APIRouter(prefix="/api/rents", tags=["rents"])


@router.post("/locker/{locker_id}", response_model=Rent, status_code=201)
def post_rents_locker_locker_id(locker_id: UUID, body: RentCreate, db: Session = Depends(get_db)) -> Rent:
    """
    Create a rent and occupy the locker

    Returns:
      - 201 with the rent in status CREATED
      - 400 on invalid weight/size
      - 404 if the locker does not exist
      - 409 if the locker is already occupied
    """
    try:
        return create_rent_service(str(locker_id), body, db)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/locker/{locker_id}", response_model=list[Rent])
def get_rents_locker_locker_id(locker_id: UUID, db: Session = Depends(get_db)) -> list[Rent]:
    """
    List the rents of a locker
    """
    try:
        return list_rents_by_locker_service(str(locker_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{rent_id}", response_model=Rent)
def get_rents_rent_id(rent_id: UUID, db: Session = Depends(get_db)) -> Rent:
    """
    Get a rent
    """
    try:
        return get_rent_service(str(rent_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{rent_id}/status", response_model=Rent)
def put_rents_rent_id_status(rent_id: UUID, body: RentStatusUpdate, db: Session = Depends(get_db)) -> Rent:
    """
    Overwrite the rent status without lifecycle checks (administrative).
    The locker's occupancy flag is reconciled with the new status.
    """
    try:
        return update_rent_status_service(str(rent_id), body.status, db)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{rent_id}/mark-for-dropoff", response_model=Rent)
def put_rents_rent_id_mark_for_dropoff(rent_id: UUID, db: Session = Depends(get_db)) -> Rent:
    """
    CREATED -> WAITING_DROPOFF
    """
    try:
        return mark_for_dropoff_service(str(rent_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{rent_id}/dropoff", response_model=Rent)
def put_rents_rent_id_dropoff(rent_id: UUID, db: Session = Depends(get_db)) -> Rent:
    """
    CREATED | WAITING_DROPOFF -> WAITING_PICKUP, stamps dropped_off_at
    """
    try:
        return record_dropoff_service(str(rent_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{rent_id}/pickup", response_model=Rent)
def put_rents_rent_id_pickup(rent_id: UUID, db: Session = Depends(get_db)) -> Rent:
    """
    WAITING_PICKUP -> DELIVERED, stamps picked_up_at and frees the locker
    """
    try:
        return record_pickup_service(str(rent_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
