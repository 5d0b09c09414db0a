from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bloqrent.core.errors import DomainRuleViolation, NotFoundError, ValidationError
from bloqrent.presentation.dependencies import get_db
from bloqrent.schemas.models import Bloq, BloqCreate, BloqLockerLink, BloqUpdate
from bloqrent.services.bloq_service import (
    add_locker_to_bloq_service,
    create_bloq_service,
    delete_bloq_service,
    get_bloq_service,
    list_bloqs_service,
    update_bloq_service,
)

router = APIRouter(prefix="/api/bloqs", tags=["bloqs"])


@router.post("", response_model=Bloq, status_code=201)
def post_bloqs(body: BloqCreate, db: Session = Depends(get_db)) -> Bloq:
    """
    Create a bloq
    """
    try:
        return create_bloq_service(body, db)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=list[Bloq])
def get_bloqs(db: Session = Depends(get_db)) -> list[Bloq]:
    """
    List all bloqs with their lockers
    """
    return list_bloqs_service(db)


@router.get("/{bloq_id}", response_model=Bloq)
def get_bloqs_bloq_id(bloq_id: UUID, db: Session = Depends(get_db)) -> Bloq:
    """
    Get a bloq with its lockers
    """
    try:
        return get_bloq_service(str(bloq_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{bloq_id}", response_model=Bloq)
def put_bloqs_bloq_id(bloq_id: UUID, body: BloqUpdate, db: Session = Depends(get_db)) -> Bloq:
    """
    Update title and address of a bloq
    """
    try:
        return update_bloq_service(str(bloq_id), body, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{bloq_id}", status_code=204, response_model=None)
def delete_bloqs_bloq_id(bloq_id: UUID, db: Session = Depends(get_db)) -> Response:
    """
    Delete a bloq

    Returns:
      - 204 when deleted
      - 404 if the bloq does not exist
      - 409 while lockers are still attached to it
    """
    try:
        delete_bloq_service(str(bloq_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))

    return Response(status_code=204)


@router.post("/{bloq_id}/lockers", response_model=Bloq)
def post_bloqs_bloq_id_lockers(bloq_id: UUID, body: BloqLockerLink, db: Session = Depends(get_db)) -> Bloq:
    """
    Associate an existing locker with a bloq
    """
    try:
        return add_locker_to_bloq_service(str(bloq_id), str(body.locker_id), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
