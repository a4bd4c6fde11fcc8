"""
Medication endpoints.

CRUD for medications plus the per-medication "taken" actions and history.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.api.dependencies import get_session_context
from app.core.context import SessionContext
from app.db.session import get_db
from app.schemas.medication import MedicationCreate, MedicationResponse, MedicationUpdate
from app.schemas.medication_log import MarkTakenRequest, MedicationLogResponse
from app.services.medication_service import MedicationService
from app.services.tracking_service import MedicationTrackingService

router = APIRouter()


@router.get("", summary="List medications, most recent first.", response_model=list[MedicationResponse], )
def list_medications(db: Session = Depends(get_db), context: SessionContext = Depends(get_session_context), ):
    service = MedicationService(db, context)
    return service.list_medications()


@router.post("", summary="Add a medication.", response_model=MedicationResponse,
             status_code=status.HTTP_201_CREATED, )
def create_medication(data: MedicationCreate, db: Session = Depends(get_db),
                      context: SessionContext = Depends(get_session_context), ):
    service = MedicationService(db, context)
    return service.create(data)


@router.get("/{medication_id}", summary="Get a medication.", response_model=MedicationResponse, )
def get_medication(medication_id: int, db: Session = Depends(get_db),
                   context: SessionContext = Depends(get_session_context), ):
    service = MedicationService(db, context)
    return service.get(medication_id)


@router.patch("/{medication_id}", summary="Update some fields of a medication.",
              response_model=MedicationResponse, )
def update_medication(medication_id: int, data: MedicationUpdate, db: Session = Depends(get_db),
                      context: SessionContext = Depends(get_session_context), ):
    service = MedicationService(db, context)
    return service.update(medication_id, data)


@router.delete("/{medication_id}", summary="Delete a medication and its logs.",
               status_code=status.HTTP_204_NO_CONTENT, )
def delete_medication(medication_id: int, db: Session = Depends(get_db),
                      context: SessionContext = Depends(get_session_context), ):
    service = MedicationService(db, context)
    service.delete(medication_id)


@router.post("/{medication_id}/taken", summary="Mark a medication as taken today.",
             response_model=MedicationLogResponse, status_code=status.HTTP_201_CREATED, )
def mark_taken(medication_id: int, data: Optional[MarkTakenRequest] = Body(None), db: Session = Depends(get_db),
               context: SessionContext = Depends(get_session_context), ):
    service = MedicationTrackingService(db, context)
    return service.mark_taken(medication_id, note=data.note if data else None)


@router.delete("/{medication_id}/taken", summary="Undo today's 'taken' mark.",
               status_code=status.HTTP_204_NO_CONTENT, )
def undo_taken(medication_id: int, db: Session = Depends(get_db),
               context: SessionContext = Depends(get_session_context), ):
    service = MedicationTrackingService(db, context)
    service.undo_taken(medication_id)


@router.get("/{medication_id}/logs", summary="Dose history of a medication, newest first.",
            response_model=list[MedicationLogResponse], )
def medication_history(medication_id: int, db: Session = Depends(get_db),
                       context: SessionContext = Depends(get_session_context), ):
    service = MedicationTrackingService(db, context)
    return service.history_for(medication_id)
