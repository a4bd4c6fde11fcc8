"""
Medication log endpoints.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_session_context
from app.core.context import SessionContext
from app.db.session import get_db
from app.schemas.medication_log import MedicationLogResponse
from app.services.tracking_service import MedicationTrackingService

router = APIRouter()


@router.get("/today", summary="Today's dose log, newest first.", response_model=list[MedicationLogResponse], )
def todays_log(day: Optional[datetime.date] = Query(None, description="Calendar day (defaults to today)"),
               db: Session = Depends(get_db), context: SessionContext = Depends(get_session_context), ):
    service = MedicationTrackingService(db, context)
    return service.todays_log(day)


@router.delete("/{log_id}", summary="Delete a dose log entry.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_log(log_id: int, db: Session = Depends(get_db), context: SessionContext = Depends(get_session_context), ):
    service = MedicationTrackingService(db, context)
    service.delete_log(log_id)
