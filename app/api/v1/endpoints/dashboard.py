"""
Dashboard endpoints — the day's adherence progress and schedule.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.dependencies import get_session_context
from app.core.context import SessionContext
from app.db.session import get_db
from app.schemas.adherence import DashboardResponse, Progress
from app.services.tracking_service import MedicationTrackingService

router = APIRouter()


@router.get(
    "",
    summary="Get the day's progress and medications grouped by time.",
    response_model=DashboardResponse,
)
def get_dashboard(
    day: Optional[datetime.date] = Query(
        None, description="Calendar day (defaults to today)"
    ),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    service = MedicationTrackingService(db, context)
    return service.dashboard(day)


@router.get(
    "/progress",
    summary="Get today's taken/total counts and percentage.",
    response_model=Progress,
)
def get_progress(
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    service = MedicationTrackingService(db, context)
    return service.progress()
