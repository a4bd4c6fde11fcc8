"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, dashboard, logs, medications

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    auth.router, prefix="/auth", tags=["Authentication"]
)
api_router.include_router(
    medications.router, prefix="/medications", tags=["Medications"]
)
api_router.include_router(
    logs.router, prefix="/logs", tags=["Medication logs"]
)
api_router.include_router(
    dashboard.router, prefix="/dashboard", tags=["Dashboard"]
)
