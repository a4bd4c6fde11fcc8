"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.user import User  # noqa: F401
from app.models.medication import Medication  # noqa: F401
from app.models.medication_log import MedicationLog  # noqa: F401
