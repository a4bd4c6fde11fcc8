"""
User database model.

Defines the User table for authentication and user management.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class User(SQLModel, table=True):
    """
    User model for authentication.

    Stores user credentials and profile information.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    hashed_password: str = Field(nullable=False)

    # Profile
    full_name: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
    last_sign_in_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
