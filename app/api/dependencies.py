"""
Shared API dependencies.

Reusable FastAPI dependencies for authentication and database access.
"""

from typing import Optional

from fastapi import Depends
from sqlmodel import Session

from app.core.context import SessionContext
from app.core.exceptions import AccessError
from app.core.security import decode_access_token, oauth2_scheme
from app.db.session import get_db
from app.models.user import User
from app.services.user_service import UserService


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db), ) -> User:
    """Extract and validate the current user from the JWT token."""
    email = decode_access_token(token)
    if not email:
        raise AccessError("Invalid or expired token")
    user = UserService(db).get_user_by_email(email)
    if not user or not user.is_active:
        raise AccessError("User not found")
    return user


def get_session_context(user: User = Depends(get_current_user)) -> SessionContext:
    """Session context for the authenticated caller of this request."""
    return SessionContext(user)
