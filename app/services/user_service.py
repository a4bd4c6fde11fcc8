"""
User service.

Business logic for user management and authentication.
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.core.clock import utcnow
from app.core.config import settings
from app.core.exceptions import AccessError, ConflictError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.token import Token
from app.schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = UserRepository(session)

    def register(self, user_data: UserCreate) -> User:
        """
        Register a new user.

        Args:
            user_data: User registration data

        Returns:
            Created user

        Raises:
            ConflictError: If email already exists
        """
        if self.repository.exists_by_email(user_data.email):
            raise ConflictError("User already registered")

        user = User(email=user_data.email, hashed_password=get_password_hash(user_data.password),
                    full_name=user_data.full_name, )
        user = self.repository.create(user)
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, login_data: UserLogin) -> Token:
        """
        Authenticate user and return access token.

        Args:
            login_data: User login credentials

        Returns:
            JWT access token

        Raises:
            AccessError: If credentials are invalid or the account is inactive
        """
        user = self.repository.get_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.hashed_password):
            logger.warning("Failed login for %s", login_data.email)
            raise AccessError("Incorrect email or password")

        if not user.is_active:
            raise AccessError("User account is inactive")

        user.last_sign_in_at = utcnow()
        self.repository.update(user)

        access_token_expires = datetime.timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(data={ "sub": user.email }, expires_delta=access_token_expires)
        logger.info("User %s signed in", user.id)

        return Token(access_token=access_token, token_type="bearer")

    def get_user_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        return self.repository.get_by_email(email)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.repository.get_by_id(user_id)
