"""
Shared repository helpers.

Repositories are the only code that talks to the database.  Every call is
wrapped in :func:`gateway_errors` so SQLAlchemy failures leave this layer
as :class:`~app.core.exceptions.PersistenceError` (or ``ConflictError``
for uniqueness violations) with the session rolled back.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import ConflictError, PersistenceError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """True if *error* is a unique/primary-key violation, not a FK or NOT NULL failure."""
    orig = error.orig
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


@contextmanager
def gateway_errors(session: Session, action: str, conflict_message: Optional[str] = None) -> Iterator[None]:
    """Translate database errors raised inside the block.

    Args:
        session: Session to roll back on failure
        action: Short description used in the error message
        conflict_message: If given, uniqueness violations raise ``ConflictError``
            with this message.  Every other integrity error is a ``PersistenceError``.
    """
    try:
        yield
    except IntegrityError as e:
        session.rollback()
        if conflict_message is not None and is_unique_violation(e):
            raise ConflictError(conflict_message) from e
        logger.error("Integrity error while %s", action, exc_info=True)
        raise PersistenceError(f"Could not {action}") from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Database error while %s", action, exc_info=True)
        raise PersistenceError(f"Could not {action}") from e
