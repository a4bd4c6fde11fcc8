"""
Application error types.

Services and repositories raise these; ``app.main`` maps each kind to an
HTTP response.  Nothing in the service layer catches them.
"""

from typing import Any, Iterable, Mapping, Optional

# Leading "loc" entries naming where FastAPI found a request value
_REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


class AppError(Exception):
    """Base class for all application errors."""

    kind: str = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed input.

    ``errors`` lists ``{"field": ..., "message": ...}`` entries, one per
    offending field.
    """

    kind = "validation_error"

    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_errors(cls, summary: str, raw_errors: Iterable[Mapping[str, Any]]) -> "ValidationError":
        """Build from pydantic-style ``{"loc": ..., "msg": ...}`` error dicts.

        The message is *summary* followed by the offending field names.
        """
        errors = []
        for err in raw_errors:
            loc = [str(part) for part in err.get("loc", ())]
            if loc and loc[0] in _REQUEST_LOCATIONS:
                loc = loc[1:]
            errors.append({"field": ".".join(loc) or "__root__", "message": err["msg"]})
        fields = ", ".join(e["field"] for e in errors)
        return cls(f"{summary}: {fields}", errors=errors)

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]


class NotFoundError(AppError):
    """Entity does not exist or is not owned by the caller."""

    kind = "not_found"


class ConflictError(AppError):
    """Operation collides with existing state (e.g. dose already logged today)."""

    kind = "conflict"


class PersistenceError(AppError):
    """The database rejected or failed the operation."""

    kind = "persistence_error"


class AccessError(AppError):
    """No authenticated user."""

    kind = "access_denied"
