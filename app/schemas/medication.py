"""
Medication API schemas.

Closed input structures for the medication operations.  ``MedicationCreate``
requires every scheduling field; ``MedicationUpdate`` accepts any subset of
them.  Identifier and owner are not part of either input, so attempts to
send them are ignored.
"""

import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.exceptions import ValidationError


class Frequency(str, Enum):
    """How often a medication is taken."""

    ONCE = "once"
    TWICE = "twice"
    THRICE = "thrice"
    EVERY_4_HOURS = "every_4_hours"
    EVERY_6_HOURS = "every_6_hours"
    EVERY_8_HOURS = "every_8_hours"
    AS_NEEDED = "as_needed"


# ---------------------------------------------------------------------------
# Entity schemas (Base / Create / Update / Response)
# ---------------------------------------------------------------------------

class MedicationBase(BaseModel):
    """Fields shared by create requests and responses."""

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255, description="Medication name")
    dosage: str = Field(..., min_length=1, max_length=255, description="Dosage, e.g. '500mg'")
    frequency: Frequency = Field(..., description="How often the medication is taken")
    time: datetime.time = Field(..., description="Scheduled time of day (HH:MM)")
    notes: Optional[str] = Field(None, max_length=1000, description="Free-text notes")


# Request schemas
class MedicationCreate(MedicationBase):
    """Schema for creating a medication."""
    pass


class MedicationUpdate(BaseModel):
    """Schema for updating a medication (all fields optional).

    Only fields present in the payload are applied.  Required attributes
    may be omitted but not cleared.
    """

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    dosage: Optional[str] = Field(None, min_length=1, max_length=255)
    frequency: Optional[Frequency] = None
    time: Optional[datetime.time] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def _required_fields_not_cleared(self) -> "MedicationUpdate":
        for field in ("name", "dosage", "frequency", "time"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


# Response schemas
class MedicationResponse(MedicationBase):
    """Schema for medication data in API responses."""

    id: int
    user_id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Form parsing
# ---------------------------------------------------------------------------

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_form(schema: Type[SchemaT], data: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
    """Validate raw form data against *schema*.

    Already-validated instances pass through unchanged.

    Raises:
        ValidationError: listing each offending field
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError.from_errors("Invalid medication data", e.errors()) from e
