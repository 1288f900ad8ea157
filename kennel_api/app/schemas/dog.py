"""
Pydantic models for dog roster records.

``DogBase`` holds the editable fields, all optional at the schema level:
required-field and enum checks are business rules enforced by
``DogService`` so that they produce the roster's own error messages in
a fixed order.  The schemas only enforce types (integers, ISO dates).

JSON keys are camelCase (``badgeId``, ``dateAcquired``...); the
snake_case attribute names are accepted as well.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

STATUSES = ("in training", "in service", "retired", "left")
LEAVING_REASONS = ("transferred", "retired (put down)", "kia", "retired (re-homed)", "died")


class DogBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = Field(None, examples=["Max"])
    breed: Optional[str] = Field(None, examples=["Labrador"])
    supplier: Optional[str] = Field(None, examples=["Northern Kennels"])
    badge_id: Optional[int] = Field(None, examples=[42])
    gender: Optional[str] = Field(None, examples=["Male"])
    birth_date: Optional[date] = Field(None, examples=["2020-06-15"])
    date_acquired: Optional[date] = Field(None, examples=["2021-06-15"])
    status: Optional[str] = Field(None, examples=["in training"])
    leaving_date: Optional[date] = None
    leaving_reason: Optional[str] = None
    kenneling_characteristics: Optional[str] = Field(None, examples=["Friendly with other dogs"])


class DogCreate(DogBase):
    """Schema for creating a dog record.

    Any ``id`` or ``dateDeleted`` sent by the client is ignored.
    """


class DogUpdate(DogBase):
    """Schema for a partial update.

    Fields left out (or sent as ``null``) are not changed.
    """

    def provided_fields(self) -> dict:
        """Return the fields carrying a value, keyed by attribute name."""
        return self.model_dump(exclude_none=True)


class DogRead(DogBase):
    """Schema for a persisted dog record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    date_deleted: Optional[date] = None


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    message: str
    status: int
    error: str
    path: str


class MessageResponse(BaseModel):
    message: str
