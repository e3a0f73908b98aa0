"""
schemas/common.py
-----------------
Helpers shared by the request and response schemas.
"""

from datetime import datetime
from typing import ClassVar, FrozenSet

from pydantic import BaseModel, field_validator, model_validator

from ridsport.db.base import as_utc


def normalise_datetime(value: datetime) -> datetime:
    """Store every timestamp as UTC; naive input is taken to be UTC already."""
    return as_utc(value)


class PartialUpdate(BaseModel):
    """
    Base for PATCH bodies.

    Only fields the client actually sent are applied (exclude_unset), so
    omitting a field leaves it untouched. Sending an explicit null for a
    column that cannot be empty is rejected.
    """

    NON_NULLABLE: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        for field in self.model_fields_set & self.NON_NULLABLE:
            if getattr(self, field) is None:
                raise ValueError(f"'{field}' cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ReadModel(BaseModel):
    """
    Base for response bodies built from ORM rows.

    Timestamps always leave the API as aware UTC values, whatever the
    driver hands back (SQLite returns them naive).
    """

    model_config = {"from_attributes": True}

    @field_validator("*", mode="after")
    @classmethod
    def timestamps_as_utc(cls, v):
        if isinstance(v, datetime):
            return as_utc(v)
        return v
