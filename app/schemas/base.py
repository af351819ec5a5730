"""
Base schema classes with custom serialization.

The planner frontend speaks camelCase JSON (``countryCode``, ``halfDay``,
``dateISO``) while the Python side uses snake_case attributes. Every schema
derives from ``BaseSchema`` so both spellings are accepted on input and the
camelCase spelling is emitted on output.

Dates that travel as plain calendar days use ``DateSimple`` so they are
serialized as ``YYYY-MM-DD`` with no time component.
"""

from datetime import date
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def serialize_date_simple(d: date | None) -> str | None:
    """
    Serialize date as simple ISO date string (YYYY-MM-DD).
    Use this when dates should stay as dates (not converted to datetime).
    """
    if d is None:
        return None
    return d.isoformat()


DateSimple = Annotated[date, PlainSerializer(serialize_date_simple, return_type=str)]


class BaseSchema(BaseModel):
    """
    Base schema class with standard configuration.
    Fields are exposed under camelCase aliases; explicit ``Field(alias=...)``
    wins where the wire name is not plain camelCase (``dateISO``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
