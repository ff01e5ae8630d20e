"""
Shared payload schema units.

Reusable field types and nested schemas composed into page payload
schemas. Each nested schema is an independently testable unit; fields
whose shape is not yet pinned by the presenter remain opaque mappings.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Dict, List

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field
from pydantic import StrictBool, StrictStr


# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------

# A structured object whose inner shape is owned by the presenter.
OpaqueObject = Dict[str, Any]

# A sequence of structured objects.
ObjectList = List[Dict[str, Any]]

# Counts are integers, never booleans, never negative.
NonNegativeCount = Annotated[int, Field(strict=True, ge=0)]


def _check_iso_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError:
        try:
            datetime.fromisoformat(value)
        except ValueError:
            raise ValueError("not an ISO-8601 date or datetime") from None
    return value


# An ISO-8601 date (or datetime) kept in its original string form.
IsoDateString = Annotated[StrictStr, AfterValidator(_check_iso_date)]


def wire_field(camel: str, snake: str, **kwargs: Any) -> Any:
    """
    Declare a payload field by its camelCase wire name.

    The presenter's snake_case key is accepted as an alias so both
    naming conventions satisfy the same contract. Pass ``default`` to
    make the field optional; without it the field is required.
    """
    choices = (camel,) if camel == snake else (camel, snake)
    return Field(
        alias=camel,
        validation_alias=AliasChoices(*choices),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Nested schemas
# ---------------------------------------------------------------------------


class CustomDomainVerificationStatus(BaseModel):
    """
    Outcome of the seller's custom domain DNS verification.

    The whole object is nullable on the page payload: ``null`` means
    no verification has been attempted.
    """

    success: StrictBool
    message: StrictStr

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
