"""
Shared schema building blocks.

Responses and requests use camelCase keys on the wire while the Python
side keeps snake_case attribute names.
"""
from datetime import date
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from tripmaster.core.utils import coerce_decimal, join_tel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Decimal amount; non-numeric input becomes 0, JSON output is a number
Money = Annotated[
    Decimal,
    BeforeValidator(coerce_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]

# One phone number or a list of them, stored semicolon-joined
Tel = Annotated[Optional[str], BeforeValidator(join_tel)]

OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


class MessageResponse(BaseModel):
    """Plain confirmation body."""
    message: str
