from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    PlainSerializer,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from hilltop.core.clock import to_utc_z


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Stored as naive UTC; serialized with a Z suffix.
UtcDatetime = Annotated[
    datetime,
    PlainSerializer(lambda dt: to_utc_z(dt, timespec="microseconds"), return_type=str),
]

_url_adapter = TypeAdapter(AnyUrl)


def check_absolute_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    try:
        parsed = _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid absolute URL")
    if not parsed.host:
        raise ValueError("must be a valid absolute URL")
    return value


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may not be null")
    return value


class CamelModel(BaseModel):
    """Wire models use camelCase keys; snake_case is accepted on input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str
