from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from hilltop.core.dtos.common import CamelModel, NonEmptyStr, UtcDatetime
from hilltop.core.normalizers import blank_to_none


class ContactCreate(CamelModel):
    name: NonEmptyStr
    email: EmailStr
    contact: Optional[str] = None
    address: Optional[str] = None
    subject: NonEmptyStr
    message: NonEmptyStr

    @field_validator("contact", "address", mode="before")
    @classmethod
    def optional_text(cls, value):
        value = blank_to_none(value)
        return value.strip() if isinstance(value, str) else value


class ContactResponse(CamelModel):
    id: int
    name: str
    email: str
    contact: Optional[str]
    address: Optional[str]
    subject: str
    message: str
    created_at: UtcDatetime


class ContactCreatedResponse(BaseModel):
    message: str
    id: int
