from typing import Optional

from pydantic import field_validator

from hilltop.core.dtos.common import CamelModel, NonEmptyStr, UtcDatetime, reject_null


class CategoryCreate(CamelModel):
    name: NonEmptyStr
    description: NonEmptyStr
    icon: NonEmptyStr


class CategoryUpdate(CamelModel):
    name: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    icon: Optional[NonEmptyStr] = None

    @field_validator("name", "description", "icon", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: str
    icon: str
    created_at: UtcDatetime
