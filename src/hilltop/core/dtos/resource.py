from typing import List, Optional

from pydantic import Field, field_validator

from hilltop.core.dtos.category import CategoryResponse
from hilltop.core.dtos.common import (
    CamelModel,
    NonEmptyStr,
    UtcDatetime,
    check_absolute_url,
    reject_null,
)
from hilltop.core.normalizers import blank_to_none, split_tags


class _ResourceFields(CamelModel):

    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def normalize_tags(cls, value):
        return split_tags(value)

    @field_validator("url", "image_url", mode="before", check_fields=False)
    @classmethod
    def normalize_urls(cls, value):
        return blank_to_none(value)

    @field_validator("url", "image_url", check_fields=False)
    @classmethod
    def validate_urls(cls, value):
        return check_absolute_url(value)


class ResourceCreate(_ResourceFields):
    title: NonEmptyStr
    description: NonEmptyStr
    url: Optional[str] = None
    category_id: int
    tags: List[NonEmptyStr] = Field(default_factory=list)
    image_url: Optional[str] = None


class ResourceUpdate(_ResourceFields):
    title: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    url: Optional[str] = None
    category_id: Optional[int] = None
    tags: Optional[List[NonEmptyStr]] = None
    image_url: Optional[str] = None

    @field_validator("title", "description", "category_id", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ResourceResponse(CamelModel):
    id: int
    title: str
    description: str
    url: Optional[str]
    category_id: int
    tags: List[str]
    image_url: Optional[str]
    created_at: UtcDatetime
    updated_at: UtcDatetime
    category: CategoryResponse
