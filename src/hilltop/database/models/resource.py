from datetime import datetime
from sqlalchemy import JSON, DateTime, ForeignKey, Text, Index
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List

from hilltop.core.clock import utcnow
from hilltop.database.database import Base

# TEXT[] on PostgreSQL, a JSON list everywhere else.
TagList = JSON().with_variant(ARRAY(Text), "postgresql")


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True)
    description: Mapped[str] = mapped_column(Text)
    icon: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Deletes are issued as bulk statements guarded by a reference check,
    # so the ORM must never try to null out children on its own.
    resources: Mapped[List["Resource"]] = relationship(
        "Resource",
        back_populates="category",
        passive_deletes="all"
    )


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)

    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"))

    tags: Mapped[List[str]] = mapped_column(TagList, default=list)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="resources"
    )

    __table_args__ = (
        Index('idx_resource_category', 'category_id'),
        Index('idx_resource_created', 'created_at'),
    )
