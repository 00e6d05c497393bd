from contextlib import nullcontext
from typing import List, Optional
import logging

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from hilltop.core.clock import later_than, utcnow
from hilltop.core.dtos.category import CategoryCreate, CategoryUpdate
from hilltop.core.dtos.resource import ResourceCreate, ResourceUpdate
from hilltop.core.exceptions import (
    CatalogError,
    CategoryInUseError,
    ConflictError,
    ReferentialIntegrityError,
)
from hilltop.database.models.resource import Category, Resource
from hilltop.observability.metrics import CatalogMetrics

logger = logging.getLogger(__name__)


def escape_like(text: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so ``text`` matches literally."""
    return (
        text.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class CatalogService:
    """
    Categories and resources.

    Reads of resources always inner-join the owning category. Writes that
    depend on a category (resource create/update, category delete) read the
    category row under a lock in the same transaction as the write; the
    foreign key on ``resources.category_id`` backs this up at the store.
    """

    def __init__(self, session: AsyncSession, metrics: Optional[CatalogMetrics] = None):
        self.session = session
        self.metrics = metrics

    def _timed(self, operation: str, table: str):
        if self.metrics is None:
            return nullcontext()
        return self.metrics.time_query(operation, table)

    async def _commit(self, operation: str, table: str, on_integrity_error: CatalogError):
        try:
            with self._timed(operation, table):
                await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning(f"{operation} on {table} rejected by the store: {exc.orig}")
            raise on_integrity_error from exc

    async def _abort(self, error: CatalogError):
        await self.session.rollback()
        raise error

    # Categories

    async def list_categories(self) -> List[Category]:
        with self._timed("select", "categories"):
            result = await self.session.scalars(select(Category).order_by(Category.name.asc()))
        return list(result)

    async def get_category(self, category_id: int) -> Optional[Category]:
        with self._timed("select", "categories"):
            return await self.session.get(Category, category_id, populate_existing=True)

    async def _lock_category(self, category_id: int, exclusive: bool = False) -> Optional[Category]:
        # FOR SHARE / FOR UPDATE where supported; SQLite renders no lock clause.
        query = (
            select(Category)
            .where(Category.id == category_id)
            .with_for_update(read=not exclusive)
        )
        with self._timed("select", "categories"):
            return await self.session.scalar(query)

    async def _category_name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        query = select(Category.id).where(Category.name == name)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        with self._timed("select", "categories"):
            return await self.session.scalar(select(query.exists())) or False

    async def create_category(self, data: CategoryCreate) -> Category:
        if await self._category_name_taken(data.name):
            await self._abort(ConflictError(f"Category '{data.name}' already exists"))

        category = Category(**data.model_dump(), created_at=utcnow())
        self.session.add(category)
        await self._commit(
            "insert", "categories",
            ConflictError(f"Category '{data.name}' already exists")
        )

        logger.info(f"Created category {category.id} ({category.name})")
        return category

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Optional[Category]:
        category = await self.get_category(category_id)
        if category is None:
            return None

        changes = data.model_dump(exclude_unset=True)
        new_name = changes.get("name")
        if new_name is not None and new_name != category.name:
            if await self._category_name_taken(new_name, exclude_id=category_id):
                await self._abort(ConflictError(f"Category '{new_name}' already exists"))

        for field, value in changes.items():
            setattr(category, field, value)

        await self._commit(
            "update", "categories",
            ConflictError(f"Category '{new_name or category.name}' already exists")
        )
        return category

    async def delete_category(self, category_id: int) -> bool:
        category = await self._lock_category(category_id, exclusive=True)
        if category is None:
            await self.session.rollback()
            return False

        with self._timed("select", "resources"):
            in_use = await self.session.scalar(
                select(exists().where(Resource.category_id == category_id))
            )
        if in_use:
            await self._abort(CategoryInUseError(
                f"Category {category_id} still has resources and cannot be deleted"
            ))

        try:
            with self._timed("delete", "categories"):
                result = await self.session.execute(
                    delete(Category).where(Category.id == category_id)
                )
        except IntegrityError as exc:
            await self.session.rollback()
            raise CategoryInUseError() from exc

        await self._commit("delete", "categories", CategoryInUseError())

        logger.info(f"Deleted category {category_id}")
        return result.rowcount > 0

    # Resources

    def _resource_query(self):
        return (
            select(Resource)
            .join(Resource.category)
            .options(contains_eager(Resource.category))
            .order_by(Resource.created_at.desc(), Resource.id.desc())
            .execution_options(populate_existing=True)
        )

    async def list_resources(
        self,
        category_id: Optional[int] = None,
        search: Optional[str] = None
    ) -> List[Resource]:
        query = self._resource_query()

        if category_id is not None:
            query = query.where(Resource.category_id == category_id)

        if search:
            query = query.where(Resource.title.ilike(f"%{escape_like(search)}%", escape="\\"))

        with self._timed("select", "resources"):
            result = await self.session.scalars(query)
        return list(result)

    async def get_resource(self, resource_id: int) -> Optional[Resource]:
        with self._timed("select", "resources"):
            return await self.session.scalar(
                self._resource_query().where(Resource.id == resource_id)
            )

    async def create_resource(self, data: ResourceCreate) -> Resource:
        if await self._lock_category(data.category_id) is None:
            await self._abort(ReferentialIntegrityError(
                f"Category {data.category_id} does not exist"
            ))

        now = utcnow()
        resource = Resource(**data.model_dump(), created_at=now, updated_at=now)
        self.session.add(resource)
        await self._commit(
            "insert", "resources",
            ReferentialIntegrityError(f"Category {data.category_id} does not exist")
        )

        logger.info(f"Created resource {resource.id} in category {resource.category_id}")
        return await self.get_resource(resource.id)

    async def update_resource(self, resource_id: int, data: ResourceUpdate) -> Optional[Resource]:
        with self._timed("select", "resources"):
            resource = await self.session.get(Resource, resource_id, populate_existing=True)
        if resource is None:
            return None

        changes = data.model_dump(exclude_unset=True)
        new_category_id = changes.get("category_id")
        if new_category_id is not None and new_category_id != resource.category_id:
            if await self._lock_category(new_category_id) is None:
                await self._abort(ReferentialIntegrityError(
                    f"Category {new_category_id} does not exist"
                ))

        for field, value in changes.items():
            setattr(resource, field, value)
        resource.updated_at = later_than(resource.updated_at)

        await self._commit(
            "update", "resources",
            ReferentialIntegrityError(f"Category {new_category_id} does not exist")
        )
        return await self.get_resource(resource_id)

    async def delete_resource(self, resource_id: int) -> bool:
        with self._timed("delete", "resources"):
            result = await self.session.execute(
                delete(Resource).where(Resource.id == resource_id)
            )
        await self.session.commit()

        if result.rowcount > 0:
            logger.info(f"Deleted resource {resource_id}")
        return result.rowcount > 0

    async def list_featured_resources(self, limit: int = 6) -> List[Resource]:
        # No dedicated flag: the newest resources are the featured ones.
        with self._timed("select", "resources"):
            result = await self.session.scalars(self._resource_query().limit(limit))
        return list(result)
