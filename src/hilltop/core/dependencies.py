from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hilltop.core.services.catalog_service import CatalogService
from hilltop.core.services.contact_service import ContactService
from hilltop.observability.metrics import CatalogMetrics


async def get_db(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session


def get_metrics(request: Request) -> CatalogMetrics:
    return request.app.state.metrics


async def get_catalog_service(
    session: AsyncSession = Depends(get_db),
    metrics: CatalogMetrics = Depends(get_metrics)
) -> CatalogService:
    return CatalogService(session, metrics)


async def get_contact_service(
    session: AsyncSession = Depends(get_db),
    metrics: CatalogMetrics = Depends(get_metrics)
) -> ContactService:
    return ContactService(session, metrics)
