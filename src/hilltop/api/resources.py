from fastapi import APIRouter, Body, Depends, Query
from typing import List, Optional

from hilltop.core.dependencies import get_catalog_service
from hilltop.core.dtos.common import MessageResponse
from hilltop.core.dtos.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from hilltop.core.exceptions import NotFoundError
from hilltop.core.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/resources", tags=["Resources"])


@router.get("", response_model=List[ResourceResponse])
async def list_resources(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    search: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    return await service.list_resources(category_id, search)


# Registered before "/{resource_id}" so "featured" is not parsed as an id.
@router.get("/featured", response_model=List[ResourceResponse])
async def list_featured_resources(
    limit: int = Query(6, ge=1, le=100),
    service: CatalogService = Depends(get_catalog_service)
):
    return await service.list_featured_resources(limit)


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    resource = await service.get_resource(resource_id)
    if not resource:
        raise NotFoundError("Resource not found")
    return resource


@router.post("", response_model=ResourceResponse, status_code=201)
async def create_resource(
    resource_data: ResourceCreate = Body(...),
    service: CatalogService = Depends(get_catalog_service)
):
    return await service.create_resource(resource_data)


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: int,
    resource_data: ResourceUpdate = Body(...),
    service: CatalogService = Depends(get_catalog_service)
):
    resource = await service.update_resource(resource_id, resource_data)
    if not resource:
        raise NotFoundError("Resource not found")
    return resource


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    if not await service.delete_resource(resource_id):
        raise NotFoundError("Resource not found")
    return MessageResponse(message="Resource deleted successfully")
