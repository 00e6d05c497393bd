from fastapi import APIRouter, Body, Depends
from typing import List

from hilltop.core.dependencies import get_catalog_service
from hilltop.core.dtos.category import CategoryCreate, CategoryResponse, CategoryUpdate
from hilltop.core.dtos.common import MessageResponse
from hilltop.core.exceptions import NotFoundError
from hilltop.core.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryResponse])
async def list_categories(service: CatalogService = Depends(get_catalog_service)):
    return await service.list_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    category = await service.get_category(category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    category_data: CategoryCreate = Body(...),
    service: CatalogService = Depends(get_catalog_service)
):
    return await service.create_category(category_data)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate = Body(...),
    service: CatalogService = Depends(get_catalog_service)
):
    category = await service.update_category(category_id, category_data)
    if not category:
        raise NotFoundError("Category not found")
    return category


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    if not await service.delete_category(category_id):
        raise NotFoundError("Category not found")
    return MessageResponse(message="Category deleted successfully")
