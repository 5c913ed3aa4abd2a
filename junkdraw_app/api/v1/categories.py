from typing import List

from fastapi import APIRouter, Depends, Response, status
from junkdraw_app.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from junkdraw_app.services.category_service import CategoryService
from junkdraw_app.dependencies import get_category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=List[CategoryResponse])
async def list_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    """List all categories ordered by name"""
    return await category_service.list_categories()


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    category_service: CategoryService = Depends(get_category_service)
):
    """Create a category (422 if name or color is missing)"""
    return await category_service.create_category(category_data.name, category_data.color)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    category_service: CategoryService = Depends(get_category_service)
):
    """Rename or recolor a category"""
    return await category_service.update_category(category_id, category_data.name, category_data.color)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    category_service: CategoryService = Depends(get_category_service)
):
    """Delete a category; its links become uncategorized"""
    await category_service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
