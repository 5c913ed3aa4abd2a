from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from junkdraw_app.schemas.link import LinkCreate, LinkUpdate, LinkResponse, DeleteResult
from junkdraw_app.services.link_service import LinkService
from junkdraw_app.dependencies import get_link_service

router = APIRouter(prefix="/links", tags=["links"])


@router.get("/", response_model=List[LinkResponse])
async def list_links(
    category_id: Optional[str] = Query(None, description='Category id, or "all"'),
    q: Optional[str] = Query(None, description="Search title and notes"),
    link_service: LinkService = Depends(get_link_service)
):
    """List links newest first, optionally filtered"""
    return await link_service.list_links(category_id=category_id, search_query=q)


@router.get("/{link_id}", response_model=LinkResponse)
async def get_link(
    link_id: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get one link with its category"""
    return await link_service.get_link(link_id)


@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def add_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Save a link; title, source and notes are defaulted"""
    return await link_service.add_link(
        url=link_data.url,
        title=link_data.title,
        category_id=link_data.category_id,
        notes=link_data.notes,
        description=link_data.description,
    )


@router.patch("/{link_id}", response_model=LinkResponse)
async def update_link(
    link_id: str,
    link_data: LinkUpdate,
    link_service: LinkService = Depends(get_link_service)
):
    """Update a link's notes and category"""
    return await link_service.update_link(link_id, notes=link_data.notes, category_id=link_data.category_id)


@router.delete("/{link_id}", response_model=DeleteResult)
async def delete_link(
    link_id: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Delete a link"""
    return DeleteResult(success=await link_service.delete_link(link_id))
