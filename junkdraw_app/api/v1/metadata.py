from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool
from junkdraw_app.schemas.link import UrlMetadata
from junkdraw_app.services.metadata_service import fetch_url_metadata

router = APIRouter(prefix="/metadata", tags=["metadata"])


@router.get("/", response_model=UrlMetadata)
async def get_url_metadata(url: str = Query(..., description="Page to inspect")):
    """Title and source for pre-filling the add form (blocking fetch runs in a thread)"""
    return await run_in_threadpool(fetch_url_metadata, url)
