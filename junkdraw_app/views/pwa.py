from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["pwa"])

static_dir = Path(__file__).parent.parent / "static"


@router.get("/manifest.json", include_in_schema=False)
async def manifest():
    return FileResponse(static_dir / "manifest.json", media_type="application/json")


@router.get("/sw.js", include_in_schema=False)
async def service_worker():
    """Served from the root so the worker's scope covers the whole app"""
    return FileResponse(static_dir / "sw.js", media_type="application/javascript")
