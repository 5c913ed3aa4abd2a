import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from junkdraw_app.config import settings
from junkdraw_app.api import share
from junkdraw_app.api.v1 import categories, links, metadata
from junkdraw_app.dependencies import get_cache, get_link_store, reset_dependencies
from junkdraw_app.exceptions import ServiceError
from junkdraw_app.views import pages, pwa
from junkdraw_app.views.pwa import static_dir

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the persistence client and cache once; tear them down on shutdown."""
    get_link_store()
    get_cache()
    logger.info("%s ready (storage=%s, cache=%s)", settings.app_name, settings.storage_backend, settings.cache_backend)
    yield
    reset_dependencies()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Personal link-bookmarking PWA",
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Validation → 422, missing row → 404, backend failure → 502"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


app.mount(
    "/static",
    StaticFiles(directory=static_dir),
    name="static",
)

######## Include routers
app.include_router(categories.router, prefix="/api/v1")
app.include_router(links.router, prefix="/api/v1")
app.include_router(metadata.router, prefix="/api/v1")
app.include_router(share.router)
app.include_router(pwa.router)
app.include_router(pages.router)
