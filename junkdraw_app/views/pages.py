"""
Server-rendered views: list/browse, add link, edit link, category overlay.

Each view is loading → ready on GET and submitting → success | error on POST.
Success redirects (303); errors re-render the same form with the message inline.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from junkdraw_app.config import settings
from junkdraw_app.dependencies import get_category_service, get_link_service
from junkdraw_app.exceptions import ServiceError
from junkdraw_app.services.category_service import CategoryService, DEFAULT_COLOR, PRESET_COLORS
from junkdraw_app.services.link_service import ALL_CATEGORIES, LinkService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["views"])

templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))
templates.env.globals["app_name"] = settings.app_name

MANAGE_CATEGORIES = "categories"


def _see_other(location: str) -> RedirectResponse:
    return RedirectResponse(url=location, status_code=status.HTTP_303_SEE_OTHER)


async def _render_index(
    request: Request,
    link_service: LinkService,
    category_service: CategoryService,
    category: str = ALL_CATEGORIES,
    q: str = "",
    error: Optional[str] = None,
    manage: bool = False,
    edit_id: Optional[str] = None,
    overlay_error: Optional[str] = None,
    form_name: str = "",
    form_color: str = DEFAULT_COLOR,
    status_code: int = status.HTTP_200_OK,
):
    load_error = None
    categories, links = [], []
    try:
        categories = await category_service.list_categories()
        links = await link_service.list_links(category_id=category, search_query=q)
    except ServiceError as e:
        logger.error("Error loading data: %s", e.message)
        load_error = e.message

    editing = next((c for c in categories if c.id == edit_id), None)
    if editing and not overlay_error:
        form_name, form_color = editing.name, editing.color

    context = {
        "categories": categories,
        "links": links,
        "selected_category": category or ALL_CATEGORIES,
        "q": q or "",
        "share_failed": error == "share_failed",
        "load_error": load_error,
        "manage_open": manage,
        "editing": editing,
        "overlay_error": overlay_error,
        "form_name": form_name,
        "form_color": form_color,
        "preset_colors": PRESET_COLORS,
    }
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    category: str = ALL_CATEGORIES,
    q: str = "",
    error: Optional[str] = None,
    manage: Optional[str] = None,
    edit: Optional[str] = None,
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    """List view with category filter, search and the category overlay"""
    return await _render_index(
        request,
        link_service,
        category_service,
        category=category,
        q=q,
        error=error,
        manage=manage == MANAGE_CATEGORIES,
        edit_id=edit,
    )


# --- Add link ---

@router.get("/add", response_class=HTMLResponse)
async def add_form(
    request: Request,
    url: str = "",
    title: str = "",
    source: str = "",
    category_service: CategoryService = Depends(get_category_service)
):
    """Add view, pre-filled from query parameters (share target)"""
    categories, error = [], None
    try:
        categories = await category_service.list_categories()
    except ServiceError as e:
        error = e.message

    context = {
        "categories": categories,
        "form": {"url": url, "title": title, "source": source, "notes": "", "category_id": ""},
        "error": error,
    }
    return templates.TemplateResponse(request, "add.html", context)


@router.post("/add", response_class=HTMLResponse)
async def add_submit(
    request: Request,
    url: str = Form(""),
    title: str = Form(""),
    notes: str = Form(""),
    source: str = Form(""),
    category_id: str = Form(""),
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        await link_service.add_link(url=url, title=title, category_id=category_id, notes=notes)
    except ServiceError as e:
        try:
            categories = await category_service.list_categories()
        except ServiceError:
            categories = []
        context = {
            "categories": categories,
            "form": {"url": url, "title": title, "source": source, "notes": notes, "category_id": category_id},
            "error": e.message,
        }
        return templates.TemplateResponse(request, "add.html", context, status_code=e.status_code)

    return _see_other("/")


# --- Edit / delete link ---

async def _render_link(
    request: Request,
    link_id: str,
    link_service: LinkService,
    category_service: CategoryService,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
):
    link, categories = None, []
    try:
        link = await link_service.get_link(link_id)
        categories = await category_service.list_categories()
    except ServiceError as e:
        error = error or e.message
        status_code = e.status_code if status_code == status.HTTP_200_OK else status_code

    context = {"link": link, "categories": categories, "error": error}
    return templates.TemplateResponse(request, "link.html", context, status_code=status_code)


@router.get("/link/{link_id}", response_class=HTMLResponse)
async def link_detail(
    request: Request,
    link_id: str,
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    """Edit view: notes and category only"""
    return await _render_link(request, link_id, link_service, category_service)


@router.post("/link/{link_id}", response_class=HTMLResponse)
async def link_save(
    request: Request,
    link_id: str,
    notes: str = Form(""),
    category_id: str = Form(""),
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        await link_service.update_link(link_id, notes=notes, category_id=category_id)
    except ServiceError as e:
        return await _render_link(
            request, link_id, link_service, category_service,
            error=e.message, status_code=e.status_code,
        )
    return _see_other("/")


@router.post("/link/{link_id}/delete", response_class=HTMLResponse)
async def link_delete(
    request: Request,
    link_id: str,
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        await link_service.delete_link(link_id)
    except ServiceError as e:
        return await _render_link(
            request, link_id, link_service, category_service,
            error=e.message, status_code=e.status_code,
        )
    return _see_other("/")


# --- Category overlay ---

@router.post("/categories", response_class=HTMLResponse)
async def category_create(
    request: Request,
    name: str = Form(""),
    color: str = Form(DEFAULT_COLOR),
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        await category_service.create_category(name, color)
    except ServiceError as e:
        return await _render_index(
            request, link_service, category_service,
            manage=True, overlay_error=e.message,
            form_name=name, form_color=color, status_code=e.status_code,
        )
    return _see_other(f"/?manage={MANAGE_CATEGORIES}")


@router.post("/categories/{category_id}", response_class=HTMLResponse)
async def category_update(
    request: Request,
    category_id: str,
    name: str = Form(""),
    color: str = Form(DEFAULT_COLOR),
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        await category_service.update_category(category_id, name, color)
    except ServiceError as e:
        return await _render_index(
            request, link_service, category_service,
            manage=True, edit_id=category_id, overlay_error=e.message,
            form_name=name, form_color=color, status_code=e.status_code,
        )
    return _see_other(f"/?manage={MANAGE_CATEGORIES}")


@router.post("/categories/{category_id}/delete", response_class=HTMLResponse)
async def category_delete(
    request: Request,
    category_id: str,
    link_service: LinkService = Depends(get_link_service),
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        await category_service.delete_category(category_id)
    except ServiceError as e:
        return await _render_index(
            request, link_service, category_service,
            manage=True, overlay_error=e.message, status_code=e.status_code,
        )
    return _see_other(f"/?manage={MANAGE_CATEGORIES}")
