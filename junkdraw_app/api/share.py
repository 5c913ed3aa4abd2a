import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse
from junkdraw_app.services.share_service import SHARE_FAILED_LOCATION, build_share_redirect

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["share"])


@router.post("/share")
async def share_target(request: Request):
    """
    PWA share target.

    The platform POSTs a multipart form (title, text, url); we answer with a
    303 into the pre-filled add view. Any failure, including an unreadable
    form body, goes back home with an error flag instead.
    """
    try:
        form = await request.form()
        location = build_share_redirect(
            title=form.get("title"),
            text=form.get("text"),
            url=form.get("url"),
        )
    except Exception as e:
        logger.error("Error handling share target: %s", e)
        location = SHARE_FAILED_LOCATION

    return RedirectResponse(url=location, status_code=status.HTTP_303_SEE_OTHER)
