"""
Share-target intake: turns a platform share payload into an add-form URL.
"""

from typing import Optional
from urllib.parse import urlencode

from junkdraw_app.services.source import derive_source

SHARE_FAILED_LOCATION = "/?error=share_failed"


def build_share_redirect(
    title: Optional[str],
    text: Optional[str],
    url: Optional[str]
) -> str:
    """
    Location of the pre-filled add view for a shared payload.

    Title falls back to the shared text (some apps put the page title there).
    Source is empty when the url can't be parsed; the add form fills it later.
    """
    params = {
        "url": url or "",
        "title": title or text or "",
        "source": derive_source(url) or "",
    }
    return f"/add?{urlencode(params)}"
