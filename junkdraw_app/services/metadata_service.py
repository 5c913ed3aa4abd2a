"""
Best-effort page metadata used to pre-fill the add-link form.
"""

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from junkdraw_app.config import settings
from junkdraw_app.schemas.link import UrlMetadata
from junkdraw_app.services.source import derive_source

logger = logging.getLogger(__name__)


def extract_title(html: str) -> Optional[str]:
    """og:title wins over <title>; whitespace is collapsed."""
    soup = BeautifulSoup(html, "html.parser")

    og_title = soup.find("meta", property="og:title")
    if og_title and og_title.get("content"):
        title = og_title["content"]
    elif soup.title and soup.title.string:
        title = soup.title.string
    else:
        return None

    title = " ".join(title.split())
    return title or None


def fetch_url_metadata(url: str) -> UrlMetadata:
    """
    Fetch the page and return its title and derived source.

    Network or HTTP errors leave the title empty; the source is derived from
    the url alone and never needs the network.
    """
    metadata = UrlMetadata(source=derive_source(url))

    if not url or not url.startswith(("http://", "https://")):
        return metadata

    try:
        resp = requests.get(
            url,
            timeout=settings.metadata_timeout,
            headers={"User-Agent": settings.metadata_user_agent},
        )
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Metadata fetch failed for %s: %s", url, e)
        return metadata

    if "html" not in resp.headers.get("content-type", "html"):
        return metadata

    metadata.title = extract_title(resp.text)
    return metadata
