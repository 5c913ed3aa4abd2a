"""
Source derivation: the lightweight provenance label shown next to a link.
"""

from typing import Optional
from urllib.parse import urlparse

MANUAL_SOURCE = "Manual"


def derive_source(url: Optional[str]) -> Optional[str]:
    """
    Return the url's hostname with one leading "www." removed.

    Returns None when the url is empty or has no parseable hostname
    (missing scheme, malformed netloc). Never raises.
    """
    if not url:
        return None

    try:
        hostname = urlparse(url.strip()).hostname
    except ValueError:
        # e.g. unbalanced brackets in an IPv6 netloc
        return None

    if not hostname:
        return None

    if hostname.startswith("www."):
        hostname = hostname[len("www."):]

    return hostname or None
