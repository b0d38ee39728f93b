"""
Relative-to-absolute URL resolution for links and images.

Resolution is best effort: an href that cannot be resolved yields None and
callers skip it, so one bad link never aborts an extraction. Absolute URLs
of any scheme (``mailto:``, ``tel:``, ``data:``...) are kept as they are.
"""

import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

from ..errors import MalformedUrlError


logger = logging.getLogger(__name__)

HOST_SCHEMES = ("http", "https")


def resolve_url_strict(href: Optional[str], base_url: str) -> str:
    """
    Resolve ``href`` against ``base_url``.

    Raises:
        MalformedUrlError: If the href is empty or unparseable, if the result
            has no scheme, or if an http(s) result has no host
    """
    if href is None or not href.strip():
        raise MalformedUrlError(href or "")

    try:
        absolute = urljoin(base_url, href.strip())
        parsed = urlparse(absolute)
        # Accessing .port validates the netloc, e.g. rejects "http://a:xx/"
        parsed.port
    except ValueError as e:
        raise MalformedUrlError(href) from e

    if not parsed.scheme:
        raise MalformedUrlError(href)
    if parsed.scheme in HOST_SCHEMES and not parsed.netloc:
        raise MalformedUrlError(href)

    return absolute


def resolve_url(href: Optional[str], base_url: str) -> Optional[str]:
    """
    Resolve ``href`` against ``base_url``, returning None when malformed.

    Args:
        href: Link or image source as found in the document
        base_url: URL of the document

    Returns:
        Absolute URL, or None
    """
    try:
        return resolve_url_strict(href, base_url)
    except MalformedUrlError as e:
        logger.debug("Skipping unresolvable URL: %s", e)
        return None
