from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from .. import config

logger = logging.getLogger(__name__)

ImageFetcher = Callable[[str], Optional[bytes]]


def fetch_image(url: str, timeout_s: Optional[float] = None) -> Optional[bytes]:
    """
    Single GET for a signature image. No retries: any failure returns None and
    the caller falls back to a text-only signature.
    """
    if not url or not url.startswith(("http://", "https://")):
        return None
    try:
        resp = requests.get(
            url,
            timeout=timeout_s if timeout_s is not None else config.FETCH_TIMEOUT_S,
            allow_redirects=True,
            headers={"Accept": "image/png,image/jpeg,image/*;q=0.8"},
        )
    except requests.RequestException as exc:
        logger.warning("Failed to fetch signature image %s: %s", url, exc)
        return None

    if not 200 <= resp.status_code < 300 or not resp.content:
        logger.warning("Signature image fetch returned %s for %s", resp.status_code, url)
        return None
    return resp.content
