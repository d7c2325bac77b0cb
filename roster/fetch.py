from __future__ import annotations

import logging
from typing import Optional

import httpx

from .errors import TransportError
from .rules import DEFAULT_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


def fetch_feed(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> bytes:
    """
    Download the complete feed payload with a single GET.

    A client passed in is left open for its owner; one created here is closed
    before returning. Any network failure or non-success status becomes a
    TransportError. There is no retry.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout)

    logger.debug("Fetching roster feed from %s", url)
    try:
        with client.stream("GET", url, follow_redirects=True) as response:
            if not response.is_success:
                raise TransportError(
                    url,
                    f"server responded with status {response.status_code}",
                    status_code=response.status_code,
                )
            raw = response.read()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise TransportError(url, str(exc) or exc.__class__.__name__) from exc
    finally:
        if owns_client:
            client.close()

    logger.info("Fetched %d bytes from %s", len(raw), url)
    return raw
