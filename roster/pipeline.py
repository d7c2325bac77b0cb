from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

import httpx

from .config import Settings
from .fetch import fetch_feed
from .models import MemberRecord
from .normalize import normalize_csv_bytes
from .rules import DEFAULT_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class RosterPipeline:
    """Fetch -> parse -> normalize for one configured feed. Holds no state between runs."""

    def __init__(
        self,
        feed_url: str,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.feed_url = feed_url
        self.client = client
        self.timeout = timeout
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "RosterPipeline":
        kwargs.setdefault("timeout", settings.fetch_timeout)
        return cls(settings.require_feed_url(), **kwargs)

    def load_members(self) -> List[MemberRecord]:
        raw = fetch_feed(self.feed_url, client=self.client, timeout=self.timeout)
        members = normalize_csv_bytes(raw, today=self.clock())
        logger.info("Loaded %d members from %s", len(members), self.feed_url)
        return members
