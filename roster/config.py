from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError
from .rules import DEFAULT_FETCH_TIMEOUT


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _coerce_timeout(value: Optional[str]) -> float:
    """Parse a positive number of seconds, falling back to the default when unset."""
    if value is None:
        return DEFAULT_FETCH_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"ROSTER_FETCH_TIMEOUT must be a number, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"ROSTER_FETCH_TIMEOUT must be positive, got {value!r}")
    return timeout


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, read from environment-style variables.

    - CSV_URL: location of the published roster feed.
    - ROSTER_FETCH_TIMEOUT: seconds allowed for the feed fetch.
    - GOOGLE_APPLICATION_CREDENTIALS: service-account credentials path.
    - GOOGLE_CLASS_ID: wallet class the card payloads belong to.
    """

    csv_url: Optional[str] = None
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    google_credentials: Optional[str] = None
    google_class_id: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            csv_url=_clean(env.get("CSV_URL")),
            fetch_timeout=_coerce_timeout(_clean(env.get("ROSTER_FETCH_TIMEOUT"))),
            google_credentials=_clean(env.get("GOOGLE_APPLICATION_CREDENTIALS")),
            google_class_id=_clean(env.get("GOOGLE_CLASS_ID")),
        )

    def require_feed_url(self) -> str:
        if not self.csv_url:
            raise ConfigurationError("CSV_URL environment variable is not set")
        return self.csv_url

