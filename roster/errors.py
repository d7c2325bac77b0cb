from __future__ import annotations

from typing import Optional


class RosterError(Exception):
    """Base exception for roster ingestion failures."""


class ConfigurationError(RosterError):
    """Raised when a required setting is missing or invalid."""


class TransportError(RosterError):
    """Raised when the feed could not be retrieved."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"Could not fetch {url}: {message}")
        self.url = url
        self.status_code = status_code


class MalformedTableError(RosterError):
    """Raised when the payload cannot be read as comma-delimited rows."""


class CardTemplateError(RosterError):
    """Raised when the wallet card template is missing or renders invalid JSON."""
