"""
Wallet card payloads.

Only the payload is built here. Issuing the card against the Google Wallet
API (https://walletobjects.googleapis.com/walletobjects/v1) is left to the
wallet integration.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .errors import CardTemplateError
from .models import WalletCardRequest

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
GOOGLE_CARD_TEMPLATE = "google_card.json"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def render_google_card(
    card: WalletCardRequest,
    *,
    class_id: Optional[str] = None,
    template_name: str = GOOGLE_CARD_TEMPLATE,
) -> Dict[str, Any]:
    """Render the Google Wallet generic object for one member."""
    try:
        rendered = _env.get_template(template_name).render(
            first_name=card.first_name,
            last_name=card.last_name,
            expiration_date=card.expiration_date,
            class_id=class_id,
        )
    except TemplateError as exc:
        raise CardTemplateError(f"Error rendering {template_name}: {exc}") from exc

    try:
        payload = json.loads(rendered)
    except json.JSONDecodeError as exc:
        raise CardTemplateError(f"{template_name} did not render valid JSON: {exc}") from exc

    logger.debug("Rendered %s for %s %s", template_name, card.first_name, card.last_name)
    return payload
