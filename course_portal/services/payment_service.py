"""WhatsApp links used to arrange course payments."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from course_portal.config import Settings
from course_portal.errors import UnknownPaymentMethod

PAYMENT_METHODS = ("USD", "Naira", "Cryptocurrency")
WHATSAPP_BASE_URL = "https://wa.me"


def payment_message(method: str, course: Optional[str]) -> str:
    return f"Hello, I want to purchase the {course or 'selected'} course using {method}."


def build_payment_link(settings: Settings, method: str, course: Optional[str]) -> str:
    """Return the WhatsApp URL for paying for ``course`` with ``method``.

    USD payments go to their own recipient; every other method shares one.
    """
    if method not in PAYMENT_METHODS:
        raise UnknownPaymentMethod(method)

    recipient = settings.whatsapp_usd_number if method == "USD" else settings.whatsapp_default_number
    return f"{WHATSAPP_BASE_URL}/{recipient}?text={quote(payment_message(method, course), safe='')}"
