"""Generated identifiers, access codes and timestamps."""

from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def generate_code(length: int = CODE_LENGTH) -> str:
    """Return a random access code drawn from A-Z and 0-9."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_token(prefix: str = "id") -> str:
    """Return a random identifier with the given prefix."""
    return f"{prefix}_{secrets.token_urlsafe(12)}"
