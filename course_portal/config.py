"""Runtime configuration read from environment variables.

Values come from the process environment, which ``app.py`` populates from a
``.env`` file through python-dotenv. Workflows receive a ``Settings`` instance
explicitly so tests can build their own.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_SEED_USERS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "John Doe",
        "email": "john@example.com",
        "password": "password123",
        "isAdmin": False,
        "courses": [],
    }
]

DEFAULT_FREE_COURSES = "Data Science Fundamentals"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _parse_csv(value: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Configuration shared by every workflow."""

    enable_mongodb: bool = False
    superuser_email: str = "admin@localhost"
    superuser_password: Optional[str] = None
    superuser_name: str = "Main Admin"
    free_courses: Tuple[str, ...] = (DEFAULT_FREE_COURSES,)
    seed_users: List[Dict[str, Any]] = field(default_factory=lambda: list(DEFAULT_SEED_USERS))
    whatsapp_usd_number: str = "263784812740"
    whatsapp_default_number: str = "2347048929112"

    @property
    def superuser_enabled(self) -> bool:
        return bool(self.superuser_email and self.superuser_password)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        seed_raw = os.getenv("SEED_USERS")
        seed_users = json.loads(seed_raw) if seed_raw else list(DEFAULT_SEED_USERS)

        return cls(
            enable_mongodb=_env_flag("ENABLE_MONGODB"),
            superuser_email=os.getenv("SUPERUSER_EMAIL", "admin@localhost"),
            superuser_password=os.getenv("SUPERUSER_PASSWORD") or None,
            superuser_name=os.getenv("SUPERUSER_NAME", "Main Admin"),
            free_courses=_parse_csv(os.getenv("FREE_COURSES", DEFAULT_FREE_COURSES)),
            seed_users=seed_users,
            whatsapp_usd_number=os.getenv("WHATSAPP_USD_NUMBER", "263784812740"),
            whatsapp_default_number=os.getenv("WHATSAPP_DEFAULT_NUMBER", "2347048929112"),
        )
