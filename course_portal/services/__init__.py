"""Service layer modules for the course portal."""

from . import (
    user_service,
    navigation_service,
    auth_service,
    access_code_service,
    course_service,
    admin_service,
    payment_service,
)

__all__ = [
    "access_code_service",
    "admin_service",
    "auth_service",
    "course_service",
    "navigation_service",
    "payment_service",
    "user_service",
]
