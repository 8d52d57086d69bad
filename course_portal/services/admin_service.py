"""Admin promotion, demotion and dashboard statistics."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from course_portal.config import Settings
from course_portal.errors import (
    AlreadyAdmin,
    InvalidEmailFormat,
    SelfDemotion,
    SuperuserProtected,
    UserNotFound,
)
from course_portal.models import CodeStatus, User
from course_portal.services import access_code_service, user_service
from course_portal.storage import KeyValueStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SUPER_ADMIN_LABEL = "Super Admin"
ADMIN_LABEL = "Admin"


def is_superuser(email: str, settings: Settings) -> bool:
    return bool(settings.superuser_email) and email == settings.superuser_email


def promote_to_admin(store: KeyValueStore, email: str) -> User:
    """
    Grant admin rights to an existing user.

    An exact email match wins; otherwise the lookup ignores case, unlike
    signup's uniqueness check.

    Raises:
        InvalidEmailFormat: If the email is empty or malformed
        UserNotFound: If no user has this email
        AlreadyAdmin: If the user is already an admin
    """
    email = (email or "").strip()
    if not email:
        raise InvalidEmailFormat("Please enter an email address!")
    if not EMAIL_PATTERN.match(email):
        raise InvalidEmailFormat()

    users = user_service.load_users(store)
    user = user_service.find_by_email(users, email) or user_service.find_by_email(
        users, email, case_sensitive=False
    )
    if user is None:
        raise UserNotFound()
    if user.is_admin:
        raise AlreadyAdmin()

    user.is_admin = True
    user_service.save_users(store, users)
    logger.info("Promoted %s to admin", user.id)
    return user


def demote_admin(store: KeyValueStore, settings: Settings, email: str, acting_email: str) -> User:
    """
    Remove admin rights from a user.

    Raises:
        SelfDemotion: If the acting admin targets their own email
        SuperuserProtected: If the target is the configured superuser
        UserNotFound: If no user has this email
    """
    if email == acting_email:
        raise SelfDemotion()
    if is_superuser(email, settings):
        raise SuperuserProtected()

    users = user_service.load_users(store)
    user = user_service.find_by_email(users, email)
    if user is None:
        raise UserNotFound()

    user.is_admin = False
    user_service.save_users(store, users)
    logger.info("Removed admin rights from %s", user.id)
    return user


def list_admins(store: KeyValueStore, settings: Settings) -> List[Dict[str, Any]]:
    admins = []
    for user in user_service.load_users(store):
        if not user.is_admin:
            continue
        superuser = is_superuser(user.email, settings)
        admins.append({
            "name": user.name,
            "email": user.email,
            "role": SUPER_ADMIN_LABEL if superuser else ADMIN_LABEL,
            "removable": not superuser,
        })
    return admins


def dashboard_stats(store: KeyValueStore) -> Dict[str, int]:
    """Count users, codes and used codes; recomputed on every call."""
    codes = access_code_service.load_codes(store)
    return {
        "total_users": len(user_service.load_users(store)),
        "total_codes": len(codes),
        "used_codes": sum(1 for code in codes if code.status == CodeStatus.USED),
    }
