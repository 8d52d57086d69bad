"""User registry and session records kept in the key-value store."""

from __future__ import annotations

import logging
from typing import List, Optional

from course_portal.config import Settings
from course_portal.errors import StorageUnavailable
from course_portal.models import User
from course_portal.storage import (
    ACCESS_CODES_KEY,
    CURRENT_USER_KEY,
    RECORD_ERRORS,
    USERS_KEY,
    KeyValueStore,
    read_json,
    write_json,
)

logger = logging.getLogger(__name__)


def seed_defaults(store: KeyValueStore, settings: Settings) -> None:
    """Write the configured seed users and an empty code list if either key is absent."""
    if store.get(USERS_KEY) is None:
        write_json(store, USERS_KEY, list(settings.seed_users))
        logger.info("Seeded %d user(s) into namespace '%s'", len(settings.seed_users), store.namespace)
    if store.get(ACCESS_CODES_KEY) is None:
        write_json(store, ACCESS_CODES_KEY, [])


def load_users(store: KeyValueStore) -> List[User]:
    try:
        return [User.from_dict(item) for item in read_json(store, USERS_KEY, [])]
    except RECORD_ERRORS as e:
        logger.warning("Stored users in namespace '%s' are malformed", store.namespace)
        raise StorageUnavailable() from e


def save_users(store: KeyValueStore, users: List[User]) -> None:
    write_json(store, USERS_KEY, [user.to_dict() for user in users])


def find_by_email(users: List[User], email: str, case_sensitive: bool = True) -> Optional[User]:
    """Return the first user with ``email``, comparing exactly unless told otherwise."""
    if case_sensitive:
        return next((user for user in users if user.email == email), None)
    lowered = email.lower()
    return next((user for user in users if user.email.lower() == lowered), None)


def add_user(store: KeyValueStore, user: User) -> None:
    users = load_users(store)
    users.append(user)
    save_users(store, users)


def update_user(store: KeyValueStore, user: User) -> bool:
    """Replace the registry record with the same id; return False if there is none."""
    users = load_users(store)
    for index, existing in enumerate(users):
        if existing.id == user.id:
            users[index] = user
            save_users(store, users)
            return True
    return False


# --- Session ---

def get_current_user(store: KeyValueStore) -> Optional[User]:
    """Return the authenticated user, or None when nobody is logged in."""
    data = read_json(store, CURRENT_USER_KEY)
    if not data:
        return None
    try:
        return User.from_dict(data)
    except RECORD_ERRORS as e:
        logger.warning("Stored session in namespace '%s' is malformed", store.namespace)
        raise StorageUnavailable() from e


def set_current_user(store: KeyValueStore, user: User) -> None:
    write_json(store, CURRENT_USER_KEY, user.to_dict())


def clear_current_user(store: KeyValueStore) -> None:
    store.remove(CURRENT_USER_KEY)


def persist_session_user(store: KeyValueStore, user: User) -> None:
    """Write a changed session user back to both the registry and the session."""
    if not update_user(store, user):
        logger.debug("Session user %s has no registry record; updating session only", user.id)
    set_current_user(store, user)
