"""Login, signup and logout against the user registry."""

from __future__ import annotations

import logging
from typing import Tuple

from course_portal.config import Settings
from course_portal.errors import DuplicateEmail, InvalidCredentials, MissingFields, PasswordMismatch
from course_portal.models import Redirect, User
from course_portal.services import user_service
from course_portal.services.navigation_service import (
    ADMIN_DASHBOARD_PAGE,
    COURSES_PAGE,
    INDEX_PAGE,
)
from course_portal.storage import KeyValueStore
from course_portal.utils.codes import generate_token

logger = logging.getLogger(__name__)

SUPERUSER_ID = "admin"
SIGNUP_REDIRECT_DELAY_MS = 1000
LOGOUT_REDIRECT_DELAY_MS = 500


def superuser_session(settings: Settings) -> User:
    """Build the synthetic admin session used when the superuser logs in."""
    return User(
        id=SUPERUSER_ID,
        name=settings.superuser_name,
        email=settings.superuser_email,
        is_admin=True,
        courses=[],
    )


def login(store: KeyValueStore, settings: Settings, email: str, password: str) -> Tuple[User, Redirect]:
    """
    Authenticate a user and start their session.

    Registered users are matched on exact email and password. When none
    matches, the configured superuser credentials are checked.

    Args:
        store: The client's key-value store
        settings: Portal settings holding the superuser credentials
        email: Email as typed
        password: Plaintext password

    Returns:
        The session user and the page to navigate to

    Raises:
        InvalidCredentials: If neither a user nor the superuser matches
    """
    users = user_service.load_users(store)
    user = next((u for u in users if u.email == email and u.password == password), None)

    if user is not None:
        user_service.set_current_user(store, user)
        logger.info("User %s logged in", user.id)
        return user, Redirect(COURSES_PAGE)

    if settings.superuser_enabled and email == settings.superuser_email and password == settings.superuser_password:
        admin = superuser_session(settings)
        user_service.set_current_user(store, admin)
        logger.info("Superuser logged in")
        return admin, Redirect(ADMIN_DASHBOARD_PAGE)

    raise InvalidCredentials()


def signup(
    store: KeyValueStore,
    name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> Tuple[User, Redirect]:
    """
    Register a new account and log it in.

    Raises:
        MissingFields: If the name, email or password is blank
        PasswordMismatch: If the confirmation differs from the password
        DuplicateEmail: If a user already has this exact email
    """
    if not name.strip() or not email.strip() or not password:
        raise MissingFields()
    if password != confirm_password:
        raise PasswordMismatch()

    users = user_service.load_users(store)
    if user_service.find_by_email(users, email) is not None:
        raise DuplicateEmail()

    user = User(
        id=generate_token("user"),
        name=name,
        email=email,
        password=password,
        is_admin=False,
        courses=[],
    )
    users.append(user)
    user_service.save_users(store, users)
    user_service.set_current_user(store, user)
    logger.info("Created user %s", user.id)

    return user, Redirect(COURSES_PAGE, SIGNUP_REDIRECT_DELAY_MS, "Account created successfully!")


def logout(store: KeyValueStore) -> Redirect:
    user_service.clear_current_user(store)
    return Redirect(INDEX_PAGE, LOGOUT_REDIRECT_DELAY_MS, "Logged out successfully")
