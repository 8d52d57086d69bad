"""Page names and the guards that decide whether a page may be shown."""

from __future__ import annotations

import logging
from typing import Optional

from course_portal.config import Settings
from course_portal.errors import StorageUnavailable
from course_portal.models import Course, Redirect
from course_portal.services import user_service
from course_portal.storage import KeyValueStore

logger = logging.getLogger(__name__)

INDEX_PAGE = "index.html"
LOGIN_PAGE = "login.html"
COURSES_PAGE = "courses.html"
ACCESS_CODE_PAGE = "access-code.html"
PAYMENT_PAGE = "payment.html"
ADMIN_DASHBOARD_PAGE = "admin/dashboard.html"
ADMIN_CODES_PAGE = "admin/manage-codes.html"
ADMIN_ADMINS_PAGE = "admin/manage-admins.html"

ADMIN_PAGES = (ADMIN_DASHBOARD_PAGE, ADMIN_CODES_PAGE, ADMIN_ADMINS_PAGE)

PROTECTED_PAGES = (
    COURSES_PAGE,
    *(course.page for course in Course),
    ACCESS_CODE_PAGE,
    PAYMENT_PAGE,
    *ADMIN_PAGES,
)

COURSE_LOCKED_DELAY_MS = 2000
COURSE_LOCKED_MESSAGE = "You do not have access to this course. Please enter a valid access code."


def normalize_page(page: str) -> str:
    return page.strip().lstrip("/")


def is_protected(page: str) -> bool:
    page = normalize_page(page)
    return any(page == protected or page.endswith("/" + protected) for protected in PROTECTED_PAGES)


def is_admin_page(page: str) -> bool:
    page = normalize_page(page)
    return any(page == admin_page or page.endswith("/" + admin_page) for admin_page in ADMIN_PAGES)


def guard_page(store: KeyValueStore, page: str, settings: Settings) -> Optional[Redirect]:
    """Return where to send the client instead of ``page``, or None if it may stay.

    Unauthenticated clients go to the login page, including when the store
    cannot be read. Non-admins are turned away from admin pages, and paid
    course pages require the course in the session's course set.
    """
    page = normalize_page(page)
    if not is_protected(page):
        return None

    try:
        user = user_service.get_current_user(store)
    except StorageUnavailable as e:
        logger.warning("Session unreadable while guarding %s", page)
        return Redirect(LOGIN_PAGE, message=e.message)

    if user is None:
        return Redirect(LOGIN_PAGE)

    if is_admin_page(page) and not user.is_admin:
        return Redirect(COURSES_PAGE)

    course = Course.from_page(page.rsplit("/", 1)[-1])
    if course is not None and course.value not in settings.free_courses:
        if not user.has_course(course.value):
            return Redirect(ACCESS_CODE_PAGE, COURSE_LOCKED_DELAY_MS, COURSE_LOCKED_MESSAGE)

    return None
