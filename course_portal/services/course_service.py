"""Course catalog and course selection."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from course_portal.config import Settings
from course_portal.errors import NoCourseSelected, NotAuthenticated
from course_portal.models import Course, Redirect, User
from course_portal.services import user_service
from course_portal.services.navigation_service import ACCESS_CODE_PAGE
from course_portal.storage import SELECTED_COURSE_KEY, KeyValueStore, read_json, write_json

logger = logging.getLogger(__name__)

FREE_COURSE_REDIRECT_DELAY_MS = 500


def is_free(course: str, settings: Settings) -> bool:
    return course in settings.free_courses


def get_selected_course(store: KeyValueStore) -> Optional[str]:
    return read_json(store, SELECTED_COURSE_KEY)


def list_courses(user: Optional[User], settings: Settings) -> List[Dict[str, Any]]:
    """Describe every course and whether ``user`` already has access to it."""
    return [
        {
            "name": course.value,
            "page": course.page,
            "free": is_free(course.value, settings),
            "unlocked": bool(user and user.has_course(course.value)),
        }
        for course in Course
    ]


def select_course(store: KeyValueStore, settings: Settings, course: str) -> Redirect:
    """
    Remember the chosen course and decide where the client goes next.

    Free courses are granted on the spot, once, and open directly. Paid
    courses send the client to the access-code page.

    Raises:
        NoCourseSelected: If the course name is empty
        NotAuthenticated: If a free course is picked while logged out
    """
    course = (course or "").strip()
    if not course:
        raise NoCourseSelected()

    write_json(store, SELECTED_COURSE_KEY, course)

    if not is_free(course, settings):
        return Redirect(ACCESS_CODE_PAGE)

    user = user_service.get_current_user(store)
    if user is None:
        raise NotAuthenticated()

    if user.grant(course):
        user_service.persist_session_user(store, user)
        logger.info("Granted free course %s to %s", course, user.id)

    known = Course.from_name(course)
    page = known.page if known is not None else ACCESS_CODE_PAGE
    return Redirect(page, FREE_COURSE_REDIRECT_DELAY_MS, f"Access granted to {course}!")
