"""Service for generating, listing and redeeming course access codes."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from course_portal.errors import (
    AlreadyUsed,
    CodeNotFound,
    CodeTooShort,
    InvalidAccessCode,
    NoCourseSelected,
    NotAuthenticated,
    StorageUnavailable,
    UnknownCourse,
)
from course_portal.models import AccessCode, CodeStatus, Course, Redirect, User, normalize_code
from course_portal.services import user_service
from course_portal.storage import ACCESS_CODES_KEY, RECORD_ERRORS, KeyValueStore, read_json, write_json
from course_portal.utils.codes import CODE_LENGTH, generate_code as random_code, generate_token, now_iso

logger = logging.getLogger(__name__)

VERIFY_REDIRECT_DELAY_MS = 1000


def load_codes(store: KeyValueStore) -> List[AccessCode]:
    try:
        return [AccessCode.from_dict(item) for item in read_json(store, ACCESS_CODES_KEY, [])]
    except RECORD_ERRORS as e:
        logger.warning("Stored access codes in namespace '%s' are malformed", store.namespace)
        raise StorageUnavailable() from e


def save_codes(store: KeyValueStore, codes: List[AccessCode]) -> None:
    write_json(store, ACCESS_CODES_KEY, [code.to_dict() for code in codes])


def list_codes(store: KeyValueStore) -> List[AccessCode]:
    """Return every code, newest first."""
    return sorted(load_codes(store), key=lambda code: code.created_at, reverse=True)


def generate_code(store: KeyValueStore, course: Optional[str]) -> AccessCode:
    """
    Create a new active access code for a course.

    Codes are not checked for collisions with existing ones.

    Args:
        store: The client's key-value store
        course: Display name of the course the code unlocks

    Returns:
        The stored access code record

    Raises:
        NoCourseSelected: If no course was given
        UnknownCourse: If the name matches no course
    """
    if not course:
        raise NoCourseSelected()
    selected = Course.from_name(course)
    if selected is None:
        raise UnknownCourse(course)

    record = AccessCode(
        id=generate_token("code"),
        code=random_code(CODE_LENGTH),
        course=selected,
        status=CodeStatus.ACTIVE,
        created_at=now_iso(),
    )
    codes = load_codes(store)
    codes.append(record)
    save_codes(store, codes)

    logger.info("Generated access code %s for %s", record.id, selected.value)
    return record


def delete_code(store: KeyValueStore, code_id: str) -> AccessCode:
    """Remove the code with ``code_id`` and return it."""
    codes = load_codes(store)
    for index, code in enumerate(codes):
        if code.id == code_id:
            del codes[index]
            save_codes(store, codes)
            return code
    raise CodeNotFound()


def join_code_input(entered: Union[str, Sequence[str]]) -> str:
    """Concatenate per-character input fields into one upper-cased code."""
    if isinstance(entered, str):
        return entered.strip().upper()
    return "".join(str(part or "").strip() for part in entered).upper()


def verify_code(
    store: KeyValueStore,
    entered: Union[str, Sequence[str]],
    selected_course: Optional[str],
) -> Tuple[AccessCode, User, Redirect]:
    """
    Redeem an access code for the selected course.

    The code is matched ignoring hyphens and case, and only against codes
    issued for ``selected_course``. On success the code becomes used and the
    course is added once to the session user's course set.

    Args:
        store: The client's key-value store
        entered: The code as one string or as individual character fields
        selected_course: Display name of the course being unlocked

    Returns:
        The redeemed code, the updated session user and the course page redirect

    Raises:
        CodeTooShort: If fewer than eight characters were entered
        InvalidAccessCode: If no code matches for this course
        AlreadyUsed: If the matching code has been redeemed before
        NotAuthenticated: If nobody is logged in
    """
    code = join_code_input(entered)
    if len(code) < CODE_LENGTH:
        raise CodeTooShort()

    wanted = normalize_code(code)
    codes = load_codes(store)
    match = next(
        (c for c in codes if c.normalized == wanted and c.course.value == selected_course),
        None,
    )
    if match is None:
        raise InvalidAccessCode()
    if match.status == CodeStatus.USED:
        raise AlreadyUsed()

    user = user_service.get_current_user(store)
    if user is None:
        raise NotAuthenticated()

    match.status = CodeStatus.USED
    match.user_email = user.email
    save_codes(store, codes)

    user.grant(match.course.value)
    user_service.persist_session_user(store, user)

    logger.info("Access code %s redeemed by %s", match.id, user.id)
    return match, user, Redirect(match.course.page, VERIFY_REDIRECT_DELAY_MS, "Access code verified successfully!")


def format_status(status: CodeStatus) -> str:
    return status.value.capitalize()
