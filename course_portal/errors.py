"""Exception classes raised by the portal workflows.

Each error carries the message shown to the user and the HTTP status the API
answers with. Routes never build these messages themselves.
"""

from __future__ import annotations

from typing import Optional


class PortalError(Exception):
    """Base exception for all course portal errors."""

    status_code = 400
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__


class StorageUnavailable(PortalError):
    """Raised when the key-value store cannot be read or written."""

    status_code = 503
    default_message = "Private browsing detected. Some features may not work properly."


class InvalidCredentials(PortalError):
    status_code = 401
    default_message = "Invalid email or password!"


class DuplicateEmail(PortalError):
    status_code = 409
    default_message = "Email already registered!"


class MissingFields(PortalError):
    default_message = "Please fill in all fields!"


class PasswordMismatch(PortalError):
    default_message = "Passwords do not match!"


class NotAuthenticated(PortalError):
    status_code = 401
    default_message = "Please log in to continue."


class NotAuthorized(PortalError):
    status_code = 403
    default_message = "Admin access required."


class InvalidAccessCode(PortalError):
    """Raised when no code matches the entered value for the selected course."""

    status_code = 404
    default_message = "Invalid access code for this course!"


class CodeTooShort(PortalError):
    default_message = "Please enter a valid access code!"


class AlreadyUsed(PortalError):
    status_code = 409
    default_message = "This access code has already been used!"


class CodeNotFound(PortalError):
    status_code = 404
    default_message = "Access code not found."


class NoCourseSelected(PortalError):
    default_message = "Please select a course!"


class UnknownCourse(PortalError):
    def __init__(self, course: str):
        self.course = course
        super().__init__(f"Unknown course '{course}'.")


class UserNotFound(PortalError):
    status_code = 404
    default_message = "User not found!"


class InvalidEmailFormat(PortalError):
    default_message = "Please enter a valid email address!"


class AlreadyAdmin(PortalError):
    status_code = 409
    default_message = "This user is already an admin!"


class SelfDemotion(PortalError):
    default_message = "You cannot remove yourself as an admin"


class SuperuserProtected(PortalError):
    status_code = 403
    default_message = "The super admin cannot be removed."


class UnknownPaymentMethod(PortalError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported payment method '{method}'.")
