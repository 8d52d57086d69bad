"""Records persisted in the key-value store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Course(str, Enum):
    """Courses offered by the portal, valued by their display name."""

    YOUTUBE_AUTOMATION = "YouTube Automation"
    DIGITAL_MARKETING = "Digital Marketing"
    DATA_SCIENCE = "Data Science Fundamentals"

    @property
    def page(self) -> str:
        return COURSE_PAGES[self]

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["Course"]:
        """Return the course with this display name, or None."""
        for course in cls:
            if course.value == name:
                return course
        return None

    @classmethod
    def from_page(cls, page: str) -> Optional["Course"]:
        for course, course_page in COURSE_PAGES.items():
            if course_page == page:
                return course
        return None


COURSE_PAGES: Dict[Course, str] = {
    Course.YOUTUBE_AUTOMATION: "youtube-automation.html",
    Course.DIGITAL_MARKETING: "digital-marketing.html",
    Course.DATA_SCIENCE: "data-science.html",
}


class CodeStatus(str, Enum):
    ACTIVE = "active"
    # Never produced by any workflow; kept so stored records using it still load.
    PENDING = "pending"
    USED = "used"


@dataclass
class User:
    id: str
    name: str
    email: str
    password: Optional[str] = None
    is_admin: bool = False
    courses: List[str] = field(default_factory=list)

    def has_course(self, course: str) -> bool:
        return course in self.courses

    def grant(self, course: str) -> bool:
        """Add ``course`` once; return True if it was not already granted."""
        if course in self.courses:
            return False
        self.courses.append(course)
        return True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        courses = list(dict.fromkeys(data.get("courses") or []))
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password"),
            is_admin=bool(data.get("isAdmin", False)),
            courses=courses,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "isAdmin": self.is_admin,
            "courses": list(self.courses),
        }
        if self.password is not None:
            data["password"] = self.password
        return data

    def to_public(self) -> Dict[str, Any]:
        """Return the record without its password, for API responses."""
        data = self.to_dict()
        data.pop("password", None)
        return data


@dataclass
class AccessCode:
    id: str
    code: str
    course: Course
    status: CodeStatus = CodeStatus.ACTIVE
    created_at: str = ""
    user_email: Optional[str] = None

    @property
    def normalized(self) -> str:
        return normalize_code(self.code)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessCode":
        return cls(
            id=str(data.get("id", "")),
            code=data.get("code", ""),
            course=Course(data["course"]),
            status=CodeStatus(data.get("status", CodeStatus.ACTIVE.value)),
            created_at=data.get("createdAt", ""),
            user_email=data.get("userEmail"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "course": self.course.value,
            "status": self.status.value,
            "userEmail": self.user_email,
            "createdAt": self.created_at,
        }


@dataclass
class Redirect:
    """Page the client should navigate to, optionally after a cosmetic delay."""

    page: str
    delay_ms: int = 0
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"redirect": self.page, "delayMs": self.delay_ms}
        if self.message:
            data["message"] = self.message
        return data


def normalize_code(value: str) -> str:
    """Strip hyphens and upper-case an access code for comparison."""
    return value.replace("-", "").upper()
