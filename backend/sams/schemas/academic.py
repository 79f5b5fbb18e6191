"""Request bodies for courses, enrollments, sessions and attendance."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from sams.schemas.base import RequestSchema, reject_null


class CourseCreate(RequestSchema):
    code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    lecturer_id: Optional[int] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = None


class CourseUpdate(RequestSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    lecturer_id: Optional[int] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = None

    not_null = reject_null('name')


class EnrollmentCreate(RequestSchema):
    student_id: int
    course_id: int


class SessionCreate(RequestSchema):
    course_id: int
    title: str = Field(..., min_length=1, max_length=255)
    date: datetime
    duration: int = Field(..., gt=0)
    location: Optional[str] = None


class SessionUpdate(RequestSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0)
    location: Optional[str] = None

    not_null = reject_null('title', 'date', 'duration')


class AttendanceCreate(RequestSchema):
    session_id: int
    student_id: int
    present: bool = False
    # Accepted for compatibility; the server records the session user instead
    marked_by_id: Optional[int] = None


class AttendanceUpdate(RequestSchema):
    present: bool
