"""Request bodies for exams and eligibility."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from sams.schemas.base import RequestSchema, reject_null


class ExamCreate(RequestSchema):
    course_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    date: datetime
    duration: int = Field(..., gt=0)
    location: Optional[str] = None
    minimum_attendance: Optional[int] = Field(None, ge=0, le=100)


class ExamUpdate(RequestSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    date: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0)
    location: Optional[str] = None
    minimum_attendance: Optional[int] = Field(None, ge=0, le=100)

    not_null = reject_null('title', 'date', 'duration')


class ExamAttendanceCreate(RequestSchema):
    exam_id: int
    student_id: int
    present: bool = True
    marked_by_id: Optional[int] = None


class EligibilityCheck(RequestSchema):
    student_id: int = Field(..., gt=0)
    exam_id: int = Field(..., gt=0)


class EligibilityCreate(RequestSchema):
    exam_id: int
    student_id: int
    # Computed from attendance when omitted
    eligible: Optional[bool] = None
