"""Validated request bodies, one per endpoint that accepts JSON."""
from .base import RequestSchema
from .auth import LoginRequest, UserCreate, UserUpdate
from .academic import (
    CourseCreate, CourseUpdate, EnrollmentCreate,
    SessionCreate, SessionUpdate, AttendanceCreate, AttendanceUpdate
)
from .exams import (
    ExamCreate, ExamUpdate, ExamAttendanceCreate,
    EligibilityCheck, EligibilityCreate
)
from .content import AnnouncementCreate, EventCreate, TimetableEntryCreate, ResourceCreate
from .qr import TokenVerify
