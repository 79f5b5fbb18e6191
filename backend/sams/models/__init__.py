"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .course import Course, Enrollment, ClassSession
from .attendance import Attendance
from .exam import Exam, ExamEligibility, ExamAttendance
from .activity import Activity
from .announcement import Announcement, AnnouncementRecipient
from .schedule import Event, TimetableEntry
from .resource import Resource

__all__ = [
    'BaseModel', 'User', 'UserRole',
    'Course', 'Enrollment', 'ClassSession',
    'Attendance', 'Exam', 'ExamEligibility', 'ExamAttendance',
    'Activity', 'Announcement', 'AnnouncementRecipient',
    'Event', 'TimetableEntry', 'Resource'
]
