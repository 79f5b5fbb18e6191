"""Request bodies for announcements, events, timetable and resources."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from sams.schemas.base import RequestSchema

TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


class AnnouncementCreate(RequestSchema):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    course_id: Optional[int] = None
    is_global: bool = False
    is_pinned: bool = False
    expires_at: Optional[datetime] = None
    recipient_ids: Optional[List[int]] = None


class EventCreate(RequestSchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=50)
    start_date: datetime
    duration: int = Field(..., gt=0)
    location: Optional[str] = None


class TimetableEntryCreate(RequestSchema):
    course_id: int
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    location: Optional[str] = None

    @model_validator(mode='after')
    def ends_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ResourceCreate(RequestSchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = Field(..., min_length=1, max_length=50)
    url: str = Field(..., min_length=1, max_length=1024)
    course_id: Optional[int] = None
    is_public: bool = False
