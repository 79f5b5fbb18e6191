"""Calendar event and timetable models."""
from sams import db
from sams.models.base import BaseModel


class Event(BaseModel):
    """Campus calendar event."""

    __tablename__ = 'events'

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(50), nullable=False, index=True)
    start_date = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    location = db.Column(db.String(255), nullable=True)

    def __repr__(self):
        return f'<Event {self.title}>'


class TimetableEntry(BaseModel):
    """Weekly recurring slot of a course."""

    __tablename__ = 'timetable'

    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False, index=True)
    day_of_week = db.Column(db.Integer, nullable=False)  # 0 = Monday
    start_time = db.Column(db.String(5), nullable=False)  # HH:MM
    end_time = db.Column(db.String(5), nullable=False)
    location = db.Column(db.String(255), nullable=True)

    course = db.relationship('Course', backref=db.backref('timetable_entries', lazy='dynamic'))

    def __repr__(self):
        return f'<TimetableEntry {self.course_id} {self.day_of_week} {self.start_time}>'
