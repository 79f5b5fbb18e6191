"""Announcement models."""
from sams import db
from sams.models.base import BaseModel


class Announcement(BaseModel):
    """Announcement, either global or addressed to recipients."""

    __tablename__ = 'announcements'

    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=True, index=True)
    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    is_global = db.Column(db.Boolean, default=False, nullable=False)
    is_pinned = db.Column(db.Boolean, default=False, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=True)

    recipients = db.relationship('AnnouncementRecipient', backref='announcement', lazy='dynamic')

    def __repr__(self):
        return f'<Announcement {self.title}>'


class AnnouncementRecipient(BaseModel):
    """Delivery of an announcement to one student."""

    __tablename__ = 'announcement_recipients'

    announcement_id = db.Column(db.Integer, db.ForeignKey('announcements.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    read_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f'<AnnouncementRecipient {self.announcement_id}-{self.student_id}>'
