"""Attendance model."""
from datetime import datetime
from sams import db
from sams.models.base import BaseModel


class Attendance(BaseModel):
    """Attendance of one student at one class session.

    Nothing enforces a single row per (session, student); the attendance
    rate counts every present row.
    """

    __tablename__ = 'attendance'

    session_id = db.Column(db.Integer, db.ForeignKey('class_sessions.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    present = db.Column(db.Boolean, default=False, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)
    marked_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)

    marked_by = db.relationship('User', foreign_keys=[marked_by_id])

    def __repr__(self):
        return f'<Attendance {self.student_id}-{self.session_id}>'
