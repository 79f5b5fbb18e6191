"""Activity log model."""
from datetime import datetime
from sams import db
from sams.models.base import BaseModel


class Activity(BaseModel):
    """Audit trail entry for a user action."""

    __tablename__ = 'activities'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)
    action = db.Column(db.String(100), nullable=False)
    details = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    user = db.relationship('User', backref=db.backref('activities', lazy='dynamic'))

    @classmethod
    def log(cls, user_id, action: str, details: str = None) -> 'Activity':
        """Add an activity to the current transaction without committing."""
        activity = cls(user_id=user_id, action=action, details=details)
        db.session.add(activity)
        return activity

    def __repr__(self):
        return f'<Activity {self.action}>'
