"""Exam, exam eligibility and exam attendance models."""
from datetime import datetime
from sams import db
from sams.models.base import BaseModel


class Exam(BaseModel):
    """Exam of a course with an optional minimum attendance requirement."""

    __tablename__ = 'exams'

    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    date = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    location = db.Column(db.String(255), nullable=True)
    minimum_attendance = db.Column(db.Integer, nullable=True)  # percent, None = no requirement

    def __repr__(self):
        return f'<Exam {self.title}>'


class ExamEligibility(BaseModel):
    """Recorded eligibility decision for a student and exam."""

    __tablename__ = 'exam_eligibility'

    exam_id = db.Column(db.Integer, db.ForeignKey('exams.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    eligible = db.Column(db.Boolean, default=False, nullable=False)
    verified_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    verified_at = db.Column(db.DateTime, nullable=True)

    exam = db.relationship('Exam', backref=db.backref('eligibilities', lazy='dynamic'))

    def __repr__(self):
        return f'<ExamEligibility {self.student_id}-{self.exam_id}>'


class ExamAttendance(BaseModel):
    """Attendance of a student at an exam sitting."""

    __tablename__ = 'exam_attendance'

    exam_id = db.Column(db.Integer, db.ForeignKey('exams.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    present = db.Column(db.Boolean, default=True, nullable=False)
    marked_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<ExamAttendance {self.student_id}-{self.exam_id}>'
