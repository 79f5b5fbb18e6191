"""Course, enrollment and class session models."""
from datetime import datetime
from sams import db
from sams.models.base import BaseModel


class Course(BaseModel):
    """A course owned by at most one lecturer."""

    __tablename__ = 'courses'

    code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    lecturer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    semester = db.Column(db.String(50), nullable=True)
    academic_year = db.Column(db.String(20), nullable=True)

    # Relationships
    sessions = db.relationship('ClassSession', backref='course', lazy='dynamic')
    enrollments = db.relationship('Enrollment', backref='course', lazy='dynamic')
    exams = db.relationship('Exam', backref='course', lazy='dynamic')

    def __repr__(self):
        return f'<Course {self.code}>'


class Enrollment(BaseModel):
    """Student-course enrollment."""

    __tablename__ = 'enrollments'

    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False, index=True)
    enrollment_date = db.Column(db.DateTime, default=datetime.utcnow)

    student = db.relationship('User', backref=db.backref('enrollments', lazy='dynamic'))

    def __repr__(self):
        return f'<Enrollment {self.student_id}-{self.course_id}>'


class ClassSession(BaseModel):
    """A single scheduled class meeting of a course."""

    __tablename__ = 'class_sessions'

    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    location = db.Column(db.String(255), nullable=True)

    attendance_records = db.relationship('Attendance', backref='session', lazy='dynamic')

    def __repr__(self):
        return f'<ClassSession {self.title}>'
