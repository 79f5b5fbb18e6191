"""Database seeding service for sample data."""
import logging
from datetime import datetime, timedelta

from sams import db
from sams.models.user import User, UserRole
from sams.models.course import Course, Enrollment, ClassSession
from sams.models.attendance import Attendance
from sams.models.exam import Exam
from sams.models.schedule import TimetableEntry

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    # username, password, first, last, email, role, student id
    ('admin', 'password', 'Admin', 'User', 'admin@sams.edu', UserRole.ADMIN, None),
    ('lecturer', 'password', 'John', 'Doe', 'john.doe@sams.edu', UserRole.LECTURER, None),
    ('student', 'password', 'Jane', 'Smith', 'jane.smith@sams.edu', UserRole.STUDENT, 'ST12345'),
]


class SeedService:
    """Service to seed database with sample data."""

    @staticmethod
    def seed_all():
        """Seed all sample data."""
        SeedService.seed_users()
        SeedService.seed_course()

    @staticmethod
    def seed_users():
        """Create the sample admin, lecturer and student when missing."""
        created = 0
        for username, password, first, last, email, role, student_id in SAMPLE_USERS:
            if User.query.filter_by(username=username).first():
                continue

            user = User(
                username=username,
                first_name=first,
                last_name=last,
                email=email,
                role=role,
                student_id=student_id
            )
            user.set_password(password)
            db.session.add(user)
            created += 1

        db.session.commit()
        logger.info("Seeded %d users", created)
        return created

    @staticmethod
    def seed_course():
        """One course with four past sessions; the student attended three."""
        if Course.query.filter_by(code='CS101').first():
            return None

        lecturer = User.query.filter_by(username='lecturer').first()
        student = User.query.filter_by(username='student').first()

        course = Course(
            code='CS101',
            name='Introduction to Programming',
            description='Fundamentals of programming in Python',
            lecturer_id=lecturer.id if lecturer else None,
            semester='Fall',
            academic_year='2024/2025'
        )
        db.session.add(course)
        db.session.flush()

        now = datetime.utcnow()
        sessions = []
        for week in range(4):
            session = ClassSession(
                course_id=course.id,
                title=f'Lecture {week + 1}',
                date=now - timedelta(weeks=4 - week),
                duration=90,
                location='Room A101'
            )
            db.session.add(session)
            sessions.append(session)

        db.session.add(TimetableEntry(
            course_id=course.id, day_of_week=0,
            start_time='09:00', end_time='10:30', location='Room A101'
        ))

        db.session.add(Exam(
            course_id=course.id,
            title='Midterm Exam',
            date=now + timedelta(days=14),
            duration=120,
            location='Main Hall',
            minimum_attendance=70
        ))

        if student:
            db.session.add(Enrollment(student_id=student.id, course_id=course.id))
            db.session.flush()
            for index, session in enumerate(sessions):
                db.session.add(Attendance(
                    session_id=session.id,
                    student_id=student.id,
                    present=index != 1,
                    marked_by_id=lecturer.id if lecturer else None
                ))

        db.session.commit()
        logger.info("Seeded course %s", course.code)
        return course
