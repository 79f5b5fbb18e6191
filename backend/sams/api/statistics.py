"""Dashboard statistics API."""
from datetime import datetime
from flask import Blueprint
from flask_jwt_extended import jwt_required
from sqlalchemy import func, case
from sams import db
from sams.models.attendance import Attendance
from sams.models.course import Course, ClassSession
from sams.models.exam import Exam
from sams.models.user import User, UserRole
from sams.utils.helpers import success_response

stats_bp = Blueprint('statistics', __name__)


@stats_bp.route('', methods=['GET'])
@jwt_required()
def dashboard_stats():
    """Headline numbers for the dashboard."""
    now = datetime.utcnow()

    total_students = User.query.filter_by(role=UserRole.STUDENT, is_active=True).count()

    # Courses with at least one session
    active_courses = db.session.query(func.count(func.distinct(ClassSession.course_id))).scalar() or 0
    total_courses = Course.query.count()

    total_records, present_records = db.session.query(
        func.count(Attendance.id),
        func.sum(case((Attendance.present.is_(True), 1), else_=0))
    ).one()
    average_attendance = (
        round((present_records or 0) / total_records * 100, 1) if total_records else 0.0
    )

    upcoming_exams = Exam.query.filter(Exam.date >= now).count()

    return success_response(data={
        'total_students': total_students,
        'total_courses': total_courses,
        'active_courses': active_courses,
        'average_attendance': average_attendance,
        'upcoming_exams': upcoming_exams
    })
