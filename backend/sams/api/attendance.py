"""Attendance API endpoints."""
from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required, current_user
from sams import db
from sams.models.activity import Activity
from sams.models.attendance import Attendance
from sams.models.course import Course, ClassSession
from sams.models.user import User
from sams.schemas.academic import AttendanceCreate, AttendanceUpdate
from sams.services.eligibility_service import EligibilityService
from sams.utils.decorators import staff_required
from sams.utils.exceptions import NotFoundError
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

attendance_bp = Blueprint('attendance', __name__)


@attendance_bp.route('', methods=['GET'])
@jwt_required()
def list_attendance():
    """Attendance of a session or of a student."""
    session_id = query_int('sessionId', 'session_id')
    student_id = query_int('studentId', 'student_id')

    if session_id is not None:
        records = Attendance.query.filter_by(session_id=session_id).all()
    elif student_id is not None:
        records = Attendance.query.filter_by(student_id=student_id).all()
    else:
        return error_response("Either session ID or student ID is required", 400)

    return success_response(data=serialize(records))


@attendance_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def record_attendance():
    """Record a student's attendance at a session.

    The marking user is always the session user, whatever the body says.
    """
    payload = parse_body(AttendanceCreate)

    session = ClassSession.get_or_404(payload.session_id)
    if db.session.get(User, payload.student_id) is None:
        raise NotFoundError("Student not found")

    record = Attendance(
        session_id=session.id,
        student_id=payload.student_id,
        present=payload.present,
        marked_by_id=current_user.id
    )
    db.session.add(record)
    Activity.log(
        current_user.id,
        'Attendance Recorded',
        f'Recorded attendance for student {payload.student_id} in session {session.id}'
    )
    db.session.commit()

    current_app.logger.info(
        "Attendance for student %s in session %s marked by %s",
        payload.student_id, session.id, current_user.id
    )
    return success_response(data=record.to_dict(), message="Attendance recorded", status_code=201)


@attendance_bp.route('/<int:attendance_id>', methods=['PATCH'])
@jwt_required()
@staff_required
def update_attendance(attendance_id):
    record = Attendance.get_or_404(attendance_id)
    payload = parse_body(AttendanceUpdate)

    record.update(present=payload.present, marked_by_id=current_user.id)
    return success_response(data=record.to_dict(), message="Attendance updated")


@attendance_bp.route('/rate', methods=['GET'])
@jwt_required()
def attendance_rate():
    """Attendance percentage of a student in a course."""
    student_id = query_int('studentId', 'student_id')
    course_id = query_int('courseId', 'course_id')

    if student_id is None or course_id is None:
        return error_response("Student ID and course ID are required", 400)

    if db.session.get(User, student_id) is None:
        raise NotFoundError("Student not found")
    Course.get_or_404(course_id)

    rate = EligibilityService.attendance_rate(student_id, course_id)
    return success_response(data={
        'student_id': student_id,
        'course_id': course_id,
        'attendance_rate': round(rate, 2)
    })
