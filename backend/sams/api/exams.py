"""Exam API endpoints."""
from datetime import datetime, timedelta
from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy import select
from sams import db
from sams.models.course import Course, Enrollment
from sams.models.exam import Exam, ExamAttendance
from sams.models.user import User
from sams.schemas.exams import ExamCreate, ExamUpdate, ExamAttendanceCreate
from sams.utils.decorators import staff_required
from sams.utils.exceptions import NotFoundError, ValidationError
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

exams_bp = Blueprint('exams', __name__)


@exams_bp.route('', methods=['GET'])
@jwt_required()
def list_exams():
    """Exams of a course."""
    course_id = query_int('courseId', 'course_id')
    if course_id is None:
        return error_response("Course ID is required", 400)

    exams = Exam.query.filter_by(course_id=course_id).order_by(Exam.date).all()
    return success_response(data=serialize(exams))


@exams_bp.route('/today', methods=['GET'])
@jwt_required()
def todays_exams():
    start = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    exams = Exam.query.filter(
        Exam.date >= start,
        Exam.date < start + timedelta(days=1)
    ).order_by(Exam.date).all()
    return success_response(data=serialize(exams))


@exams_bp.route('/upcoming', methods=['GET'])
@jwt_required()
def upcoming_exams():
    """Exams in the next ``days`` days (default 30)."""
    try:
        days = int(request.args.get('days', 30))
    except ValueError:
        raise ValidationError("Query parameter 'days' must be an integer")

    now = datetime.utcnow()
    exams = Exam.query.filter(
        Exam.date >= now,
        Exam.date <= now + timedelta(days=days)
    ).order_by(Exam.date).all()
    return success_response(data=serialize(exams))


@exams_bp.route('/student/<int:student_id>', methods=['GET'])
@jwt_required()
def student_exams(student_id):
    """Exams of every course the student is enrolled in."""
    if current_user.is_student() and current_user.id != student_id:
        return error_response("Students can only view their own exams", 403)

    course_ids = select(Enrollment.course_id).where(Enrollment.student_id == student_id)
    exams = Exam.query.filter(Exam.course_id.in_(course_ids)).order_by(Exam.date).all()
    return success_response(data=serialize(exams))


@exams_bp.route('/<int:exam_id>', methods=['GET'])
@jwt_required()
def get_exam(exam_id):
    return success_response(data=Exam.get_or_404(exam_id).to_dict())


@exams_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def create_exam():
    payload = parse_body(ExamCreate)
    Course.get_or_404(payload.course_id)

    exam = Exam(**payload.model_dump()).save()
    return success_response(data=exam.to_dict(), message="Exam created", status_code=201)


@exams_bp.route('/<int:exam_id>', methods=['PATCH'])
@jwt_required()
@staff_required
def update_exam(exam_id):
    exam = Exam.get_or_404(exam_id)
    payload = parse_body(ExamUpdate)

    exam.update(**payload.changes())
    return success_response(data=exam.to_dict(), message="Exam updated")


@exams_bp.route('/attendance', methods=['POST'])
@jwt_required()
@staff_required
def record_exam_attendance():
    """Mark a student present (or absent) at an exam sitting."""
    payload = parse_body(ExamAttendanceCreate)

    Exam.get_or_404(payload.exam_id)
    if db.session.get(User, payload.student_id) is None:
        raise NotFoundError("Student not found")

    record = ExamAttendance(
        exam_id=payload.exam_id,
        student_id=payload.student_id,
        present=payload.present,
        marked_by_id=current_user.id
    ).save()
    return success_response(data=record.to_dict(), message="Exam attendance recorded", status_code=201)
