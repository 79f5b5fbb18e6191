"""Course API endpoints."""
from flask import Blueprint
from flask_jwt_extended import jwt_required
from sqlalchemy.exc import IntegrityError
from sams import db
from sams.models.course import Course
from sams.models.user import User, UserRole
from sams.schemas.academic import CourseCreate, CourseUpdate
from sams.utils.decorators import staff_required, can_manage_course
from sams.utils.exceptions import ConflictError, NotFoundError
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

courses_bp = Blueprint('courses', __name__)


def ensure_lecturer(lecturer_id):
    if lecturer_id is None:
        return
    lecturer = db.session.get(User, lecturer_id)
    if lecturer is None or lecturer.role != UserRole.LECTURER:
        raise NotFoundError("Lecturer not found")


@courses_bp.route('', methods=['GET'])
@jwt_required()
def list_courses():
    """List courses, optionally only those of one lecturer."""
    query = Course.query

    lecturer_id = query_int('lecturerId', 'lecturer_id')
    if lecturer_id is not None:
        query = query.filter_by(lecturer_id=lecturer_id)

    return success_response(data=serialize(query.order_by(Course.code).all()))


@courses_bp.route('/<int:course_id>', methods=['GET'])
@jwt_required()
def get_course(course_id):
    return success_response(data=Course.get_or_404(course_id).to_dict())


@courses_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def create_course():
    payload = parse_body(CourseCreate)
    ensure_lecturer(payload.lecturer_id)

    course = Course(**payload.model_dump())
    db.session.add(course)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(f"Course code {payload.code} already exists")

    return success_response(data=course.to_dict(), message="Course created", status_code=201)


@courses_bp.route('/<int:course_id>', methods=['PATCH'])
@jwt_required()
@staff_required
def update_course(course_id):
    course = Course.get_or_404(course_id)

    if not can_manage_course(course):
        return error_response("You can only edit your own courses", 403)

    payload = parse_body(CourseUpdate)
    changes = payload.changes()
    if 'lecturer_id' in changes:
        ensure_lecturer(changes['lecturer_id'])

    course.update(**changes)
    return success_response(data=course.to_dict(), message="Course updated")
