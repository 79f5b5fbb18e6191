"""Class session API endpoints."""
from flask import Blueprint
from flask_jwt_extended import jwt_required
from sams.models.course import Course, ClassSession
from sams.schemas.academic import SessionCreate, SessionUpdate
from sams.utils.decorators import staff_required, can_manage_course
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

sessions_bp = Blueprint('sessions', __name__)


@sessions_bp.route('', methods=['GET'])
@jwt_required()
def list_sessions():
    """Sessions of a course, in date order."""
    course_id = query_int('courseId', 'course_id')
    if course_id is None:
        return error_response("Course ID is required", 400)

    sessions = ClassSession.query.filter_by(course_id=course_id).order_by(ClassSession.date).all()
    return success_response(data=serialize(sessions))


@sessions_bp.route('/<int:session_id>', methods=['GET'])
@jwt_required()
def get_session(session_id):
    return success_response(data=ClassSession.get_or_404(session_id).to_dict())


@sessions_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def create_session():
    payload = parse_body(SessionCreate)
    course = Course.get_or_404(payload.course_id)

    if not can_manage_course(course):
        return error_response("You can only schedule sessions of your own courses", 403)

    session = ClassSession(**payload.model_dump()).save()
    return success_response(data=session.to_dict(), message="Session created", status_code=201)


@sessions_bp.route('/<int:session_id>', methods=['PATCH'])
@jwt_required()
@staff_required
def update_session(session_id):
    session = ClassSession.get_or_404(session_id)

    if not can_manage_course(session.course):
        return error_response("You can only edit sessions of your own courses", 403)

    payload = parse_body(SessionUpdate)
    session.update(**payload.changes())
    return success_response(data=session.to_dict(), message="Session updated")
