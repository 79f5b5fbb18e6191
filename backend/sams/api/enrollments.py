"""Enrollment API endpoints."""
from flask import Blueprint
from flask_jwt_extended import jwt_required
from sams import db
from sams.models.course import Course, Enrollment
from sams.models.user import User, UserRole
from sams.schemas.academic import EnrollmentCreate
from sams.utils.decorators import admin_required
from sams.utils.exceptions import ConflictError, NotFoundError
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

enrollments_bp = Blueprint('enrollments', __name__)


@enrollments_bp.route('', methods=['GET'])
@jwt_required()
def list_enrollments():
    """Enrollments of a course or of a student."""
    course_id = query_int('courseId', 'course_id')
    student_id = query_int('studentId', 'student_id')

    if course_id is not None:
        enrollments = Enrollment.query.filter_by(course_id=course_id).all()
    elif student_id is not None:
        enrollments = Enrollment.query.filter_by(student_id=student_id).all()
    else:
        return error_response("Either course ID or student ID is required", 400)

    return success_response(data=serialize(enrollments))


@enrollments_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_enrollment():
    payload = parse_body(EnrollmentCreate)

    student = db.session.get(User, payload.student_id)
    if student is None or student.role != UserRole.STUDENT:
        raise NotFoundError("Student not found")

    Course.get_or_404(payload.course_id)

    if Enrollment.query.filter_by(student_id=payload.student_id, course_id=payload.course_id).first():
        raise ConflictError("Student is already enrolled in this course")

    enrollment = Enrollment(student_id=payload.student_id, course_id=payload.course_id).save()
    return success_response(data=enrollment.to_dict(), message="Student enrolled", status_code=201)


@enrollments_bp.route('/<int:enrollment_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_enrollment(enrollment_id):
    Enrollment.get_or_404(enrollment_id).delete()
    return success_response(message="Enrollment deleted")
