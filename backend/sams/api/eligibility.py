"""Exam eligibility API endpoints."""
from datetime import datetime
from flask import Blueprint
from flask_jwt_extended import jwt_required, current_user
from sams import db
from sams.models.activity import Activity
from sams.models.exam import Exam, ExamEligibility
from sams.models.user import User
from sams.schemas.exams import EligibilityCheck, EligibilityCreate
from sams.services.eligibility_service import EligibilityService
from sams.utils.decorators import staff_required
from sams.utils.exceptions import NotFoundError
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

eligibility_bp = Blueprint('eligibility', __name__)


@eligibility_bp.route('', methods=['GET'])
@jwt_required()
def list_eligibility():
    """Recorded eligibility of an exam or of a student."""
    exam_id = query_int('examId', 'exam_id')
    student_id = query_int('studentId', 'student_id')

    if exam_id is not None:
        records = ExamEligibility.query.filter_by(exam_id=exam_id).all()
    elif student_id is not None:
        records = ExamEligibility.query.filter_by(student_id=student_id).all()
    else:
        return error_response("Either exam ID or student ID is required", 400)

    return success_response(data=serialize(records))


@eligibility_bp.route('/check', methods=['POST'])
@jwt_required()
def check_eligibility():
    """Whether a student currently meets an exam's attendance requirement.

    Unknown exams and exams without a requirement answer ``false``.
    """
    payload = parse_body(EligibilityCheck)

    eligible = EligibilityService.check_eligibility(payload.student_id, payload.exam_id)
    return success_response(data={'eligible': eligible})


@eligibility_bp.route('/report', methods=['GET'])
@jwt_required()
def eligibility_report():
    student_id = query_int('studentId', 'student_id')
    exam_id = query_int('examId', 'exam_id')

    if student_id is None or exam_id is None:
        return error_response("Student ID and exam ID are required", 400)

    return success_response(data=EligibilityService.eligibility_report(student_id, exam_id))


@eligibility_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def record_eligibility():
    """Record a verified eligibility decision."""
    payload = parse_body(EligibilityCreate)

    Exam.get_or_404(payload.exam_id)
    if db.session.get(User, payload.student_id) is None:
        raise NotFoundError("Student not found")

    eligible = payload.eligible
    if eligible is None:
        eligible = EligibilityService.check_eligibility(payload.student_id, payload.exam_id)

    record = ExamEligibility(
        exam_id=payload.exam_id,
        student_id=payload.student_id,
        eligible=eligible,
        verified_by_id=current_user.id,
        verified_at=datetime.utcnow()
    )
    db.session.add(record)
    Activity.log(
        current_user.id,
        'Eligibility Verified',
        f'Verified eligibility for student {payload.student_id} for exam {payload.exam_id}'
    )
    db.session.commit()

    return success_response(data=record.to_dict(), message="Eligibility recorded", status_code=201)
