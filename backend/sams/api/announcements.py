"""Announcement API endpoints."""
from datetime import datetime
from flask import Blueprint
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy import or_, select
from sams import db
from sams.models.announcement import Announcement, AnnouncementRecipient
from sams.models.course import Course, Enrollment
from sams.models.user import User, UserRole
from sams.schemas.content import AnnouncementCreate
from sams.utils.decorators import staff_required
from sams.utils.exceptions import NotFoundError
from sams.utils.helpers import success_response, error_response, serialize, query_int
from sams.utils.validators import parse_body

announcements_bp = Blueprint('announcements', __name__)


def announcements_for_student(student_id: int):
    """Global announcements plus those addressed to the student."""
    addressed = select(AnnouncementRecipient.announcement_id).where(
        AnnouncementRecipient.student_id == student_id
    )
    return Announcement.query.filter(
        or_(Announcement.is_global.is_(True), Announcement.id.in_(addressed))
    )


@announcements_bp.route('', methods=['GET'])
@jwt_required()
def list_announcements():
    """Pinned first, then newest first."""
    if current_user.role == UserRole.STUDENT:
        query = announcements_for_student(current_user.id)
    else:
        query = Announcement.query

    course_id = query_int('courseId', 'course_id')
    if course_id is not None:
        query = query.filter(Announcement.course_id == course_id)

    announcements = query.order_by(
        Announcement.is_pinned.desc(),
        Announcement.created_at.desc(),
        Announcement.id.desc()
    ).all()
    return success_response(data=serialize(announcements))


@announcements_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def create_announcement():
    """Publish an announcement.

    Recipients are the listed students, or every student enrolled in the
    course when no list is given. Global announcements need no recipients.
    """
    payload = parse_body(AnnouncementCreate)

    if payload.course_id is not None:
        Course.get_or_404(payload.course_id)

    announcement = Announcement(
        title=payload.title,
        content=payload.content,
        course_id=payload.course_id,
        created_by_id=current_user.id,
        is_global=payload.is_global,
        is_pinned=payload.is_pinned,
        expires_at=payload.expires_at
    )
    db.session.add(announcement)
    db.session.flush()

    recipient_ids = payload.recipient_ids
    if recipient_ids is None and payload.course_id is not None and not payload.is_global:
        recipient_ids = [
            enrollment.student_id
            for enrollment in Enrollment.query.filter_by(course_id=payload.course_id)
        ]

    for student_id in sorted(set(recipient_ids or [])):
        if db.session.get(User, student_id) is None:
            db.session.rollback()
            raise NotFoundError(f"Recipient {student_id} not found")
        db.session.add(AnnouncementRecipient(announcement_id=announcement.id, student_id=student_id))

    db.session.commit()

    data = announcement.to_dict()
    data['recipient_count'] = announcement.recipients.count()
    return success_response(data=data, message="Announcement published", status_code=201)


@announcements_bp.route('/recipients', methods=['GET'])
@jwt_required()
def my_deliveries():
    """Deliveries addressed to the current user, with read state."""
    recipients = AnnouncementRecipient.query.filter_by(student_id=current_user.id).all()
    return success_response(data=serialize(recipients))


@announcements_bp.route('/recipients/<int:recipient_id>/read', methods=['POST'])
@jwt_required()
def mark_read(recipient_id):
    recipient = AnnouncementRecipient.get_or_404(recipient_id)

    if recipient.student_id != current_user.id and current_user.role != UserRole.ADMIN:
        return error_response("Forbidden", 403)

    if not recipient.is_read:
        recipient.update(is_read=True, read_at=datetime.utcnow())

    return success_response(data=recipient.to_dict(), message="Marked as read")
