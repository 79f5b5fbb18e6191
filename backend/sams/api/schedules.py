"""Calendar events and weekly timetable API endpoints."""
from datetime import timedelta
from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy import select
from sams.models.course import Course, Enrollment
from sams.models.schedule import Event, TimetableEntry
from sams.models.user import UserRole
from sams.schemas.content import EventCreate, TimetableEntryCreate
from sams.utils.decorators import staff_required
from sams.utils.helpers import success_response, serialize, query_int, query_datetime
from sams.utils.validators import parse_body

events_bp = Blueprint('events', __name__)
timetable_bp = Blueprint('timetable', __name__)


# =================== EVENTS ===================

@events_bp.route('', methods=['GET'])
@jwt_required()
def list_events():
    """Events by start date; filter by ``category`` or a ``start``/``end`` window.

    A windowed event must both start and finish inside the window.
    """
    query = Event.query

    category = request.args.get('category')
    if category:
        query = query.filter_by(category=category)

    events = query.order_by(Event.start_date).all()

    start = query_datetime('start')
    end = query_datetime('end')
    if start is not None:
        events = [event for event in events if event.start_date >= start]
    if end is not None:
        events = [
            event for event in events
            if event.start_date + timedelta(minutes=event.duration) <= end
        ]

    return success_response(data=serialize(events))


@events_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def create_event():
    payload = parse_body(EventCreate)
    event = Event(**payload.model_dump()).save()
    return success_response(data=event.to_dict(), message="Event created", status_code=201)


# =================== TIMETABLE ===================

def courses_of_lecturer(lecturer_id: int):
    return select(Course.id).where(Course.lecturer_id == lecturer_id)


def courses_of_student(student_id: int):
    return select(Enrollment.course_id).where(Enrollment.student_id == student_id)


@timetable_bp.route('', methods=['GET'])
@jwt_required()
def list_timetable():
    """Weekly slots ordered by day and start time.

    Without filters students see their enrolled courses, lecturers their
    own courses and admins everything.
    """
    query = TimetableEntry.query

    course_id = query_int('courseId', 'course_id')
    lecturer_id = query_int('lecturerId', 'lecturer_id')
    student_id = query_int('studentId', 'student_id')

    if course_id is not None:
        query = query.filter(TimetableEntry.course_id == course_id)
    elif lecturer_id is not None:
        query = query.filter(TimetableEntry.course_id.in_(courses_of_lecturer(lecturer_id)))
    elif student_id is not None:
        query = query.filter(TimetableEntry.course_id.in_(courses_of_student(student_id)))
    elif current_user.role == UserRole.STUDENT:
        query = query.filter(TimetableEntry.course_id.in_(courses_of_student(current_user.id)))
    elif current_user.role == UserRole.LECTURER:
        query = query.filter(TimetableEntry.course_id.in_(courses_of_lecturer(current_user.id)))

    entries = query.order_by(TimetableEntry.day_of_week, TimetableEntry.start_time).all()
    return success_response(data=serialize(entries))


@timetable_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def create_timetable_entry():
    payload = parse_body(TimetableEntryCreate)
    Course.get_or_404(payload.course_id)

    entry = TimetableEntry(**payload.model_dump()).save()
    return success_response(data=entry.to_dict(), message="Timetable entry created", status_code=201)
