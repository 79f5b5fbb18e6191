"""Attendance rate and exam eligibility."""
import json
from datetime import datetime, timedelta

import pytest

from sams import db
from sams.models.attendance import Attendance
from sams.models.course import Course, ClassSession
from sams.models.exam import Exam, ExamEligibility
from sams.services.eligibility_service import EligibilityService

from conftest import make_user


def make_course(code='C1', lecturer=None):
    return Course(code=code, name=f'Course {code}', lecturer_id=lecturer.id if lecturer else None).save()


def make_sessions(course, count):
    start = datetime(2024, 9, 2, 9, 0)
    sessions = [
        ClassSession(course_id=course.id, title=f'Week {i + 1}', date=start + timedelta(weeks=i), duration=90)
        for i in range(count)
    ]
    db.session.add_all(sessions)
    db.session.commit()
    return sessions


def mark(session, student, present=True):
    return Attendance(session_id=session.id, student_id=student.id, present=present).save()


def make_exam(course, minimum_attendance):
    return Exam(
        course_id=course.id,
        title='Final',
        date=datetime(2024, 12, 15, 9, 0),
        duration=120,
        minimum_attendance=minimum_attendance
    ).save()


@pytest.fixture
def course_with_attendance(student):
    """Student S1 attended 3 of the 4 sessions of course C1."""
    course = make_course('C1')
    sessions = make_sessions(course, 4)
    for index, session in enumerate(sessions):
        mark(session, student, present=index != 2)
    return course


# =================== ATTENDANCE RATE ===================

def test_rate_is_zero_without_sessions(student):
    course = make_course('EMPTY')
    assert EligibilityService.attendance_rate(student.id, course.id) == 0


def test_rate_counts_present_sessions(student, course_with_attendance):
    assert EligibilityService.attendance_rate(student.id, course_with_attendance.id) == 75


def test_rate_for_student_without_records(app, course_with_attendance):
    other = make_user('other')
    assert EligibilityService.attendance_rate(other.id, course_with_attendance.id) == 0


def test_rate_ignores_other_courses(student, course_with_attendance):
    other_course = make_course('C2')
    for session in make_sessions(other_course, 2):
        mark(session, student)

    assert EligibilityService.attendance_rate(student.id, course_with_attendance.id) == 75
    assert EligibilityService.attendance_rate(student.id, other_course.id) == 100


def test_rate_counts_duplicate_rows(student):
    course = make_course('DUP')
    first, second = make_sessions(course, 2)
    mark(first, student)
    mark(first, student)

    assert EligibilityService.attendance_rate(student.id, course.id) == 100


# =================== ELIGIBILITY ===================

def test_eligible_when_rate_meets_minimum(student, course_with_attendance):
    exam = make_exam(course_with_attendance, 70)
    assert EligibilityService.check_eligibility(student.id, exam.id) is True


def test_not_eligible_when_rate_below_minimum(student, course_with_attendance):
    exam = make_exam(course_with_attendance, 80)
    assert EligibilityService.check_eligibility(student.id, exam.id) is False


def test_eligible_at_exact_minimum(student, course_with_attendance):
    exam = make_exam(course_with_attendance, 75)
    assert EligibilityService.check_eligibility(student.id, exam.id) is True


def test_not_eligible_one_point_below(student, course_with_attendance):
    exam = make_exam(course_with_attendance, 76)
    assert EligibilityService.check_eligibility(student.id, exam.id) is False


def test_not_eligible_without_minimum(student, course_with_attendance):
    exam = make_exam(course_with_attendance, None)
    assert EligibilityService.check_eligibility(student.id, exam.id) is False


def test_zero_minimum_counts_as_unset(student, course_with_attendance):
    exam = make_exam(course_with_attendance, 0)

    assert EligibilityService.check_eligibility(student.id, exam.id) is False
    assert EligibilityService.eligibility_report(student.id, exam.id)['eligible'] is False


def test_exact_minimum_with_uneven_session_count(student):
    course = make_course('FIFTY')
    for index, session in enumerate(make_sessions(course, 50)):
        mark(session, student, present=index < 29)
    exam = make_exam(course, 58)

    assert EligibilityService.attendance_rate(student.id, course.id) == 58
    assert EligibilityService.check_eligibility(student.id, exam.id) is True


def test_not_eligible_for_unknown_exam(student):
    assert EligibilityService.check_eligibility(student.id, 999) is False


def test_report(student, course_with_attendance):
    exam = make_exam(course_with_attendance, 70)
    report = EligibilityService.eligibility_report(student.id, exam.id)

    assert report['attendance_rate'] == 75
    assert report['minimum_attendance'] == 70
    assert report['eligible'] is True


# =================== API ===================

def test_check_endpoint(student_client, student, course_with_attendance):
    exam = make_exam(course_with_attendance, 70)

    response = student_client.post('/api/eligibility/check', json={
        'studentId': student.id,
        'examId': exam.id
    })

    assert response.status_code == 200
    assert json.loads(response.data)['data'] == {'eligible': True}


def test_check_endpoint_accepts_snake_case(student_client, student, course_with_attendance):
    exam = make_exam(course_with_attendance, 80)

    response = student_client.post('/api/eligibility/check', json={
        'student_id': student.id,
        'exam_id': exam.id
    })
    assert json.loads(response.data)['data']['eligible'] is False


def test_check_endpoint_unknown_exam_is_false(student_client, student):
    response = student_client.post('/api/eligibility/check', json={'studentId': student.id, 'examId': 42})
    assert response.status_code == 200
    assert json.loads(response.data)['data']['eligible'] is False


def test_check_endpoint_validation(student_client):
    response = student_client.post('/api/eligibility/check', json={'studentId': 'abc'})
    assert response.status_code == 400

    fields = {d['field'] for d in json.loads(response.data)['details']}
    assert fields == {'studentId', 'examId'}


def test_check_endpoint_requires_session(client):
    response = client.post('/api/eligibility/check', json={'studentId': 1, 'examId': 1})
    assert response.status_code == 401


def test_record_eligibility_computes_verdict(lecturer_client, lecturer, student, course_with_attendance):
    exam = make_exam(course_with_attendance, 70)

    response = lecturer_client.post('/api/eligibility', json={'examId': exam.id, 'studentId': student.id})
    assert response.status_code == 201

    record = ExamEligibility.query.one()
    assert record.eligible is True
    assert record.verified_by_id == lecturer.id
    assert record.verified_at is not None

    listed = json.loads(lecturer_client.get(f'/api/eligibility?examId={exam.id}').data)['data']
    assert len(listed) == 1


def test_record_eligibility_staff_only(student_client, student, course_with_attendance):
    exam = make_exam(course_with_attendance, 70)
    response = student_client.post('/api/eligibility', json={'examId': exam.id, 'studentId': student.id})
    assert response.status_code == 403


def test_list_eligibility_requires_filter(student_client):
    assert student_client.get('/api/eligibility').status_code == 400


def test_report_endpoint(student_client, student, course_with_attendance):
    exam = make_exam(course_with_attendance, 80)

    response = student_client.get(f'/api/eligibility/report?studentId={student.id}&examId={exam.id}')
    data = json.loads(response.data)['data']
    assert data['attendance_rate'] == 75
    assert data['eligible'] is False
