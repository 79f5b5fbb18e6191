"""Courses, sessions, enrollments, attendance and exams."""
import json
from datetime import datetime

import pytest

from sams.models.activity import Activity
from sams.models.attendance import Attendance
from sams.models.course import Course, ClassSession, Enrollment
from sams.models.exam import Exam
from sams.models.user import UserRole

from conftest import make_user, login


def data_of(response):
    return json.loads(response.data)['data']


@pytest.fixture
def course(lecturer):
    return Course(code='CS101', name='Introduction to Computer Science', lecturer_id=lecturer.id).save()


@pytest.fixture
def session(course):
    return ClassSession(
        course_id=course.id,
        title='Week 1',
        date=datetime(2024, 9, 2, 9, 0),
        duration=90
    ).save()


# =================== COURSES ===================

def test_create_course(lecturer_client, lecturer):
    response = lecturer_client.post('/api/courses', json={
        'code': 'CS201',
        'name': 'Data Structures',
        'lecturerId': lecturer.id,
        'academicYear': '2024-2025'
    })

    assert response.status_code == 201
    data = data_of(response)
    assert data['code'] == 'CS201'
    assert data['lecturer_id'] == lecturer.id
    assert data['academic_year'] == '2024-2025'


def test_create_course_duplicate_code(lecturer_client, course):
    response = lecturer_client.post('/api/courses', json={'code': 'CS101', 'name': 'Again'})
    assert response.status_code == 409


def test_create_course_unknown_lecturer(admin_client, student):
    response = admin_client.post('/api/courses', json={'code': 'X1', 'name': 'X', 'lecturerId': student.id})
    assert response.status_code == 404


def test_student_cannot_create_course(student_client):
    response = student_client.post('/api/courses', json={'code': 'X1', 'name': 'X'})
    assert response.status_code == 403


def test_list_and_get_courses(student_client, course, lecturer):
    courses = data_of(student_client.get(f'/api/courses?lecturerId={lecturer.id}'))
    assert [c['code'] for c in courses] == ['CS101']

    assert data_of(student_client.get(f'/api/courses/{course.id}'))['name'] == course.name
    assert student_client.get('/api/courses/999').status_code == 404


def test_lecturer_edits_only_own_course(app, course):
    make_user('other', UserRole.LECTURER)
    client = app.test_client()
    login(client, 'other')

    response = client.patch(f'/api/courses/{course.id}', json={'name': 'Renamed'})
    assert response.status_code == 403


def test_update_course(lecturer_client, course):
    response = lecturer_client.patch(f'/api/courses/{course.id}', json={'semester': 'Fall'})

    assert response.status_code == 200
    assert data_of(response)['semester'] == 'Fall'
    assert data_of(response)['name'] == 'Introduction to Computer Science'


# =================== SESSIONS ===================

def test_create_and_list_sessions(lecturer_client, course):
    response = lecturer_client.post('/api/sessions', json={
        'courseId': course.id,
        'title': 'Lecture 1',
        'date': '2024-09-02T09:00:00',
        'duration': 90,
        'location': 'Room 101'
    })
    assert response.status_code == 201
    assert data_of(response)['date'] == '2024-09-02T09:00:00'

    sessions = data_of(lecturer_client.get(f'/api/sessions?courseId={course.id}'))
    assert len(sessions) == 1


def test_create_session_unknown_course(lecturer_client):
    response = lecturer_client.post('/api/sessions', json={
        'courseId': 42, 'title': 'Lecture', 'date': '2024-09-02T09:00:00', 'duration': 90
    })
    assert response.status_code == 404


def test_list_sessions_requires_course(lecturer_client):
    assert lecturer_client.get('/api/sessions').status_code == 400


# =================== ENROLLMENTS ===================

def test_enroll_student(admin_client, course, student):
    response = admin_client.post('/api/enrollments', json={'studentId': student.id, 'courseId': course.id})
    assert response.status_code == 201

    again = admin_client.post('/api/enrollments', json={'studentId': student.id, 'courseId': course.id})
    assert again.status_code == 409

    listed = data_of(admin_client.get(f'/api/enrollments?courseId={course.id}'))
    assert [e['student_id'] for e in listed] == [student.id]


def test_enroll_requires_student_role(admin_client, course, lecturer):
    response = admin_client.post('/api/enrollments', json={'studentId': lecturer.id, 'courseId': course.id})
    assert response.status_code == 404


def test_delete_enrollment(admin_client, course, student):
    enrollment = Enrollment(student_id=student.id, course_id=course.id).save()

    assert admin_client.delete(f'/api/enrollments/{enrollment.id}').status_code == 200
    assert Enrollment.query.count() == 0


# =================== ATTENDANCE ===================

def test_record_attendance(lecturer_client, lecturer, student, session, admin):
    response = lecturer_client.post('/api/attendance', json={
        'sessionId': session.id,
        'studentId': student.id,
        'present': True,
        'markedById': admin.id
    })

    assert response.status_code == 201
    data = data_of(response)
    assert data['present'] is True
    assert data['marked_by_id'] == lecturer.id

    activity = Activity.query.filter_by(action='Attendance Recorded').one()
    assert activity.user_id == lecturer.id


def test_record_attendance_unknown_session(lecturer_client, student):
    response = lecturer_client.post('/api/attendance', json={'sessionId': 7, 'studentId': student.id})
    assert response.status_code == 404
    assert Attendance.query.count() == 0


def test_student_cannot_record_attendance(student_client, student, session):
    response = student_client.post('/api/attendance', json={'sessionId': session.id, 'studentId': student.id})
    assert response.status_code == 403


def test_update_attendance(lecturer_client, student, session):
    record = Attendance(session_id=session.id, student_id=student.id, present=False).save()

    response = lecturer_client.patch(f'/api/attendance/{record.id}', json={'present': True})
    assert response.status_code == 200
    assert data_of(response)['present'] is True


def test_list_attendance(lecturer_client, student, session):
    Attendance(session_id=session.id, student_id=student.id, present=True).save()

    assert len(data_of(lecturer_client.get(f'/api/attendance?sessionId={session.id}'))) == 1
    assert len(data_of(lecturer_client.get(f'/api/attendance?studentId={student.id}'))) == 1
    assert lecturer_client.get('/api/attendance').status_code == 400
    assert lecturer_client.get('/api/attendance?sessionId=abc').status_code == 400


def test_attendance_rate_endpoint(student_client, student, course, session):
    ClassSession(course_id=course.id, title='Week 2', date=session.date, duration=90).save()
    Attendance(session_id=session.id, student_id=student.id, present=True).save()

    response = student_client.get(f'/api/attendance/rate?studentId={student.id}&courseId={course.id}')
    assert data_of(response)['attendance_rate'] == 50


# =================== EXAMS ===================

def test_create_and_update_exam(lecturer_client, course):
    response = lecturer_client.post('/api/exams', json={
        'courseId': course.id,
        'title': 'Midterm',
        'date': '2024-11-01T10:00:00',
        'duration': 60,
        'minimumAttendance': 70
    })
    assert response.status_code == 201
    exam_id = data_of(response)['id']

    response = lecturer_client.patch(f'/api/exams/{exam_id}', json={'minimumAttendance': 80})
    assert data_of(response)['minimum_attendance'] == 80


def test_exam_minimum_attendance_bounds(lecturer_client, course):
    response = lecturer_client.post('/api/exams', json={
        'courseId': course.id,
        'title': 'Midterm',
        'date': '2024-11-01T10:00:00',
        'duration': 60,
        'minimumAttendance': 120
    })
    assert response.status_code == 400


def test_student_exams(student_client, student, course):
    Enrollment(student_id=student.id, course_id=course.id).save()
    other = Course(code='OTHER', name='Other').save()
    Exam(course_id=course.id, title='Final', date=datetime(2024, 12, 1), duration=120).save()
    Exam(course_id=other.id, title='Unrelated', date=datetime(2024, 12, 2), duration=120).save()

    exams = data_of(student_client.get(f'/api/exams/student/{student.id}'))
    assert [e['title'] for e in exams] == ['Final']


def test_student_cannot_view_other_students_exams(student_client, lecturer):
    assert student_client.get(f'/api/exams/student/{lecturer.id}').status_code == 403


def test_record_exam_attendance(lecturer_client, lecturer, student, course):
    exam = Exam(course_id=course.id, title='Final', date=datetime(2024, 12, 1), duration=120).save()

    response = lecturer_client.post('/api/exams/attendance', json={'examId': exam.id, 'studentId': student.id})
    assert response.status_code == 201
    assert data_of(response)['marked_by_id'] == lecturer.id


# =================== PARTIAL UPDATES ===================

def test_update_course_rejects_null_name(lecturer_client, course):
    response = lecturer_client.patch(f'/api/courses/{course.id}', json={'name': None})

    assert response.status_code == 400
    assert [d['field'] for d in json.loads(response.data)['details']] == ['name']
    assert course.name == 'Introduction to Computer Science'


def test_update_course_clears_optional_field(lecturer_client, course):
    course.update(semester='Fall')

    response = lecturer_client.patch(f'/api/courses/{course.id}', json={'semester': None})
    assert response.status_code == 200
    assert data_of(response)['semester'] is None


def test_update_session_rejects_null_fields(lecturer_client, session):
    response = lecturer_client.patch(f'/api/sessions/{session.id}', json={'title': None, 'duration': None})

    assert response.status_code == 400
    fields = {d['field'] for d in json.loads(response.data)['details']}
    assert fields == {'title', 'duration'}


def test_update_exam_rejects_null_date(lecturer_client, course):
    exam = Exam(course_id=course.id, title='Final', date=datetime(2024, 12, 1), duration=120).save()

    response = lecturer_client.patch(f'/api/exams/{exam.id}', json={'date': None})
    assert response.status_code == 400


# =================== SESSION OWNERSHIP ===================

def test_lecturer_edits_only_own_sessions(app, session):
    make_user('other', UserRole.LECTURER)
    client = app.test_client()
    login(client, 'other')

    response = client.patch(f'/api/sessions/{session.id}', json={'title': 'Hijacked'})
    assert response.status_code == 403
    assert session.title == 'Week 1'


def test_lecturer_schedules_only_own_courses(app, course):
    make_user('other', UserRole.LECTURER)
    client = app.test_client()
    login(client, 'other')

    response = client.post('/api/sessions', json={
        'courseId': course.id, 'title': 'Extra', 'date': '2024-09-03T09:00:00', 'duration': 60
    })
    assert response.status_code == 403


def test_admin_edits_any_session(admin_client, session):
    response = admin_client.patch(f'/api/sessions/{session.id}', json={'location': 'Hall B'})
    assert response.status_code == 200
    assert data_of(response)['location'] == 'Hall B'
