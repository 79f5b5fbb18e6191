"""Attendance rate and exam eligibility."""
import logging
from typing import Dict, Any

from sqlalchemy import func

from sams import db
from sams.models.attendance import Attendance
from sams.models.course import ClassSession
from sams.models.exam import Exam

logger = logging.getLogger(__name__)


class EligibilityService:
    """Computes attendance rates and compares them with exam requirements.

    Store errors are not caught here; they surface as 500s from the
    application error handler.
    """

    @staticmethod
    def attendance_rate(student_id: int, course_id: int) -> float:
        """Percentage of the course's sessions the student attended.

        Returns 0.0 for a course without sessions. Every present row is
        counted, so duplicate rows for one session inflate the rate.
        """
        total_sessions = db.session.query(func.count(ClassSession.id)).filter(
            ClassSession.course_id == course_id
        ).scalar() or 0

        if total_sessions == 0:
            return 0.0

        present = db.session.query(func.count(Attendance.id)).join(
            ClassSession, Attendance.session_id == ClassSession.id
        ).filter(
            ClassSession.course_id == course_id,
            Attendance.student_id == student_id,
            Attendance.present.is_(True)
        ).scalar() or 0

        return 100 * present / total_sessions

    @staticmethod
    def check_eligibility(student_id: int, exam_id: int) -> bool:
        """True iff the student's rate meets the exam's minimum attendance.

        An unknown exam, or one whose minimum is unset or 0, yields False.
        """
        exam = db.session.get(Exam, exam_id)
        if exam is None or not exam.minimum_attendance:
            return False

        rate = EligibilityService.attendance_rate(student_id, exam.course_id)
        return rate >= exam.minimum_attendance

    @staticmethod
    def eligibility_report(student_id: int, exam_id: int) -> Dict[str, Any]:
        """Rate, requirement and verdict for an existing exam."""
        exam = db.session.get(Exam, exam_id)
        if exam is None:
            return {
                'student_id': student_id,
                'exam_id': exam_id,
                'attendance_rate': None,
                'minimum_attendance': None,
                'eligible': False
            }

        rate = EligibilityService.attendance_rate(student_id, exam.course_id)
        eligible = bool(exam.minimum_attendance) and rate >= exam.minimum_attendance

        logger.debug(
            "Eligibility of student %s for exam %s: rate=%.2f minimum=%s eligible=%s",
            student_id, exam_id, rate, exam.minimum_attendance, eligible
        )

        return {
            'student_id': student_id,
            'exam_id': exam_id,
            'course_id': exam.course_id,
            'attendance_rate': round(rate, 2),
            'minimum_attendance': exam.minimum_attendance,
            'eligible': eligible
        }
