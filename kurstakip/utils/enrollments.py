from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from kurstakip.schemas.course import CourseOut
from kurstakip.schemas.enrollment import EnrollmentDetails, EnrollmentOut
from kurstakip.schemas.student import StudentOut

EXPIRING_SOON_DAYS = 7


def end_date_for(start_date: datetime, duration_days: int) -> datetime:
    return start_date + timedelta(days=duration_days)


def days_between(end_date: datetime, today: datetime) -> int:
    """Calendar-day difference; the clock time of either value is ignored."""
    return (end_date.date() - today.date()).days


def effective_status(enrollment: EnrollmentOut, today: datetime) -> str:
    """
    Stored status, except that an active enrollment past its end date reads as expired.
    Nothing here is written back: completed and cancelled always win.
    """
    if enrollment.status == "active" and today > enrollment.end_date:
        return "expired"
    return enrollment.status


def is_expiring_soon(status: str, days_remaining: int, threshold: int = EXPIRING_SOON_DAYS) -> bool:
    # due today (0 days) does not count
    return status == "active" and 0 < days_remaining <= threshold


def with_details(
    enrollments: Iterable[EnrollmentOut],
    students: Iterable[StudentOut],
    courses: Iterable[CourseOut],
    today: Optional[datetime] = None,
) -> List[EnrollmentDetails]:
    """
    Joins enrollments with their student and course.
    Rows whose student or course cannot be resolved are left out instead of raising.
    """
    today = today or datetime.now()
    students_by_id = {s.id: s for s in students}
    courses_by_id = {c.id: c for c in courses}

    result: List[EnrollmentDetails] = []
    for enrollment in enrollments:
        student = students_by_id.get(enrollment.student_id)
        course = courses_by_id.get(enrollment.course_id)
        if student is None or course is None:
            continue

        days_remaining = days_between(enrollment.end_date, today)
        status = effective_status(enrollment, today)
        result.append(
            EnrollmentDetails(
                **enrollment.model_dump(exclude={"status"}),
                status=status,
                student=student,
                course=course,
                days_remaining=days_remaining,
                is_expiring_soon=is_expiring_soon(status, days_remaining),
            )
        )
    return result


def expiring(
    details: Iterable[EnrollmentDetails],
    threshold: int = EXPIRING_SOON_DAYS,
) -> List[EnrollmentDetails]:
    """Active enrollments ending within `threshold` days, soonest first."""
    selected = [
        e for e in details
        if e.status == "active" and 0 < e.days_remaining <= threshold
    ]
    return sorted(selected, key=lambda e: e.days_remaining)
