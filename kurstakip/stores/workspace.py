from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from kurstakip.errors import NotFoundError
from kurstakip.schemas.enrollment import EnrollmentDetails
from kurstakip.stores.attendance import AttendanceStore
from kurstakip.stores.courses import CourseStore
from kurstakip.stores.enrollments import EnrollmentStore
from kurstakip.stores.gateway import DocumentGateway
from kurstakip.stores.notifications import NotificationStore, create_expiry_notification
from kurstakip.stores.payments import PaymentStore
from kurstakip.stores.students import StudentStore
from kurstakip.stores.teachers import TeacherStore
from kurstakip.utils.enrollments import EXPIRING_SOON_DAYS

logger = logging.getLogger(__name__)


class Workspace:
    """
    The stores of one institution plus the rules that span more than one of them.
    Stores are opened on first use and all closed together.
    """

    def __init__(self, gateway: DocumentGateway, institution_id: str, user_id: Optional[str] = None):
        self.gateway = gateway
        self.institution_id = institution_id
        self.user_id = user_id
        self._stores = {}

    def _open(self, key, factory):
        store = self._stores.get(key)
        if store is None:
            store = factory(self.gateway)
            if key == "notifications":
                store.initialize(self.institution_id, self.user_id)
            else:
                store.initialize(self.institution_id)
            self._stores[key] = store
        return store

    @property
    def students(self) -> StudentStore:
        return self._open("students", StudentStore)

    @property
    def courses(self) -> CourseStore:
        return self._open("courses", CourseStore)

    @property
    def enrollments(self) -> EnrollmentStore:
        return self._open("enrollments", EnrollmentStore)

    @property
    def attendance(self) -> AttendanceStore:
        return self._open("attendance", AttendanceStore)

    @property
    def payments(self) -> PaymentStore:
        return self._open("payments", PaymentStore)

    @property
    def teachers(self) -> TeacherStore:
        return self._open("teachers", TeacherStore)

    @property
    def notifications(self) -> NotificationStore:
        return self._open("notifications", NotificationStore)

    def close(self) -> None:
        for store in self._stores.values():
            store.close()
        self._stores.clear()

    # --- cross-store rules -------------------------------------------------

    def delete_student(self, student_id: str) -> int:
        """
        Removes the student's enrollments first, then the student.
        There is no rollback: a failure part way leaves the enrollments already deleted.
        """
        if self.students.get(student_id) is None:
            raise NotFoundError("Student", student_id)

        dependents = self.enrollments.for_student(student_id)
        for enrollment in dependents:
            self.enrollments.delete(enrollment.id)
        self.students.delete_student(student_id)
        logger.info(
            "Deleted student %s with %d enrollment(s) in institution %s",
            student_id, len(dependents), self.institution_id,
        )
        return len(dependents)

    def enroll_student(
        self,
        student_id: str,
        course_id: str,
        start_date: datetime,
        notes: Optional[str] = None,
    ) -> str:
        # uses whatever duration the course has right now; later edits do not move end_date
        course = self.courses.get_course(course_id)
        if course is None:
            raise NotFoundError("Course", course_id)
        if self.students.get_student(student_id) is None:
            raise NotFoundError("Student", student_id)
        return self.enrollments.enroll_student(
            student_id, course_id, course.duration_days, start_date, notes
        )

    def enrollments_with_details(self, today: Optional[datetime] = None) -> List[EnrollmentDetails]:
        return self.enrollments.enrollments_with_details(
            self.students.students, self.courses.courses, today
        )

    def expiring_enrollments(
        self, threshold: int = EXPIRING_SOON_DAYS, today: Optional[datetime] = None
    ) -> List[EnrollmentDetails]:
        return self.enrollments.expiring_enrollments(
            self.students.students, self.courses.courses, threshold, today
        )

    def student_enrollments(self, student_id: str, today: Optional[datetime] = None) -> List[EnrollmentDetails]:
        return self.enrollments.student_enrollments(
            self.students.students, self.courses.courses, student_id, today
        )

    def notify_expiring(
        self, user_id: str, threshold: int = EXPIRING_SOON_DAYS, today: Optional[datetime] = None
    ) -> int:
        expiring = self.expiring_enrollments(threshold, today)
        for enrollment in expiring:
            create_expiry_notification(
                self.notifications,
                user_id,
                enrollment.student.full_name,
                enrollment.course.name,
                enrollment.days_remaining,
            )
        return len(expiring)
