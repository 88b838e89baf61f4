from datetime import datetime
from typing import Iterable, List, Optional

from kurstakip.errors import InvalidTransition, NotFoundError
from kurstakip.models.enrollment import Enrollment
from kurstakip.schemas.course import CourseOut
from kurstakip.schemas.enrollment import EnrollmentDetails, EnrollmentOut
from kurstakip.schemas.student import StudentOut
from kurstakip.stores.base import RecordStore
from kurstakip.utils import enrollments as derive


class EnrollmentStore(RecordStore[EnrollmentOut]):
    """
    Holds enrollments with their stored status.
    Expiry is worked out by the derivation helpers on read and is never saved.
    """

    model = Enrollment
    schema = EnrollmentOut

    @property
    def enrollments(self) -> List[EnrollmentOut]:
        return self.items

    def enroll_student(
        self,
        student_id: str,
        course_id: str,
        duration_days: int,
        start_date: datetime,
        notes: Optional[str] = None,
    ) -> str:
        return self.add(
            student_id=student_id,
            course_id=course_id,
            start_date=start_date,
            end_date=derive.end_date_for(start_date, duration_days),
            status="active",
            notes=notes or None,
        )

    def update_enrollment(self, enrollment_id: str, **fields) -> None:
        # status only moves through complete/cancel
        fields.pop("status", None)
        self.update(enrollment_id, **fields)

    def complete_enrollment(self, enrollment_id: str) -> None:
        self._finish(enrollment_id, "completed")

    def cancel_enrollment(self, enrollment_id: str) -> None:
        self._finish(enrollment_id, "cancelled")

    def _finish(self, enrollment_id: str, target: str) -> None:
        current = self.get(enrollment_id)
        if current is None:
            raise NotFoundError("Enrollment", enrollment_id)
        if current.status != "active":
            raise InvalidTransition("Enrollment", current.status, target)
        self.update(enrollment_id, status=target)

    def for_student(self, student_id: str) -> List[EnrollmentOut]:
        return [e for e in self.items if e.student_id == student_id]

    # --- derived views -----------------------------------------------------

    def enrollments_with_details(
        self,
        students: Iterable[StudentOut],
        courses: Iterable[CourseOut],
        today: Optional[datetime] = None,
    ) -> List[EnrollmentDetails]:
        return derive.with_details(self.items, students, courses, today)

    def expiring_enrollments(
        self,
        students: Iterable[StudentOut],
        courses: Iterable[CourseOut],
        threshold: int = derive.EXPIRING_SOON_DAYS,
        today: Optional[datetime] = None,
    ) -> List[EnrollmentDetails]:
        return derive.expiring(self.enrollments_with_details(students, courses, today), threshold)

    def student_enrollments(
        self,
        students: Iterable[StudentOut],
        courses: Iterable[CourseOut],
        student_id: str,
        today: Optional[datetime] = None,
    ) -> List[EnrollmentDetails]:
        return [
            e for e in self.enrollments_with_details(students, courses, today)
            if e.student_id == student_id
        ]
