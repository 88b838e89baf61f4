from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from kurstakip.models.attendance import Attendance
from kurstakip.schemas.attendance import AttendanceOut, AttendanceRecord, AttendanceStats
from kurstakip.stores.base import RecordStore
from kurstakip.utils.attendance import course_rate, start_of_day, student_stats


class AttendanceStore(RecordStore[AttendanceOut]):
    model = Attendance
    schema = AttendanceOut

    @property
    def attendance(self) -> List[AttendanceOut]:
        return self.items

    def prepare(self, rows):
        return sorted(rows, key=lambda a: a.date, reverse=True)

    def save_attendance(
        self,
        course_id: str,
        day: Union[date, datetime],
        records: Iterable[Union[AttendanceRecord, dict]],
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> str:
        """
        One sheet per course per day: an existing sheet for that day is overwritten,
        otherwise a new one is created.
        """
        self._require_institution()
        normalized = start_of_day(day)
        payload = [AttendanceRecord.model_validate(r).model_dump() for r in records]

        existing = self.attendance_by_date(course_id, normalized)
        if existing:
            self.update(existing.id, records=payload, notes=notes or None)
            return existing.id

        return self.add(
            course_id=course_id,
            date=normalized,
            records=payload,
            notes=notes or None,
            created_by=created_by,
        )

    def attendance_by_date(self, course_id: str, day: Union[date, datetime]) -> Optional[AttendanceOut]:
        target = start_of_day(day)
        return next(
            (a for a in self.items if a.course_id == course_id and start_of_day(a.date) == target),
            None,
        )

    def course_attendance_history(self, course_id: str) -> List[AttendanceOut]:
        history = [a for a in self.items if a.course_id == course_id]
        return sorted(history, key=lambda a: a.date, reverse=True)

    def student_attendance_stats(self, student_id: str) -> AttendanceStats:
        return student_stats(self.items, student_id)

    def course_attendance_rate(self, course_id: str) -> int:
        return course_rate(self.items, course_id)
