from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Union

from kurstakip.schemas.attendance import AttendanceOut, AttendanceStats
from kurstakip.utils.dates import local_naive


def start_of_day(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return local_naive(value).replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime(value.year, value.month, value.day)


def student_stats(sheets: Iterable[AttendanceOut], student_id: str) -> AttendanceStats:
    """
    Tallies one student's statuses across sessions.
    A session without a record for the student is skipped, not counted as absent.
    """
    stats = AttendanceStats()
    for sheet in sheets:
        record = next((r for r in sheet.records if r.student_id == student_id), None)
        if record is None:
            continue
        stats.total += 1
        setattr(stats, record.status, getattr(stats, record.status) + 1)
    return stats


def course_rate(sheets: Iterable[AttendanceOut], course_id: str) -> int:
    """Share of `present` records for a course, as a rounded percentage."""
    present = 0
    total = 0
    for sheet in sheets:
        if sheet.course_id != course_id:
            continue
        for record in sheet.records:
            total += 1
            if record.status == "present":
                present += 1
    return round(present * 100 / total) if total else 0
