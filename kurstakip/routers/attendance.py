from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.errors import NotFoundError
from kurstakip.models.user import User
from kurstakip.schemas.attendance import AttendanceOut, AttendanceSave, AttendanceStats
from kurstakip.stores.workspace import Workspace
from kurstakip.utils.auth import require_institution

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.get("/", response_model=List[AttendanceOut])
def list_attendance(course_id: Optional[str] = None, ws: Workspace = Depends(get_workspace)):
    if course_id:
        return ws.attendance.course_attendance_history(course_id)
    return ws.attendance.attendance


@router.put("/", response_model=AttendanceOut)
def save_attendance(
    payload: AttendanceSave,
    ws: Workspace = Depends(get_workspace),
    user: User = Depends(require_institution),
):
    """One sheet per course per day; saving the same day again overwrites it."""
    if ws.courses.get_course(payload.course_id) is None:
        raise NotFoundError("Course", payload.course_id)
    attendance_id = ws.attendance.save_attendance(
        payload.course_id, payload.date, payload.records, payload.notes, created_by=user.id
    )
    return ws.attendance.get(attendance_id)


@router.get("/by-date", response_model=Optional[AttendanceOut])
def attendance_by_date(course_id: str, date: datetime, ws: Workspace = Depends(get_workspace)):
    return ws.attendance.attendance_by_date(course_id, date)


@router.get("/students/{student_id}/stats", response_model=AttendanceStats)
def student_stats(student_id: str, ws: Workspace = Depends(get_workspace)):
    return ws.attendance.student_attendance_stats(student_id)


@router.get("/courses/{course_id}/rate")
def course_rate(course_id: str, ws: Workspace = Depends(get_workspace)):
    return {"course_id": course_id, "rate": ws.attendance.course_attendance_rate(course_id)}
