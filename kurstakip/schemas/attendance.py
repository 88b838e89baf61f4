from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kurstakip.utils.dates import local_naive

AttendanceStatus = Literal["present", "absent", "late", "excused"]


class AttendanceRecord(BaseModel):
    student_id: str
    status: AttendanceStatus


class AttendanceSave(BaseModel):
    course_id: str
    date: datetime
    records: List[AttendanceRecord] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def naive_date(cls, value: datetime) -> datetime:
        return local_naive(value)


class AttendanceOut(BaseModel):
    id: str
    institution_id: str
    course_id: str
    date: datetime
    records: List[AttendanceRecord]
    notes: Optional[str] = None
    created_at: datetime
    created_by: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class AttendanceStats(BaseModel):
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    total: int = 0
