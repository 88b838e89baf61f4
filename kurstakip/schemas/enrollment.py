from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from kurstakip.schemas.course import CourseOut
from kurstakip.schemas.student import StudentOut
from kurstakip.utils.dates import local_naive

# "expired" only ever appears on derived views
EnrollmentStatus = Literal["active", "completed", "expired", "cancelled"]


class EnrollmentCreate(BaseModel):
    student_id: str
    course_id: str
    start_date: datetime
    notes: Optional[str] = None

    @field_validator("start_date")
    @classmethod
    def naive_start(cls, value: datetime) -> datetime:
        return local_naive(value)


class EnrollmentUpdate(BaseModel):
    notes: Optional[str] = None


class EnrollmentOut(BaseModel):
    id: str
    institution_id: str
    student_id: str
    course_id: str
    start_date: datetime
    end_date: datetime
    status: EnrollmentStatus
    notes: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class EnrollmentDetails(EnrollmentOut):
    student: StudentOut
    course: CourseOut
    days_remaining: int
    is_expiring_soon: bool
