from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TeacherCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    specialty: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class TeacherUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class TeacherOut(BaseModel):
    id: str
    institution_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    specialty: Optional[str] = None
    hourly_rate: Optional[float] = None
    is_active: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
