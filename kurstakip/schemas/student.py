from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kurstakip.utils.dates import local_naive


class StudentCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    notes: Optional[str] = None
    kvkk_consent_date: Optional[datetime] = None
    kvkk_consent_version: Optional[str] = None

    @field_validator("kvkk_consent_date")
    @classmethod
    def naive_consent(cls, value):
        return local_naive(value)


class StudentUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    kvkk_consent_date: Optional[datetime] = None
    kvkk_consent_version: Optional[str] = None

    @field_validator("kvkk_consent_date")
    @classmethod
    def naive_consent(cls, value):
        return local_naive(value)


class StudentOut(BaseModel):
    id: str
    institution_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    notes: Optional[str] = None
    kvkk_consent_date: Optional[datetime] = None
    kvkk_consent_version: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
