from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kurstakip.utils.dates import local_naive

PaymentStatus = Literal["pending", "paid", "overdue", "cancelled"]
PaymentMethod = Literal["cash", "card", "transfer", "other"]


class PaymentCreate(BaseModel):
    student_id: str
    enrollment_id: str
    amount: float = Field(gt=0)
    due_date: datetime
    status: Literal["pending", "paid"] = "pending"
    paid_date: Optional[datetime] = None
    method: Optional[PaymentMethod] = None
    notes: Optional[str] = None

    @field_validator("due_date", "paid_date")
    @classmethod
    def naive_dates(cls, value):
        return local_naive(value)


class PaymentUpdate(BaseModel):
    amount: Optional[float] = Field(default=None, gt=0)
    due_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("due_date")
    @classmethod
    def naive_due(cls, value):
        return local_naive(value)


class MarkPaid(BaseModel):
    method: PaymentMethod


class PaymentOut(BaseModel):
    id: str
    institution_id: str
    student_id: str
    enrollment_id: str
    amount: float
    due_date: datetime
    paid_date: Optional[datetime] = None
    status: PaymentStatus
    method: Optional[PaymentMethod] = None
    notes: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PaymentSummary(BaseModel):
    paid_total: float
    pending_total: float
    overdue_total: float
    pending_count: int
    overdue_count: int
