from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class MessageRequest(BaseModel):
    to: str = Field(min_length=10, max_length=20)
    message: str = Field(min_length=1, max_length=1600)


class BulkRecipient(BaseModel):
    phone: str = Field(min_length=10)
    name: Optional[str] = None


class BulkRequest(BaseModel):
    recipients: List[BulkRecipient] = Field(min_length=1, max_length=100)
    message: str = Field(min_length=1, max_length=1000)
    channel: Literal["whatsapp", "sms"] = "whatsapp"


class EmailRequest(BaseModel):
    to: EmailStr
    subject: Optional[str] = Field(default=None, max_length=200)
    message: str = Field(min_length=1, max_length=10000)
    student_name: Optional[str] = Field(default=None, max_length=100)


class SendResult(BaseModel):
    success: bool = True
    message_id: Optional[str] = None
    status: Optional[str] = None


class RecipientResult(BaseModel):
    phone: str
    status: Literal["sent", "failed"]
    error: Optional[str] = None


class BulkSummary(BaseModel):
    total: int
    successful: int
    failed: int


class BulkResult(BaseModel):
    success: bool = True
    summary: BulkSummary
    results: List[RecipientResult]
