from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

Role = Literal["admin", "teacher"]


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    display_name: Optional[str] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class GoogleLogin(BaseModel):
    access_token: str


class UserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Role
    institution_id: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class InstitutionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class InstitutionOut(BaseModel):
    id: str
    name: str
    founder_id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class InviteCreate(BaseModel):
    role: Role = "teacher"


class InviteRedeem(BaseModel):
    token: str


class InviteOut(BaseModel):
    id: str
    institution_id: str
    role: Role
    used: bool
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None
    expires_at: datetime
    created_by: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
