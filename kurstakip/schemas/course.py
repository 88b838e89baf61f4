from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    category: str = ""
    duration_days: int = Field(gt=0)
    price: float = Field(default=0, ge=0)


class CourseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    duration_days: Optional[int] = Field(default=None, gt=0)
    price: Optional[float] = Field(default=None, ge=0)


class CourseOut(BaseModel):
    id: str
    institution_id: str
    name: str
    description: str
    category: str
    duration_days: int
    price: float
    model_config = ConfigDict(from_attributes=True)
