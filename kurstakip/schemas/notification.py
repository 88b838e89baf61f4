from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

NotificationType = Literal["expiry", "payment", "attendance", "system"]


class NotificationCreate(BaseModel):
    user_id: str
    type: NotificationType
    title: str
    message: str
    link: Optional[str] = None


class NotificationOut(BaseModel):
    id: str
    institution_id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    link: Optional[str] = None
    read: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
