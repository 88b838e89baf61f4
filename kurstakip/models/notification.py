from sqlalchemy import Column, String, DateTime, Boolean, Text
from kurstakip.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)

    type = Column(String, nullable=False)   # expiry|payment|attendance|system
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String, nullable=True)
    read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False)
