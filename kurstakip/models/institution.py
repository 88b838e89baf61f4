from datetime import datetime

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from kurstakip.database import Base


class Institution(Base):
    """
    Tenant: a language institute.
    The founder is fixed at creation and is the only user allowed to rename it.
    """
    __tablename__ = "institutions"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    founder_id = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    users = relationship("User", back_populates="institution")
    invites = relationship("Invite", back_populates="institution", cascade="all, delete-orphan")
