from datetime import datetime

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from kurstakip.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=True)
    display_name = Column(String, nullable=True)
    # empty for principals that only sign in through Google
    password_hash = Column(String, nullable=True)

    role = Column(String, nullable=False, default="teacher")  # admin | teacher
    role_updated_at = Column(DateTime, nullable=True)

    # absent until the user founds or joins an institution
    institution_id = Column(String, ForeignKey("institutions.id"), nullable=True, index=True)
    institution = relationship("Institution", back_populates="users")

    created_at = Column(DateTime, default=datetime.now, nullable=False)


class Invite(Base):
    __tablename__ = "invites"

    # the token itself is the key
    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, ForeignKey("institutions.id"), nullable=False, index=True)
    institution = relationship("Institution", back_populates="invites")

    role = Column(String, nullable=False)
    used = Column(Boolean, default=False, nullable=False)
    used_by = Column(String, nullable=True)
    used_at = Column(DateTime, nullable=True)

    expires_at = Column(DateTime, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
