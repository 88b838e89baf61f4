from sqlalchemy import Column, String, DateTime, Text
from kurstakip.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, nullable=False, index=True)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    notes = Column(Text, nullable=True)

    # KVKK (Turkish personal data law) consent record
    kvkk_consent_date = Column(DateTime, nullable=True)
    kvkk_consent_version = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
