from sqlalchemy import Column, String, DateTime, Text, JSON
from kurstakip.database import Base


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, nullable=False, index=True)
    course_id = Column(String, nullable=False, index=True)

    date = Column(DateTime, nullable=False)   # start of day
    records = Column(JSON, nullable=False, default=list)  # [{"student_id", "status"}]
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False)
    created_by = Column(String, nullable=True)
