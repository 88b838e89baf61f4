from sqlalchemy import Column, String, DateTime, Text
from kurstakip.database import Base


class Enrollment(Base):
    __tablename__ = "enrollments"

    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, nullable=False, index=True)

    # weak references: the student or course may already be gone
    student_id = Column(String, nullable=False, index=True)
    course_id = Column(String, nullable=False, index=True)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)       # fixed at creation
    status = Column(String, nullable=False, default="active")  # active|completed|cancelled
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False)
