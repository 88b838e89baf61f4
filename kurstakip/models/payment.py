from sqlalchemy import Column, String, DateTime, Float, Text
from kurstakip.database import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, nullable=False, index=True)

    student_id = Column(String, nullable=False, index=True)
    enrollment_id = Column(String, nullable=False, index=True)

    amount = Column(Float, nullable=False)
    due_date = Column(DateTime, nullable=False)
    paid_date = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default="pending")  # pending|paid|overdue|cancelled
    method = Column(String, nullable=True)                      # cash|card|transfer|other
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False)
