from sqlalchemy import Column, String, Integer, Float, Text
from kurstakip.database import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, index=True)
    institution_id = Column(String, nullable=False, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String, nullable=False, default="")
    duration_days = Column(Integer, nullable=False)   # drives Enrollment.end_date
    price = Column(Float, nullable=False, default=0)
