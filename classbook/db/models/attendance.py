# classbook/db/models/attendance.py
from sqlalchemy import Column, Integer, String, Date, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from classbook.db.base import Base


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    # "present" or "absent"
    status = Column(String, nullable=False, default="present")
    note = Column(Text, nullable=True)

    student = relationship("Student")

    __table_args__ = (
        UniqueConstraint("student_id", "class_id", "date", name="uq_attendance_natural_key"),
    )
