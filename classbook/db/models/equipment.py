# classbook/db/models/equipment.py
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, Text, UniqueConstraint
from classbook.db.base import Base


class EquipmentCheck(Base):
    __tablename__ = "equipment_checks"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    forgot_equipment = Column(Boolean, default=False, nullable=False)
    note = Column(Text, nullable=True)
    # Who recorded the check
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint("student_id", "class_id", "date", name="uq_equipment_natural_key"),
    )
