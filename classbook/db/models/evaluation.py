# classbook/db/models/evaluation.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.sql import func
from classbook.db.base import Base


class Evaluation(Base):
    __tablename__ = "evaluations"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    criterion_id = Column(Integer, ForeignKey("criteria.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    evaluated_date = Column(Date, nullable=False)

    # 1 = not met, 2 = met, 3 = good, 4 = excellent. 0 (absent) is never stored.
    rating = Column(Integer, nullable=False)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint(
            "student_id", "criterion_id", "class_id", "evaluated_date",
            name="uq_evaluation_natural_key",
        ),
    )
