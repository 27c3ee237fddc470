# classbook/db/models/assignment.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from classbook.db.base import Base


class TeacherAssignment(Base):
    """Grants a teacher one subject in one class for one school year."""

    __tablename__ = "teacher_assignments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    school_year = Column(String, nullable=False)
    is_homeroom = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="assignments")
    school_class = relationship("SchoolClass")
    subject = relationship("Subject")
