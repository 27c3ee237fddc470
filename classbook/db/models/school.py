# classbook/db/models/school.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from classbook.db.base import Base


class Grade(Base):
    """Year level, e.g. "Grade 6". Classes and topics hang off it."""

    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    classes = relationship("SchoolClass", back_populates="grade")
    topics = relationship("Topic", back_populates="grade")


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    grade_id = Column(Integer, ForeignKey("grades.id"), nullable=False)
    school_year = Column(String, nullable=False, index=True)  # "2025-2026"
    schedule = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    grade = relationship("Grade", back_populates="classes")
    students = relationship("Student", back_populates="school_class")


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Seat code A1..E8, not unique within a class
    computer_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    parent_phone = Column(String, nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=True, index=True)

    school_class = relationship("SchoolClass", back_populates="students")
