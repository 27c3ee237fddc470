# classbook/db/__init__.py
# Importing the package registers every model on Base.metadata

from classbook.db.base import Base
from classbook.db.models import (
    User, Grade, Subject, SchoolClass, Student, Topic, Criterion,
    Evaluation, Attendance, EquipmentCheck, TeacherAssignment,
)

__all__ = [
    "Base", "User", "Grade", "Subject", "SchoolClass", "Student",
    "Topic", "Criterion", "Evaluation", "Attendance", "EquipmentCheck",
    "TeacherAssignment",
]
