from classbook.db.base import Base
from classbook.db.models.user import User
from classbook.db.models.school import Grade, Subject, SchoolClass, Student
from classbook.db.models.topic import Topic, Criterion
from classbook.db.models.evaluation import Evaluation
from classbook.db.models.attendance import Attendance
from classbook.db.models.equipment import EquipmentCheck
from classbook.db.models.assignment import TeacherAssignment

__all__ = [
    "Base", "User", "Grade", "Subject", "SchoolClass", "Student",
    "Topic", "Criterion", "Evaluation", "Attendance", "EquipmentCheck",
    "TeacherAssignment",
]
