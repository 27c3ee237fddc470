from pydantic import BaseModel
from datetime import date
from typing import List, Optional


class EquipmentRow(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    forgot_equipment: bool = False
    note: Optional[str] = None


class EquipmentEntry(BaseModel):
    student_id: int
    forgot_equipment: bool = False
    note: Optional[str] = None


class EquipmentSheetIn(BaseModel):
    class_id: int
    date: date
    rows: List[EquipmentEntry]


class EquipmentToggle(BaseModel):
    forgot_equipment: bool


class StudentEquipment(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    total_days: int
    forgot_count: int


class EquipmentSummary(BaseModel):
    students: List[StudentEquipment]
    total_forgot: int
    students_with_forgot: int
