from pydantic import BaseModel
from datetime import date
from typing import List, Literal, Optional

AttendanceStatus = Literal["present", "absent"]


class AttendanceRow(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceEntry(BaseModel):
    student_id: int
    status: AttendanceStatus = "present"
    note: Optional[str] = None


class AttendanceSheetIn(BaseModel):
    class_id: int
    date: date
    rows: List[AttendanceEntry]


class StudentAttendance(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    sessions: List[Literal["present", "absent", "unknown"]]
    total_present: int
    total_absent: int


class AttendanceSummary(BaseModel):
    dates: List[date]
    students: List[StudentAttendance]
