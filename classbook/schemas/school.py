from pydantic import BaseModel
from typing import List, Optional


class ClassOut(BaseModel):
    id: int
    name: str
    grade_id: int
    school_year: str
    schedule: Optional[str] = None

    class Config:
        from_attributes = True


class StudentOut(BaseModel):
    id: int
    name: str
    computer_name: Optional[str] = None

    class Config:
        from_attributes = True


class SubjectOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class TopicOut(BaseModel):
    id: int
    name: str
    subject_id: Optional[int] = None


class CriterionOut(BaseModel):
    id: int
    name: str
    topic_id: int


class SeatSlot(BaseModel):
    code: str
    row: str
    column: int
    student: Optional[StudentOut] = None
    disabled: bool


class SeatGrid(BaseModel):
    rows: List[List[SeatSlot]]
    unseated: List[StudentOut]
