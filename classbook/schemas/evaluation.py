from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional


class EvaluationRow(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    rating: int = Field(..., ge=0, le=4)  # 0 only when absent
    is_absent: bool = False


class EvaluationEntry(BaseModel):
    student_id: int
    rating: int = Field(..., ge=1, le=4)


class EvaluationSheetIn(BaseModel):
    class_id: int
    criterion_id: int
    date: date
    rows: List[EvaluationEntry]


class CycleRequest(BaseModel):
    rating: int
    is_absent: bool = False


class CycleResponse(BaseModel):
    rating: int
