from pydantic import BaseModel
from typing import List, Literal, Optional


class RowResultOut(BaseModel):
    student_id: int
    status: Literal["saved", "skipped", "failed"]
    error: Optional[str] = None


class SaveReport(BaseModel):
    results: List[RowResultOut]
    saved: int
    skipped: int
    failed: int
