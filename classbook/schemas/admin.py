# classbook/schemas/admin.py

from pydantic import BaseModel, Field
from typing import List, Optional


class UserOut(BaseModel):
    id: int
    full_name: str
    email: str
    is_active: bool

    class Config:
        from_attributes = True


class AssignmentCreate(BaseModel):
    user_id: int
    class_ids: List[int] = Field(..., min_length=1)
    subject_id: int
    school_year: Optional[str] = None  # falls back to settings.DEFAULT_SCHOOL_YEAR
    is_homeroom: bool = False


class TeacherCreate(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    full_name: str


class ActiveUpdate(BaseModel):
    is_active: bool
