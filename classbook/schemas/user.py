from pydantic import BaseModel
from typing import List, Optional


class UserCreate(BaseModel):
    email: str
    password: str
    full_name: str
    role: str  # "admin" or "teacher"


class UserLogin(BaseModel):
    email: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str


class User(BaseModel):
    id: int
    email: str
    full_name: str
    role: str

    class Config:
        from_attributes = True


class AssignmentOut(BaseModel):
    id: int
    user_id: int
    class_id: int
    subject_id: int
    school_year: str
    is_homeroom: bool

    class Config:
        from_attributes = True


class Me(User):
    assignments: List[AssignmentOut] = []
    subject_ids: Optional[List[int]] = None  # None for admins: every subject
    homeroom_class_ids: List[int] = []
