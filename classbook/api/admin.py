# classbook/api/admin.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, require_admin
from classbook.core.config import settings
from classbook.crud import catalog
from classbook.crud import user as crud_user
from classbook.db.models.school import Subject
from classbook.db.models.user import User
from classbook.schemas.admin import ActiveUpdate, AssignmentCreate, TeacherCreate, UserOut
from classbook.schemas.user import AssignmentOut, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/teachers", response_model=List[UserOut])
def get_teachers(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return crud_user.get_teachers(db)


@router.post("/teachers", response_model=UserOut, status_code=201)
def create_teacher(data: TeacherCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    if crud_user.get_user_by_email(db, data.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    teacher = crud_user.create_user(db, UserCreate(**data.model_dump(), role="teacher"))
    logger.info(f"Teacher {teacher.id} created by admin {admin.id}")
    return teacher


@router.put("/teachers/{teacher_id}/active", response_model=UserOut)
def set_teacher_active(
    teacher_id: int,
    data: ActiveUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    teacher = crud_user.get_user_by_id(db, teacher_id)
    if not teacher or teacher.role != "teacher":
        raise HTTPException(status_code=404, detail="Teacher not found")
    teacher.is_active = data.is_active
    db.commit()
    db.refresh(teacher)
    return teacher


@router.get("/assignments", response_model=List[AssignmentOut])
def list_assignments(
    school_year: Optional[str] = None,
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return crud_user.list_assignments(db, school_year=school_year, user_id=user_id)


@router.post("/assignments", response_model=List[AssignmentOut], status_code=201)
def create_assignments(
    data: AssignmentCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    teacher = crud_user.get_user_by_id(db, data.user_id)
    if not teacher or teacher.role != "teacher":
        raise HTTPException(status_code=404, detail="Teacher not found")
    if not db.query(Subject).filter(Subject.id == data.subject_id).first():
        raise HTTPException(status_code=404, detail="Subject not found")
    missing = [cid for cid in data.class_ids if not catalog.get_class(db, cid)]
    if missing:
        raise HTTPException(status_code=404, detail=f"Classes not found: {missing}")

    if not data.school_year:
        data = data.model_copy(update={"school_year": settings.DEFAULT_SCHOOL_YEAR})
    assignments = crud_user.create_assignments(db, data)
    logger.info(f"Admin {admin.id} assigned user {data.user_id} to classes {data.class_ids}")
    return assignments


@router.delete("/assignments/{assignment_id}", status_code=204)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    if not crud_user.delete_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="Assignment not found")
