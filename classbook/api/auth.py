from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from classbook.api.deps import get_db, get_current_user, get_scope
from classbook.core.scope import AssignmentScope
from classbook.schemas.user import UserLogin, Token, Me
from classbook.crud import user as crud_user
from classbook.core.security import verify_password, create_access_token
from classbook.db.models.user import User

router = APIRouter()


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_email(db, form.email)
    if not user or not verify_password(form.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account is disabled")
    access_token = create_access_token(data={"sub": user.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=Me)
def read_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    scope: AssignmentScope = Depends(get_scope),
):
    subject_ids = scope.subject_ids()
    return {
        "id": current_user.id,
        "email": current_user.email,
        "full_name": current_user.full_name,
        "role": current_user.role,
        "assignments": crud_user.get_assignments_for_user(db, current_user.id),
        "subject_ids": sorted(subject_ids) if subject_ids is not None else None,
        "homeroom_class_ids": sorted(scope.homeroom_class_ids()),
    }
