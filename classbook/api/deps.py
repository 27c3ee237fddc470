# classbook/api/deps.py
from datetime import date
from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from classbook.core.aggregation import DateRange
from classbook.core.errors import ClassbookError
from classbook.core.scope import AssignmentScope, resolve_scope
from classbook.core.security import decode_access_token
from classbook.crud import user as crud_user
from classbook.db.models.user import User
from classbook.db.session import SessionLocal

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    credentials_error = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise credentials_error
    email = payload.get("sub")
    if not email:
        raise credentials_error
    user = crud_user.get_user_by_email(db, email)
    if not user or not user.is_active:
        raise credentials_error
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise HTTPException(status_code=403, detail="Admins only")
    return current_user


def get_scope(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AssignmentScope:
    # Resolved per request, never cached on the user
    assignments = [] if current_user.is_admin else crud_user.get_assignments_for_user(db, current_user.id)
    return resolve_scope(current_user, assignments)


def get_date_range(
    start_date: Optional[date] = Query(None, alias="from"),
    end_date: Optional[date] = Query(None, alias="to"),
) -> DateRange:
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="'from' must not be after 'to'")
    return DateRange(start=start_date, end=end_date)


def to_http_error(e: ClassbookError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)
