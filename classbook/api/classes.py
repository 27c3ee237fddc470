# classbook/api/classes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, get_scope, to_http_error
from classbook.core.errors import ClassbookError
from classbook.core.reports import load_class
from classbook.core.scope import AssignmentScope
from classbook.core.seat_grid import seat_rows
from classbook.crud import catalog
from classbook.schemas.school import ClassOut, SeatGrid, StudentOut, TopicOut

router = APIRouter()


@router.get("/", response_model=List[ClassOut])
def list_classes(
    school_year: Optional[str] = None,
    subject_id: Optional[int] = None,
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    return catalog.list_classes(db, scope, school_year=school_year, subject_id=subject_id)


@router.get("/school-years", response_model=List[str])
def list_school_years(db: Session = Depends(get_db), scope: AssignmentScope = Depends(get_scope)):
    return catalog.list_school_years(db, scope)


def _visible_class(db: Session, scope: AssignmentScope, class_id: int):
    try:
        return load_class(db, scope, class_id)
    except ClassbookError as e:
        raise to_http_error(e)


@router.get("/{class_id}/students", response_model=List[StudentOut])
def get_students(
    class_id: int,
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    _visible_class(db, scope, class_id)
    return catalog.get_roster(db, class_id)


@router.get("/{class_id}/seat-grid", response_model=SeatGrid)
def get_seat_grid(
    class_id: int,
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    _visible_class(db, scope, class_id)
    roster = catalog.get_roster(db, class_id)
    return {
        "rows": seat_rows(roster),
        "unseated": [s for s in roster if not s.computer_name],
    }


@router.get("/{class_id}/topics", response_model=List[TopicOut])
def get_topics(
    class_id: int,
    subject_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    school_class = _visible_class(db, scope, class_id)
    if subject_id is not None and not scope.can_access_class(class_id, subject_id):
        raise HTTPException(status_code=403, detail="No assignment for this subject")
    return [
        t._asdict()
        for t in catalog.list_topics_for_class(db, school_class, subject_id)
        if t.subject_id is None or scope.can_access_class(class_id, t.subject_id)
    ]
