# classbook/api/evaluations.py
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classbook.api.deps import get_current_user, get_db, get_scope, to_http_error
from classbook.core import bulk
from classbook.core.errors import ClassbookError
from classbook.core.rating import cycle_sheet_row
from classbook.core.reports import load_class
from classbook.core.scope import AssignmentScope
from classbook.crud import catalog
from classbook.db.models.user import User
from classbook.schemas.evaluation import CycleRequest, CycleResponse, EvaluationRow, EvaluationSheetIn
from classbook.schemas.sheet import SaveReport

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_criterion_access(db: Session, scope: AssignmentScope, class_id: int, criterion_id: int):
    try:
        load_class(db, scope, class_id)
    except ClassbookError as e:
        raise to_http_error(e)

    criterion = catalog.get_criterion(db, criterion_id)
    if not criterion:
        raise HTTPException(status_code=404, detail="Criterion not found")
    topic = catalog.get_topic(db, criterion.topic_id)
    if topic and topic.subject_id is not None and not scope.can_access_class(class_id, topic.subject_id):
        raise HTTPException(status_code=403, detail="No assignment for this subject")
    return criterion


@router.get("/sheet", response_model=List[EvaluationRow])
def get_sheet(
    class_id: int,
    criterion_id: int,
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    _check_criterion_access(db, scope, class_id, criterion_id)
    return bulk.evaluation_sheet(db, class_id, criterion_id, day)


@router.put("/sheet", response_model=SaveReport)
def save_sheet(
    sheet: EvaluationSheetIn,
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    _check_criterion_access(db, scope, sheet.class_id, sheet.criterion_id)
    try:
        return bulk.save_evaluation_sheet(db, sheet.class_id, sheet.criterion_id, sheet.date, sheet.rows)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Evaluation sheet save failed for class_id={sheet.class_id}")
        raise HTTPException(status_code=500, detail="Could not save evaluations")


@router.post("/cycle", response_model=CycleResponse)
def cycle_rating(request: CycleRequest, current_user: User = Depends(get_current_user)):
    row = cycle_sheet_row({"rating": request.rating, "is_absent": request.is_absent})
    return {"rating": row["rating"]}
