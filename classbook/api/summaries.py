# classbook/api/summaries.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classbook.api.deps import get_current_user, get_date_range, get_db, get_scope, to_http_error
from classbook.core import reports
from classbook.core.aggregation import DateRange
from classbook.core.errors import ClassbookError
from classbook.core.outcome import classify_outcome
from classbook.core.rating import RATING_LABELS
from classbook.core.scope import AssignmentScope
from classbook.db.models.user import User
from classbook.schemas.summary import (
    ClassifyRequest,
    ClassifyResponse,
    CriteriaMatrix,
    RatingLevel,
    StudentSummary,
    TopicSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _run(db: Session, compute, *args, **kwargs):
    try:
        return compute(db, *args, **kwargs)
    except ClassbookError as e:
        raise to_http_error(e)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"{compute.__name__} failed")
        raise HTTPException(status_code=500, detail="Could not load the summary")


@router.get("/student", response_model=StudentSummary)
def student_summary(
    class_id: int,
    student_id: int,
    topic_ids: Optional[List[int]] = Query(None),
    subject_id: Optional[int] = None,
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    return _run(
        db, reports.compute_student_summary, scope, class_id, student_id,
        topic_ids=topic_ids, date_range=date_range, subject_id=subject_id,
    )


@router.get("/class-students", response_model=List[StudentSummary])
def class_student_summaries(
    class_id: int,
    topic_ids: Optional[List[int]] = Query(None),
    subject_id: Optional[int] = None,
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    return _run(
        db, reports.compute_class_student_summaries, scope, class_id,
        topic_ids=topic_ids, date_range=date_range, subject_id=subject_id,
    )


@router.get("/topic", response_model=TopicSummary)
def topic_summary(
    class_id: int,
    student_id: int,
    topic_id: int,
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    return _run(db, reports.compute_topic_summary, scope, class_id, student_id, topic_id, date_range=date_range)


@router.get("/topic-summary", response_model=CriteriaMatrix)
def topic_criteria_matrix(
    class_id: int,
    topic_id: int,
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    return _run(db, reports.compute_class_criteria_matrix, scope, class_id, topic_id, date_range=date_range)


@router.post("/classify", response_model=ClassifyResponse)
def classify(request: ClassifyRequest, current_user: User = Depends(get_current_user)):
    return {"outcome": classify_outcome(request.averages).value}


@router.get("/rating-scale", response_model=List[RatingLevel])
def rating_scale(current_user: User = Depends(get_current_user)):
    return [{"value": int(value), "label": label} for value, label in RATING_LABELS.items()]
