# classbook/api/catalog.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, get_scope
from classbook.core.scope import AssignmentScope
from classbook.crud import catalog
from classbook.schemas.school import CriterionOut, SubjectOut

router = APIRouter()


@router.get("/subjects", response_model=List[SubjectOut])
def list_subjects(db: Session = Depends(get_db), scope: AssignmentScope = Depends(get_scope)):
    return catalog.list_subjects(db, scope)


@router.get("/topics/{topic_id}/criteria", response_model=List[CriterionOut])
def list_criteria(
    topic_id: int,
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    topic = catalog.get_topic(db, topic_id)
    if not topic:
        raise HTTPException(status_code=404, detail="Topic not found")
    allowed = scope.subject_ids()
    if allowed is not None and (not allowed or (topic.subject_id is not None and topic.subject_id not in allowed)):
        raise HTTPException(status_code=403, detail="No assignment for this subject")
    return [c._asdict() for c in catalog.list_criteria(db, [topic_id])]
