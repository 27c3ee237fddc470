# classbook/crud/catalog.py
# Read-only lookups for classes, rosters, topics and criteria.
# Topics and criteria come back as flat refs rather than nested rows.
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from classbook.core.aggregation import CriterionRef, TopicRef
from classbook.core.scope import AssignmentScope
from classbook.db.models.school import SchoolClass, Student, Subject
from classbook.db.models.topic import Criterion, Topic


def get_class(db: Session, class_id: int) -> Optional[SchoolClass]:
    return db.query(SchoolClass).filter(SchoolClass.id == class_id).first()


def list_classes(
    db: Session,
    scope: AssignmentScope,
    school_year: Optional[str] = None,
    subject_id: Optional[int] = None,
) -> List[SchoolClass]:
    query = db.query(SchoolClass)
    if school_year:
        query = query.filter(SchoolClass.school_year == school_year)
    query = scope.apply_class_filter(
        query, SchoolClass.id, subject_id=subject_id, school_year=school_year
    )
    return query.order_by(SchoolClass.name).all()


def list_school_years(db: Session, scope: AssignmentScope) -> List[str]:
    query = scope.apply_class_filter(db.query(SchoolClass.school_year), SchoolClass.id)
    rows = query.distinct().all()
    return sorted({r[0] for r in rows}, reverse=True)


def get_roster(db: Session, class_id: int) -> List[Student]:
    # Seated students first in seat order, unseated ones last
    return (
        db.query(Student)
        .filter(Student.class_id == class_id)
        .order_by(Student.computer_name.is_(None), Student.computer_name, Student.id)
        .all()
    )


def get_student(db: Session, student_id: int) -> Optional[Student]:
    return db.query(Student).filter(Student.id == student_id).first()


def _topic_ref(topic: Topic) -> TopicRef:
    return TopicRef(id=topic.id, name=topic.name, subject_id=topic.subject_id)


def list_topics_for_class(
    db: Session, school_class: SchoolClass, subject_id: Optional[int] = None
) -> List[TopicRef]:
    query = db.query(Topic).filter(Topic.grade_id == school_class.grade_id)
    if subject_id is not None:
        query = query.filter(Topic.subject_id == subject_id)
    return [_topic_ref(t) for t in query.order_by(Topic.display_order, Topic.name).all()]


def get_topic(db: Session, topic_id: int) -> Optional[TopicRef]:
    topic = db.query(Topic).filter(Topic.id == topic_id).first()
    return _topic_ref(topic) if topic else None


def get_topics(db: Session, topic_ids: Iterable[int]) -> List[TopicRef]:
    """Existing topics among ``topic_ids``; deleted ones are skipped."""
    topic_ids = list(topic_ids)
    if not topic_ids:
        return []
    topics = db.query(Topic).filter(Topic.id.in_(topic_ids)).all()
    by_id = {t.id: t for t in topics}
    return [_topic_ref(by_id[tid]) for tid in topic_ids if tid in by_id]


def list_criteria(db: Session, topic_ids: Iterable[int]) -> List[CriterionRef]:
    topic_ids = list(topic_ids)
    if not topic_ids:
        return []
    rows = (
        db.query(Criterion)
        .filter(Criterion.topic_id.in_(topic_ids))
        .order_by(Criterion.display_order, Criterion.id)
        .all()
    )
    return [CriterionRef(id=c.id, name=c.name, topic_id=c.topic_id) for c in rows]


def get_criterion(db: Session, criterion_id: int) -> Optional[CriterionRef]:
    c = db.query(Criterion).filter(Criterion.id == criterion_id).first()
    return CriterionRef(id=c.id, name=c.name, topic_id=c.topic_id) if c else None


def list_subjects(db: Session, scope: AssignmentScope) -> List[Subject]:
    query = db.query(Subject).filter(Subject.is_active == True)  # noqa: E712
    allowed = scope.subject_ids()
    if allowed is not None:
        if not allowed:
            return []
        query = query.filter(Subject.id.in_(sorted(allowed)))
    return query.order_by(Subject.name).all()
