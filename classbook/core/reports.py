# classbook/core/reports.py
# Loads what a report needs from the store, checks the caller's scope and
# hands the rows to the pure builders in classbook.core.summary.
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from classbook.core import summary
from classbook.core.aggregation import ALL_TIME, DateRange
from classbook.core.errors import AccessDeniedError, NotFoundError
from classbook.core.scope import AssignmentScope
from classbook.crud import catalog, records

logger = logging.getLogger(__name__)


def load_class(db: Session, scope: AssignmentScope, class_id: int):
    school_class = catalog.get_class(db, class_id)
    if not school_class:
        raise NotFoundError("Class", class_id)
    if not scope.can_access_class(class_id):
        raise AccessDeniedError(class_id)
    return school_class


def _load_student(db: Session, class_id: int, student_id: int):
    student = catalog.get_student(db, student_id)
    if not student or student.class_id != class_id:
        raise NotFoundError("Student", student_id)
    return student


def _check_topic_access(scope: AssignmentScope, class_id: int, topic) -> None:
    if topic.subject_id is not None and not scope.can_access_class(class_id, topic.subject_id):
        raise AccessDeniedError(class_id)


def _selected_topics(
    db: Session,
    scope: AssignmentScope,
    school_class,
    topic_ids: Optional[Sequence[int]],
    subject_id: Optional[int],
):
    if topic_ids:
        topics = catalog.get_topics(db, topic_ids)
        for topic in topics:
            _check_topic_access(scope, school_class.id, topic)
        return topics
    # No explicit selection means every topic of the class's grade the caller may see
    return [
        t for t in catalog.list_topics_for_class(db, school_class, subject_id)
        if t.subject_id is None or scope.can_access_class(school_class.id, t.subject_id)
    ]


def compute_topic_summary(
    db: Session,
    scope: AssignmentScope,
    class_id: int,
    student_id: int,
    topic_id: int,
    date_range: DateRange = ALL_TIME,
) -> Dict[str, Any]:
    load_class(db, scope, class_id)
    _load_student(db, class_id, student_id)
    topic = catalog.get_topic(db, topic_id)
    if not topic:
        raise NotFoundError("Topic", topic_id)
    _check_topic_access(scope, class_id, topic)

    criteria = catalog.list_criteria(db, [topic.id])
    evaluations = records.get_evaluations(
        db, class_id, [c.id for c in criteria], date_range, student_id=student_id
    )
    return summary.summarize_topic(student_id, topic, criteria, evaluations, date_range)


def compute_student_summary(
    db: Session,
    scope: AssignmentScope,
    class_id: int,
    student_id: int,
    topic_ids: Optional[Sequence[int]] = None,
    date_range: DateRange = ALL_TIME,
    subject_id: Optional[int] = None,
) -> Dict[str, Any]:
    school_class = load_class(db, scope, class_id)
    student = _load_student(db, class_id, student_id)
    topics = _selected_topics(db, scope, school_class, topic_ids, subject_id)
    criteria = catalog.list_criteria(db, [t.id for t in topics])
    evaluations = records.get_evaluations(
        db, class_id, [c.id for c in criteria], date_range, student_id=student_id
    )

    logger.info(f"Student summary class_id={class_id} student_id={student_id} topics={len(topics)}")
    return summary.build_student_summary(student, topics, criteria, evaluations, date_range)


def compute_class_student_summaries(
    db: Session,
    scope: AssignmentScope,
    class_id: int,
    topic_ids: Optional[Sequence[int]] = None,
    date_range: DateRange = ALL_TIME,
    subject_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    school_class = load_class(db, scope, class_id)
    roster = catalog.get_roster(db, class_id)
    topics = _selected_topics(db, scope, school_class, topic_ids, subject_id)
    criteria = catalog.list_criteria(db, [t.id for t in topics])
    evaluations = records.get_evaluations(db, class_id, [c.id for c in criteria], date_range)

    return summary.build_class_student_summaries(roster, topics, criteria, evaluations, date_range)


def compute_class_criteria_matrix(
    db: Session,
    scope: AssignmentScope,
    class_id: int,
    topic_id: int,
    date_range: DateRange = ALL_TIME,
) -> Dict[str, Any]:
    load_class(db, scope, class_id)
    topic = catalog.get_topic(db, topic_id)
    if not topic:
        raise NotFoundError("Topic", topic_id)
    _check_topic_access(scope, class_id, topic)

    roster = catalog.get_roster(db, class_id)
    criteria = catalog.list_criteria(db, [topic.id])
    evaluations = records.get_evaluations(db, class_id, [c.id for c in criteria], date_range)

    return summary.build_class_criteria_matrix(topic, criteria, roster, evaluations, date_range)


def compute_attendance_summary(
    db: Session, scope: AssignmentScope, class_id: int, date_range: DateRange = ALL_TIME
) -> Dict[str, Any]:
    load_class(db, scope, class_id)
    roster = catalog.get_roster(db, class_id)
    return summary.build_attendance_summary(roster, records.get_attendance_range(db, class_id, date_range))


def compute_equipment_summary(
    db: Session, scope: AssignmentScope, class_id: int, date_range: DateRange = ALL_TIME
) -> Dict[str, Any]:
    load_class(db, scope, class_id)
    roster = catalog.get_roster(db, class_id)
    return summary.build_equipment_summary(roster, records.get_equipment_range(db, class_id, date_range))
