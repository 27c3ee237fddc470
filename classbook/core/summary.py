# classbook/core/summary.py
"""
Report tables built on top of the topic aggregator and the outcome rule.

Builders take flat rows already loaded from the record store and never
query anything themselves. Rows pointing at topics or criteria that no
longer exist are dropped quietly.
"""
import itertools
import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from classbook.core.aggregation import (
    ALL_TIME,
    CriterionRef,
    DateRange,
    EvaluationPoint,
    TopicRef,
    aggregate_topic,
    criterion_averages,
    mean_of_nonzero,
    ratings_by_criterion,
)
from classbook.core.outcome import classify_student_topics, classify_topic_criteria
from classbook.core.rating import rating_label

logger = logging.getLogger(__name__)


def _attr(obj: Any, name: str):
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _student_header(student: Any) -> Dict[str, Any]:
    return {
        "student_id": _attr(student, "id"),
        "student_name": _attr(student, "name"),
        "computer_name": _attr(student, "computer_name"),
    }


def _known_evaluations(
    evaluations: Iterable[EvaluationPoint], criterion_ids: Iterable[int]
) -> List[EvaluationPoint]:
    known = set(criterion_ids)
    kept = []
    dropped = 0
    for ev in evaluations:
        if ev.criterion_id in known:
            kept.append(ev)
        else:
            dropped += 1
    if dropped:
        logger.debug("Ignored %d evaluations for criteria no longer listed", dropped)
    return kept


def summarize_topic(
    student_id: int,
    topic: TopicRef,
    criteria: Sequence[CriterionRef],
    evaluations: Iterable[EvaluationPoint],
    date_range: DateRange = ALL_TIME,
) -> Dict[str, Any]:
    topic_criteria = [c for c in criteria if c.topic_id == topic.id]
    aggregate = aggregate_topic(student_id, topic_criteria, evaluations, date_range)
    progress = (
        aggregate.completed_count / aggregate.criteria_count if aggregate.criteria_count else 0.0
    )
    return {
        "topic_id": topic.id,
        "topic_name": topic.name,
        "criteria_count": aggregate.criteria_count,
        "completed_count": aggregate.completed_count,
        "average_rating": aggregate.topic_average,
        "progress": progress,
        "rating_label": rating_label(aggregate.topic_average),
    }


def build_student_summary(
    student: Any,
    topics: Sequence[TopicRef],
    criteria: Sequence[CriterionRef],
    evaluations: Iterable[EvaluationPoint],
    date_range: DateRange = ALL_TIME,
) -> Dict[str, Any]:
    """One report row: per-topic progress plus the final outcome."""
    student_id = _attr(student, "id")
    topic_ids = {t.id for t in topics}
    criteria = [c for c in criteria if c.topic_id in topic_ids]
    evaluations = _known_evaluations(evaluations, (c.id for c in criteria))

    rows = [
        summarize_topic(student_id, topic, criteria, evaluations, date_range)
        for topic in topics
    ]
    topic_averages = [row["average_rating"] for row in rows]

    return {
        **_student_header(student),
        "topics": rows,
        "overall_average": mean_of_nonzero(topic_averages),
        "outcome": classify_student_topics(topic_averages).value,
    }


def build_class_student_summaries(
    roster: Sequence[Any],
    topics: Sequence[TopicRef],
    criteria: Sequence[CriterionRef],
    evaluations: Iterable[EvaluationPoint],
    date_range: DateRange = ALL_TIME,
) -> List[Dict[str, Any]]:
    evaluations = list(evaluations)
    return [
        build_student_summary(student, topics, criteria, evaluations, date_range)
        for student in roster
    ]


def build_class_criteria_matrix(
    topic: TopicRef,
    criteria: Sequence[CriterionRef],
    roster: Sequence[Any],
    evaluations: Iterable[EvaluationPoint],
    date_range: DateRange = ALL_TIME,
) -> Dict[str, Any]:
    """
    Student x criterion matrix for one topic.

    Each student's outcome is classified from that student's criterion
    averages, not from topic averages as in the student report.
    """
    criteria = [c for c in criteria if c.topic_id == topic.id]
    evaluations = _known_evaluations(evaluations, (c.id for c in criteria))

    rows = []
    for student in roster:
        student_id = _attr(student, "id")
        grouped = ratings_by_criterion(student_id, evaluations, date_range)
        averages = criterion_averages(criteria, grouped)
        rows.append({
            **_student_header(student),
            "criteria_ratings": averages,
            "total_average": mean_of_nonzero(averages.values()),
            "outcome": classify_topic_criteria(averages.values()).value,
        })

    return {
        "topic_id": topic.id,
        "topic_name": topic.name,
        "criteria": [{"id": c.id, "name": c.name} for c in criteria],
        "students": rows,
    }


def build_attendance_summary(roster: Sequence[Any], records: Iterable[Any]) -> Dict[str, Any]:
    """Session columns are the distinct dates that have any attendance record."""
    by_date: Dict[date, Dict[int, str]] = {}
    for record in records:
        by_date.setdefault(_attr(record, "date"), {})[_attr(record, "student_id")] = _attr(record, "status")
    dates = sorted(by_date)

    students = []
    for student in roster:
        student_id = _attr(student, "id")
        sessions = [by_date[d].get(student_id, "unknown") for d in dates]
        students.append({
            **_student_header(student),
            "sessions": sessions,
            "total_present": sessions.count("present"),
            "total_absent": sessions.count("absent"),
        })
    return {"dates": dates, "students": students}


def build_equipment_summary(roster: Sequence[Any], records: Iterable[Any]) -> Dict[str, Any]:
    records = sorted(records, key=lambda r: _attr(r, "student_id"))
    grouped = {
        student_id: list(items)
        for student_id, items in itertools.groupby(records, key=lambda r: _attr(r, "student_id"))
    }

    students = []
    for student in roster:
        own = grouped.get(_attr(student, "id"), [])
        students.append({
            **_student_header(student),
            "total_days": len(own),
            "forgot_count": sum(1 for r in own if _attr(r, "forgot_equipment")),
        })
    return {
        "students": students,
        "total_forgot": sum(s["forgot_count"] for s in students),
        "students_with_forgot": sum(1 for s in students if s["forgot_count"] > 0),
    }


class LatestRequestGate:
    """
    Hands out one token per filter change and accepts only the newest one.

    A result computed for an older filter is discarded when it arrives.
    """

    def __init__(self):
        self._latest = 0

    def begin(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class SummaryView:
    """Displayed state of one summary screen."""

    def __init__(self, error_message: str = "Could not load the summary"):
        self.gate = LatestRequestGate()
        self.result: Any = None
        self.error: Optional[str] = None
        self.error_message = error_message

    def start(self) -> int:
        return self.gate.begin()

    def deliver(self, token: int, result: Any) -> bool:
        if not self.gate.is_current(token):
            logger.debug("Dropping stale summary result for token %s", token)
            return False
        self.result = result
        self.error = None
        return True

    def fail(self, token: int, exc: Exception) -> bool:
        if not self.gate.is_current(token):
            return False
        logger.error("Summary refresh failed: %s", exc, exc_info=exc)
        # Keep the previously displayed result
        self.error = self.error_message
        return True

    def refresh(self, compute: Callable[[], Any]) -> bool:
        token = self.start()
        try:
            result = compute()
        except Exception as exc:
            self.fail(token, exc)
            return False
        return self.deliver(token, result)
