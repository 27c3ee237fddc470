# classbook/core/aggregation.py
"""
Per-criterion and per-topic averages for one student.

Everything here is pure: the record store hands over flat rows and the
functions below only filter and average them.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence


class EvaluationPoint(NamedTuple):
    student_id: int
    criterion_id: int
    rating: int
    date: date


class CriterionRef(NamedTuple):
    id: int
    name: str
    topic_id: int


class TopicRef(NamedTuple):
    id: int
    name: str
    subject_id: Optional[int] = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive range; a missing bound is open on that side."""

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


ALL_TIME = DateRange()


@dataclass
class TopicAggregate:
    criteria_count: int = 0
    completed_count: int = 0
    topic_average: float = 0.0
    criterion_averages: Dict[int, float] = field(default_factory=dict)


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def mean_of_nonzero(values: Iterable[float]) -> float:
    """Average that skips the 0 "no data" sentinel instead of counting it."""
    return mean([v for v in values if v != 0])


def criterion_average(ratings: Sequence[int]) -> float:
    # Every dated record weighs the same, not only the latest one
    return mean(ratings)


def ratings_by_criterion(
    student_id: int,
    evaluations: Iterable[EvaluationPoint],
    date_range: DateRange = ALL_TIME,
) -> Dict[int, List[int]]:
    grouped: Dict[int, List[int]] = {}
    for ev in evaluations:
        if ev.student_id != student_id:
            continue
        if not date_range.contains(ev.date):
            continue
        grouped.setdefault(ev.criterion_id, []).append(ev.rating)
    return grouped


def criterion_averages(
    criteria: Sequence[CriterionRef],
    grouped: Dict[int, List[int]],
) -> Dict[int, float]:
    return {c.id: criterion_average(grouped.get(c.id, [])) for c in criteria}


def aggregate_topic(
    student_id: int,
    criteria: Sequence[CriterionRef],
    evaluations: Iterable[EvaluationPoint],
    date_range: DateRange = ALL_TIME,
) -> TopicAggregate:
    """
    Aggregate one topic for one student.

    A criterion without any in-range rating counts towards
    ``criteria_count`` with average 0 but is left out of the topic average.
    """
    if not criteria:
        return TopicAggregate()

    grouped = ratings_by_criterion(student_id, evaluations, date_range)
    averages = criterion_averages(criteria, grouped)
    completed = sum(1 for avg in averages.values() if avg != 0)

    return TopicAggregate(
        criteria_count=len(criteria),
        completed_count=completed,
        topic_average=mean_of_nonzero(averages.values()),
        criterion_averages=averages,
    )
