# classbook/core/outcome.py
import math
from enum import Enum
from typing import Iterable


class Outcome(str, Enum):
    EXCELLENT = "Excellent"
    COMPLETE = "Complete"
    INCOMPLETE = "Incomplete"
    UNDETERMINED = "Undetermined"


def classify_outcome(averages: Iterable[float]) -> Outcome:
    """
    Three-way outcome over a list of averages, 0 meaning "no data".

    The "good" threshold is rounded up while the "not met" one is compared
    against a plain half, so with 3 items a single not-met is not enough
    for Incomplete. Keep both comparisons as they are.
    """
    rated = [a for a in averages if a != 0]
    if not rated:
        return Outcome.UNDETERMINED

    total = len(rated)
    good_or_better = sum(1 for r in rated if r >= 3)
    not_met = sum(1 for r in rated if round(r) == 1)

    if good_or_better >= math.ceil(total * 3 / 4) and not_met == 0:
        return Outcome.EXCELLENT
    if not_met >= total / 2:
        return Outcome.INCOMPLETE
    return Outcome.COMPLETE


def classify_student_topics(topic_averages: Iterable[float]) -> Outcome:
    """Final outcome of a student report, fed with one average per topic."""
    return classify_outcome(topic_averages)


def classify_topic_criteria(criterion_averages: Iterable[float]) -> Outcome:
    """Outcome of one student within a topic, fed with one average per criterion."""
    return classify_outcome(criterion_averages)
