import pytest

from classbook.core.outcome import (
    Outcome,
    classify_outcome,
    classify_student_topics,
    classify_topic_criteria,
)


@pytest.mark.parametrize(
    "averages, expected",
    [
        ([], Outcome.UNDETERMINED),
        ([0, 0, 0], Outcome.UNDETERMINED),
        ([3, 3, 4, 2], Outcome.EXCELLENT),
        ([4, 3, 1, 3], Outcome.COMPLETE),
        ([1, 1, 2, 3], Outcome.INCOMPLETE),
        ([3.5, 0, 3.0], Outcome.EXCELLENT),
        # One not-met out of three is below half
        ([1, 2, 2], Outcome.COMPLETE),
        ([1, 1, 2], Outcome.INCOMPLETE),
        ([2, 2, 2], Outcome.COMPLETE),
    ],
)
def test_classify_outcome(averages, expected):
    assert classify_outcome(averages) == expected


def test_good_threshold_is_rounded_up():
    # ceil(5 * 3 / 4) == 4
    assert classify_outcome([3, 3, 3, 2, 2]) == Outcome.COMPLETE
    assert classify_outcome([3, 3, 3, 3, 2]) == Outcome.EXCELLENT


def test_not_met_uses_rounded_average():
    assert classify_outcome([1.4, 3, 3, 3]) == Outcome.COMPLETE
    assert classify_outcome([1.6, 3, 3, 3]) == Outcome.EXCELLENT


def test_wrappers_share_the_rule():
    averages = [4, 3, 1, 3]
    assert classify_student_topics(averages) == classify_topic_criteria(averages) == Outcome.COMPLETE


def test_outcome_serializes_as_label():
    assert Outcome.EXCELLENT.value == "Excellent"


@pytest.mark.parametrize(
    "averages, expected",
    [
        ([4, 4, 4, 4], Outcome.EXCELLENT),
        ([1, 2, 3, 4], Outcome.COMPLETE),
        ([1, 1, 2, 3], Outcome.INCOMPLETE),
        ([], Outcome.UNDETERMINED),
    ],
)
def test_reference_examples(averages, expected):
    assert classify_outcome(averages) == expected
