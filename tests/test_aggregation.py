from datetime import date

from classbook.core.aggregation import (
    CriterionRef,
    DateRange,
    EvaluationPoint,
    aggregate_topic,
    mean_of_nonzero,
)

CRITERIA = [
    CriterionRef(id=1, name="Loops", topic_id=10),
    CriterionRef(id=2, name="Variables", topic_id=10),
    CriterionRef(id=3, name="Functions", topic_id=10),
]

DAY = date(2025, 10, 6)


def point(criterion_id, rating, day=DAY, student_id=7):
    return EvaluationPoint(student_id=student_id, criterion_id=criterion_id, rating=rating, date=day)


def test_topic_average_skips_criteria_without_data():
    evaluations = [point(1, 4), point(1, 3), point(2, 3)]

    result = aggregate_topic(7, CRITERIA, evaluations)

    assert result.criterion_averages == {1: 3.5, 2: 3.0, 3: 0.0}
    assert result.criteria_count == 3
    assert result.completed_count == 2
    assert result.topic_average == 3.25


def test_topic_without_criteria_is_empty():
    result = aggregate_topic(7, [], [point(1, 4)])

    assert result.criteria_count == 0
    assert result.completed_count == 0
    assert result.topic_average == 0.0


def test_other_students_are_ignored():
    result = aggregate_topic(7, CRITERIA, [point(1, 1, student_id=8), point(1, 4)])

    assert result.criterion_averages[1] == 4.0


def test_date_range_is_inclusive():
    evaluations = [
        point(1, 1, date(2025, 9, 30)),
        point(1, 4, date(2025, 10, 1)),
        point(1, 2, date(2025, 10, 31)),
        point(1, 1, date(2025, 11, 1)),
    ]

    result = aggregate_topic(7, CRITERIA, evaluations, DateRange(date(2025, 10, 1), date(2025, 10, 31)))

    assert result.criterion_averages[1] == 3.0


def test_every_dated_rating_counts():
    evaluations = [point(1, 4), point(1, 1, date(2025, 10, 13)), point(1, 4, date(2025, 10, 20))]

    result = aggregate_topic(7, CRITERIA, evaluations)

    assert result.criterion_averages[1] == 3.0


def test_mean_of_nonzero():
    assert mean_of_nonzero([0, 0]) == 0.0
    assert mean_of_nonzero([0, 2, 4]) == 3.0


def test_single_ratings_average_over_rated_criteria_only():
    result = aggregate_topic(7, CRITERIA, [point(1, 3), point(2, 4)])

    assert result.topic_average == 3.5
    assert (result.criteria_count, result.completed_count) == (3, 2)
