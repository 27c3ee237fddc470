from datetime import date

import pytest

from classbook.core import reports, summary
from classbook.core.aggregation import CriterionRef, DateRange, EvaluationPoint, TopicRef
from classbook.core.errors import AccessDeniedError, NotFoundError
from classbook.core.scope import resolve_scope

DAY = date(2025, 10, 6)

TOPIC = TopicRef(id=10, name="Coding basics")
CRITERIA = [CriterionRef(1, "Loops", 10), CriterionRef(2, "Variables", 10), CriterionRef(3, "Functions", 10)]


def test_summarize_topic_progress():
    evaluations = [EvaluationPoint(7, 1, 4, DAY), EvaluationPoint(7, 1, 3, DAY), EvaluationPoint(7, 2, 3, DAY)]

    row = summary.summarize_topic(7, TOPIC, CRITERIA, evaluations)

    assert row["average_rating"] == 3.25
    assert row["completed_count"] == 2
    assert row["progress"] == pytest.approx(2 / 3)
    assert row["rating_label"] == "Good"


def test_unknown_criteria_are_dropped():
    student = {"id": 7, "name": "Anna", "computer_name": "C5"}
    evaluations = [EvaluationPoint(7, 1, 4, DAY), EvaluationPoint(7, 99, 1, DAY)]

    result = summary.build_student_summary(student, [TOPIC], CRITERIA, evaluations)

    assert result["topics"][0]["average_rating"] == 4.0
    assert result["outcome"] == "Excellent"


def test_student_without_data_is_undetermined():
    student = {"id": 7, "name": "Anna", "computer_name": None}

    result = summary.build_student_summary(student, [TOPIC], CRITERIA, [])

    assert result["overall_average"] == 0.0
    assert result["outcome"] == "Undetermined"


def test_equipment_summary_totals():
    roster = [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]
    checks = [
        {"student_id": 1, "forgot_equipment": True},
        {"student_id": 1, "forgot_equipment": False},
        {"student_id": 2, "forgot_equipment": False},
    ]

    result = summary.build_equipment_summary(roster, checks)

    assert [(s["total_days"], s["forgot_count"]) for s in result["students"]] == [(2, 1), (1, 0)]
    assert result["total_forgot"] == 1
    assert result["students_with_forgot"] == 1


def test_student_report_from_store(db, graded):
    s = graded
    scope = resolve_scope(s["admin"], [])

    result = reports.compute_student_summary(db, scope, s["class_a"].id, s["anna"].id)

    coding, drawing = result["topics"]
    assert coding["average_rating"] == 2.5
    assert coding["criteria_count"] == 3
    assert coding["completed_count"] == 3
    assert drawing["average_rating"] == 0.0
    assert result["overall_average"] == 2.5
    assert result["outcome"] == "Complete"


def test_teacher_report_only_covers_assigned_subjects(db, graded):
    s = graded
    scope = resolve_scope(s["teacher"], s["teacher"].assignments)

    result = reports.compute_student_summary(db, scope, s["class_a"].id, s["anna"].id)

    assert [t["topic_name"] for t in result["topics"]] == ["Coding basics"]
    with pytest.raises(AccessDeniedError):
        reports.compute_class_criteria_matrix(db, scope, s["class_a"].id, s["drawing"].id)
    with pytest.raises(AccessDeniedError):
        reports.compute_class_student_summaries(db, scope, s["class_b"].id)


def test_criteria_matrix_from_store(db, graded):
    s = graded
    scope = resolve_scope(s["admin"], [])

    matrix = reports.compute_class_criteria_matrix(db, scope, s["class_a"].id, s["coding"].id)

    rows = {row["student_name"]: row for row in matrix["students"]}
    assert [c["name"] for c in matrix["criteria"]] == ["Loops", "Variables", "Functions"]
    assert rows["Anna"]["criteria_ratings"] == {s["loops"].id: 3.5, s["variables"].id: 3.0, s["functions"].id: 1.0}
    assert rows["Anna"]["outcome"] == "Complete"
    assert rows["Boris"]["outcome"] == "Incomplete"
    assert rows["Chen"]["outcome"] == "Undetermined"


def test_report_date_range(db, graded):
    s = graded
    scope = resolve_scope(s["admin"], [])

    row = reports.compute_topic_summary(
        db, scope, s["class_a"].id, s["anna"].id, s["coding"].id, DateRange(date(2025, 10, 7), None)
    )

    assert row["average_rating"] == 2.0
    assert row["completed_count"] == 2


def test_missing_student_is_not_found(db, school):
    scope = resolve_scope(school["admin"], [])

    with pytest.raises(NotFoundError):
        reports.compute_student_summary(db, scope, school["class_a"].id, school["dina"].id)


def test_attendance_summary_from_store(db, graded):
    s = graded
    scope = resolve_scope(s["admin"], [])

    result = reports.compute_attendance_summary(db, scope, s["class_a"].id)

    assert result["dates"] == [date(2025, 10, 13)]
    sessions = {row["student_name"]: row["sessions"] for row in result["students"]}
    assert sessions == {"Boris": ["present"], "Anna": ["absent"], "Chen": ["unknown"]}


def test_latest_request_wins():
    view = summary.SummaryView()
    first = view.start()
    second = view.start()

    assert view.deliver(second, "fresh")
    assert not view.deliver(first, "stale")
    assert view.result == "fresh"


def test_failed_refresh_keeps_previous_result():
    view = summary.SummaryView()
    view.refresh(lambda: {"students": []})

    def broken():
        raise RuntimeError("store offline")

    assert view.refresh(broken) is False
    assert view.result == {"students": []}
    assert view.error == "Could not load the summary"

    assert view.refresh(lambda: {"students": [1]})
    assert view.error is None


def test_rating_on_absent_day_still_counts(db, graded):
    s = graded
    scope = resolve_scope(s["admin"], [])

    row = reports.compute_topic_summary(db, scope, s["class_a"].id, s["anna"].id, s["coding"].id)

    assert row["completed_count"] == 3
    assert row["average_rating"] == 2.5
