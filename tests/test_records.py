from datetime import date

import pytest

from classbook.core.aggregation import DateRange
from classbook.crud import catalog, records
from classbook.db import Evaluation

DAY = date(2025, 10, 6)


def test_upsert_evaluation_keeps_one_row_per_key(db, school):
    s = school
    args = (db, s["anna"].id, s["loops"].id, s["class_a"].id, DAY)

    records.upsert_evaluation(*args, rating=2)
    records.upsert_evaluation(*args, rating=4, note="much better")
    db.commit()

    rows = db.query(Evaluation).all()
    assert len(rows) == 1
    assert rows[0].rating == 4
    assert rows[0].note == "much better"


def test_upsert_evaluation_rejects_unstored_rating(db, school):
    s = school
    with pytest.raises(ValueError):
        records.upsert_evaluation(db, s["anna"].id, s["loops"].id, s["class_a"].id, DAY, rating=0)


def test_get_evaluations_filters_range_and_student(db, graded):
    s = graded
    criterion_ids = [s["loops"].id, s["variables"].id]

    everything = records.get_evaluations(db, s["class_a"].id, criterion_ids)
    annas_first_day = records.get_evaluations(
        db, s["class_a"].id, criterion_ids, DateRange(DAY, DAY), student_id=s["anna"].id
    )

    assert len(everything) == 4
    assert {(e.criterion_id, e.rating) for e in annas_first_day} == {
        (s["loops"].id, 4), (s["variables"].id, 3)
    }
    assert records.get_evaluations(db, s["class_a"].id, []) == []


def test_upsert_attendance_and_equipment(db, school):
    s = school
    records.upsert_attendance(db, s["anna"].id, s["class_a"].id, DAY, "absent")
    records.upsert_attendance(db, s["anna"].id, s["class_a"].id, DAY, "present", note="late")
    records.upsert_equipment(db, s["anna"].id, s["class_a"].id, DAY, True, user_id=s["teacher"].id)
    records.upsert_equipment(db, s["anna"].id, s["class_a"].id, DAY, False)
    db.commit()

    attendance = records.get_attendance(db, s["class_a"].id, DAY)
    equipment = records.get_equipment(db, s["class_a"].id, DAY)
    assert [(a.status, a.note) for a in attendance] == [("present", "late")]
    assert [e.forgot_equipment for e in equipment] == [False]


def test_roster_is_ordered_by_seat(db, school):
    roster = catalog.get_roster(db, school["class_a"].id)

    assert [s.name for s in roster] == ["Boris", "Anna", "Chen"]
