from types import SimpleNamespace

from classbook.core.seat_grid import SEAT_CODES, seat_grid, seat_rows


def student(id, code):
    return SimpleNamespace(id=id, name=f"Student {id}", computer_name=code)


def test_grid_has_forty_seats_in_reading_order():
    grid = seat_grid([])

    assert len(grid) == 40
    assert list(grid)[:3] == ["A1", "A2", "A3"]
    assert list(grid)[-1] == "E8"
    assert all(v is None for v in grid.values())


def test_student_lands_on_their_seat():
    anna = student(1, "C5")

    grid = seat_grid([anna])

    assert grid["C5"] is anna
    assert sum(1 for v in grid.values() if v is not None) == 1


def test_later_student_wins_a_shared_seat():
    first, second = student(1, "A1"), student(2, "A1")

    assert seat_grid([first, second])["A1"] is second


def test_unknown_and_missing_codes_are_skipped():
    grid = seat_grid([student(1, None), student(2, "F9"), {"id": 3, "computer_name": "B2"}])

    assert grid["B2"]["id"] == 3
    assert "F9" not in grid
    assert sum(1 for v in grid.values() if v is not None) == 1


def test_seat_rows_layout():
    rows = seat_rows([student(1, "C5")])

    assert len(rows) == 5
    assert all(len(r) == 8 for r in rows)
    slot = rows[2][4]
    assert slot["code"] == "C5"
    assert slot["disabled"] is False
    assert rows[0][0]["disabled"] is True
    assert [s["code"] for r in rows for s in r] == list(SEAT_CODES)
