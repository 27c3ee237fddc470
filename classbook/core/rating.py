# classbook/core/rating.py
"""
Rating scale and the state transitions used by the bulk-entry grids.

Persisted ratings are always 1..4. ``Rating.ABSENT`` (0) is only ever
derived: it is what the grid shows for an absent student and what an
aggregate reports when there is no data.
"""
from enum import IntEnum
from typing import Optional


class Rating(IntEnum):
    ABSENT = 0
    NOT_MET = 1
    MET = 2
    GOOD = 3
    EXCELLENT = 4


DEFAULT_RATING = Rating.MET

STORED_RATINGS = (Rating.NOT_MET, Rating.MET, Rating.GOOD, Rating.EXCELLENT)

RATING_LABELS = {
    Rating.ABSENT: "Absent",
    Rating.NOT_MET: "Not met",
    Rating.MET: "Met",
    Rating.GOOD: "Good",
    Rating.EXCELLENT: "Excellent",
}

# 2 -> 3 -> 4 -> 1 -> 2
_EVALUATION_CYCLE = {
    Rating.MET: Rating.GOOD,
    Rating.GOOD: Rating.EXCELLENT,
    Rating.EXCELLENT: Rating.NOT_MET,
    Rating.NOT_MET: Rating.MET,
}


def is_stored_rating(value: int) -> bool:
    return value in STORED_RATINGS


def cycle_evaluation_rating(current: int) -> Rating:
    # Anything off the cycle restarts at the default
    return _EVALUATION_CYCLE.get(current, DEFAULT_RATING)


def cycle_equipment_flag(forgot: bool) -> bool:
    return not forgot


def displayed_rating(stored: Optional[int], is_absent: bool) -> Rating:
    """Rating shown in the grid: absence wins over anything stored."""
    if is_absent:
        return Rating.ABSENT
    if stored is None:
        return DEFAULT_RATING
    return Rating(stored)


def cycle_sheet_row(row: dict) -> dict:
    """Advance one evaluation sheet row; absent rows are returned untouched."""
    if row.get("is_absent"):
        return row
    return {**row, "rating": int(cycle_evaluation_rating(row.get("rating", DEFAULT_RATING)))}


def rating_label(average: float) -> str:
    if average == 0:
        return "-"
    return RATING_LABELS[Rating(min(max(round(average), 1), 4))]
