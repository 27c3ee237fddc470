# classbook/core/seat_grid.py
import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

SEAT_ROWS = ("A", "B", "C", "D", "E")
SEAT_COLUMNS = (1, 2, 3, 4, 5, 6, 7, 8)

SEAT_CODES = tuple(f"{row}{col}" for row in SEAT_ROWS for col in SEAT_COLUMNS)


def _seat_code(student: Any) -> Optional[str]:
    if isinstance(student, dict):
        return student.get("computer_name")
    return getattr(student, "computer_name", None)


def seat_grid(roster: Iterable[Any]) -> "OrderedDict[str, Any]":
    """
    Map a roster onto the 40 seats, A1..E8 in reading order.

    Students without a seat code, or with a code outside the grid, are left
    out. When two students share a code the one later in the roster wins.
    """
    grid: "OrderedDict[str, Any]" = OrderedDict((code, None) for code in SEAT_CODES)
    for student in roster:
        code = _seat_code(student)
        if not code:
            continue
        if code not in grid:
            logger.debug("Seat code %r is outside the grid, skipped", code)
            continue
        grid[code] = student
    return grid


def seat_rows(roster: Iterable[Any]) -> List[List[Dict[str, Any]]]:
    """Same mapping as ``seat_grid`` laid out as 5 rows of 8 slots."""
    grid = seat_grid(roster)
    rows = []
    for row in SEAT_ROWS:
        slots = []
        for col in SEAT_COLUMNS:
            code = f"{row}{col}"
            student = grid[code]
            slots.append({
                "code": code,
                "row": row,
                "column": col,
                "student": student,
                "disabled": student is None,
            })
        rows.append(slots)
    return rows
