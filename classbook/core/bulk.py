# classbook/core/bulk.py
"""
Sheets for quick data entry and their bulk save.

A save walks the rows one student at a time and commits each write on its
own, so a failing row leaves the rows before it saved. Every row reports
back whether it was saved, skipped or failed. Nothing is retried.
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classbook.core.rating import displayed_rating
from classbook.crud import catalog, records

logger = logging.getLogger(__name__)

SAVED = "saved"
SKIPPED = "skipped"
FAILED = "failed"


class RowResult(NamedTuple):
    student_id: int
    status: str
    error: Optional[str] = None


def _report(results: List[RowResult]) -> Dict[str, Any]:
    return {
        "results": [r._asdict() for r in results],
        "saved": sum(1 for r in results if r.status == SAVED),
        "skipped": sum(1 for r in results if r.status == SKIPPED),
        "failed": sum(1 for r in results if r.status == FAILED),
    }


def _save_rows(
    db: Session,
    class_id: int,
    rows: Iterable[Any],
    write: Callable[[Any], None],
    skip: Callable[[Any], bool] = lambda row: False,
) -> Dict[str, Any]:
    roster_ids = {s.id for s in catalog.get_roster(db, class_id)}
    results: List[RowResult] = []

    for row in rows:
        if row.student_id not in roster_ids:
            results.append(RowResult(row.student_id, FAILED, "Student is not in this class"))
            continue
        if skip(row):
            results.append(RowResult(row.student_id, SKIPPED))
            continue
        try:
            write(row)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Failed to save row for student_id={row.student_id} in class_id={class_id}")
            results.append(RowResult(row.student_id, FAILED, str(e.__class__.__name__)))
            continue
        results.append(RowResult(row.student_id, SAVED))

    report = _report(results)
    logger.info(
        f"Bulk save class_id={class_id}: saved={report['saved']} "
        f"skipped={report['skipped']} failed={report['failed']}"
    )
    return report


def _absent_ids(db: Session, class_id: int, day: date) -> set:
    return {a.student_id for a in records.get_attendance(db, class_id, day) if a.status == "absent"}


# --- evaluation sheet ---

def evaluation_sheet(db: Session, class_id: int, criterion_id: int, day: date) -> List[Dict[str, Any]]:
    roster = catalog.get_roster(db, class_id)
    existing = {e.student_id: e.rating for e in records.get_evaluations_on(db, class_id, criterion_id, day)}
    absent = _absent_ids(db, class_id, day)

    return [
        {
            "student_id": s.id,
            "student_name": s.name,
            "computer_name": s.computer_name,
            "rating": int(displayed_rating(existing.get(s.id), s.id in absent)),
            "is_absent": s.id in absent,
        }
        for s in roster
    ]


def save_evaluation_sheet(db: Session, class_id: int, criterion_id: int, day: date, rows) -> Dict[str, Any]:
    absent = _absent_ids(db, class_id, day)

    def write(row):
        records.upsert_evaluation(db, row.student_id, criterion_id, class_id, day, row.rating)

    # Absent students keep no rating for the day
    return _save_rows(db, class_id, rows, write, skip=lambda row: row.student_id in absent)


# --- attendance sheet ---

def attendance_sheet(db: Session, class_id: int, day: date) -> List[Dict[str, Any]]:
    roster = catalog.get_roster(db, class_id)
    existing = {a.student_id: a for a in records.get_attendance(db, class_id, day)}
    return [
        {
            "student_id": s.id,
            "student_name": s.name,
            "computer_name": s.computer_name,
            "status": existing[s.id].status if s.id in existing else "present",
            "note": existing[s.id].note if s.id in existing else None,
        }
        for s in roster
    ]


def save_attendance_sheet(db: Session, class_id: int, day: date, rows) -> Dict[str, Any]:
    def write(row):
        records.upsert_attendance(db, row.student_id, class_id, day, row.status, row.note)

    return _save_rows(db, class_id, rows, write)


# --- equipment sheet ---

def equipment_sheet(db: Session, class_id: int, day: date) -> List[Dict[str, Any]]:
    roster = catalog.get_roster(db, class_id)
    existing = {e.student_id: e for e in records.get_equipment(db, class_id, day)}
    return [
        {
            "student_id": s.id,
            "student_name": s.name,
            "computer_name": s.computer_name,
            "forgot_equipment": bool(existing[s.id].forgot_equipment) if s.id in existing else False,
            "note": existing[s.id].note if s.id in existing else None,
        }
        for s in roster
    ]


def save_equipment_sheet(db: Session, class_id: int, day: date, rows, user_id: Optional[int] = None) -> Dict[str, Any]:
    def write(row):
        records.upsert_equipment(
            db, row.student_id, class_id, day, row.forgot_equipment, row.note, user_id=user_id
        )

    return _save_rows(db, class_id, rows, write)
