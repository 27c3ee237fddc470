# classbook/crud/records.py
# Keyed read/write for evaluations, attendance and equipment checks.
# Writes look the natural key up first and then update or insert.
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from classbook.core.aggregation import DateRange, EvaluationPoint
from classbook.core.rating import is_stored_rating
from classbook.db.models.attendance import Attendance
from classbook.db.models.equipment import EquipmentCheck
from classbook.db.models.evaluation import Evaluation


def _in_range(query, column, date_range: Optional[DateRange]):
    if date_range is None:
        return query
    if date_range.start is not None:
        query = query.filter(column >= date_range.start)
    if date_range.end is not None:
        query = query.filter(column <= date_range.end)
    return query


# --- evaluations ---

def get_evaluations(
    db: Session,
    class_id: int,
    criterion_ids: Iterable[int],
    date_range: Optional[DateRange] = None,
    student_id: Optional[int] = None,
) -> List[EvaluationPoint]:
    criterion_ids = list(criterion_ids)
    if not criterion_ids:
        return []
    query = db.query(Evaluation).filter(
        Evaluation.class_id == class_id,
        Evaluation.criterion_id.in_(criterion_ids),
    )
    if student_id is not None:
        query = query.filter(Evaluation.student_id == student_id)
    query = _in_range(query, Evaluation.evaluated_date, date_range)
    return [
        EvaluationPoint(e.student_id, e.criterion_id, e.rating, e.evaluated_date)
        for e in query.order_by(Evaluation.evaluated_date, Evaluation.id).all()
    ]


def get_evaluations_on(db: Session, class_id: int, criterion_id: int, day: date) -> List[Evaluation]:
    return db.query(Evaluation).filter(
        Evaluation.class_id == class_id,
        Evaluation.criterion_id == criterion_id,
        Evaluation.evaluated_date == day,
    ).all()


def upsert_evaluation(
    db: Session,
    student_id: int,
    criterion_id: int,
    class_id: int,
    day: date,
    rating: int,
    note: Optional[str] = None,
) -> Evaluation:
    if not is_stored_rating(rating):
        raise ValueError(f"Rating {rating} cannot be stored")
    existing = db.query(Evaluation).filter(
        Evaluation.student_id == student_id,
        Evaluation.criterion_id == criterion_id,
        Evaluation.class_id == class_id,
        Evaluation.evaluated_date == day,
    ).first()

    if existing:
        existing.rating = rating
        if note is not None:
            existing.note = note
    else:
        existing = Evaluation(
            student_id=student_id,
            criterion_id=criterion_id,
            class_id=class_id,
            evaluated_date=day,
            rating=rating,
            note=note,
        )
        db.add(existing)

    db.flush()
    return existing


# --- attendance ---

def get_attendance(db: Session, class_id: int, day: date) -> List[Attendance]:
    return db.query(Attendance).filter(
        Attendance.class_id == class_id,
        Attendance.date == day,
    ).all()


def get_attendance_range(
    db: Session, class_id: int, date_range: Optional[DateRange] = None
) -> List[Attendance]:
    query = db.query(Attendance).filter(Attendance.class_id == class_id)
    query = _in_range(query, Attendance.date, date_range)
    return query.order_by(Attendance.date).all()


def upsert_attendance(
    db: Session,
    student_id: int,
    class_id: int,
    day: date,
    status: str,
    note: Optional[str] = None,
) -> Attendance:
    existing = db.query(Attendance).filter(
        Attendance.student_id == student_id,
        Attendance.class_id == class_id,
        Attendance.date == day,
    ).first()

    if existing:
        existing.status = status
        if note is not None:
            existing.note = note
    else:
        existing = Attendance(
            student_id=student_id,
            class_id=class_id,
            date=day,
            status=status,
            note=note,
        )
        db.add(existing)

    db.flush()
    return existing


# --- equipment ---

def get_equipment(db: Session, class_id: int, day: date) -> List[EquipmentCheck]:
    return db.query(EquipmentCheck).filter(
        EquipmentCheck.class_id == class_id,
        EquipmentCheck.date == day,
    ).all()


def get_equipment_range(
    db: Session, class_id: int, date_range: Optional[DateRange] = None
) -> List[EquipmentCheck]:
    query = db.query(EquipmentCheck).filter(EquipmentCheck.class_id == class_id)
    query = _in_range(query, EquipmentCheck.date, date_range)
    return query.order_by(EquipmentCheck.date).all()


def upsert_equipment(
    db: Session,
    student_id: int,
    class_id: int,
    day: date,
    forgot_equipment: bool,
    note: Optional[str] = None,
    user_id: Optional[int] = None,
) -> EquipmentCheck:
    existing = db.query(EquipmentCheck).filter(
        EquipmentCheck.student_id == student_id,
        EquipmentCheck.class_id == class_id,
        EquipmentCheck.date == day,
    ).first()

    if existing:
        existing.forgot_equipment = forgot_equipment
        existing.user_id = user_id
        if note is not None:
            existing.note = note
    else:
        existing = EquipmentCheck(
            student_id=student_id,
            class_id=class_id,
            date=day,
            forgot_equipment=forgot_equipment,
            note=note,
            user_id=user_id,
        )
        db.add(existing)

    db.flush()
    return existing
