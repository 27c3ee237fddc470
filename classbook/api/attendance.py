# classbook/api/attendance.py
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classbook.api.deps import get_date_range, get_db, get_scope, to_http_error
from classbook.core import bulk, reports
from classbook.core.aggregation import DateRange
from classbook.core.errors import ClassbookError
from classbook.core.scope import AssignmentScope
from classbook.schemas.attendance import AttendanceRow, AttendanceSheetIn, AttendanceSummary
from classbook.schemas.sheet import SaveReport

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sheet", response_model=List[AttendanceRow])
def get_sheet(
    class_id: int,
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    try:
        reports.load_class(db, scope, class_id)
    except ClassbookError as e:
        raise to_http_error(e)
    return bulk.attendance_sheet(db, class_id, day)


@router.put("/sheet", response_model=SaveReport)
def save_sheet(
    sheet: AttendanceSheetIn,
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    try:
        reports.load_class(db, scope, sheet.class_id)
    except ClassbookError as e:
        raise to_http_error(e)

    try:
        return bulk.save_attendance_sheet(db, sheet.class_id, sheet.date, sheet.rows)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Attendance sheet save failed for class_id={sheet.class_id}")
        raise HTTPException(status_code=500, detail="Could not save attendance")


@router.get("/summary", response_model=AttendanceSummary)
def get_summary(
    class_id: int,
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    try:
        return reports.compute_attendance_summary(db, scope, class_id, date_range)
    except ClassbookError as e:
        raise to_http_error(e)
