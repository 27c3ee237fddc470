# classbook/api/equipment.py
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classbook.api.deps import get_current_user, get_date_range, get_db, get_scope, to_http_error
from classbook.core import bulk, reports
from classbook.core.aggregation import DateRange
from classbook.core.errors import ClassbookError
from classbook.core.rating import cycle_equipment_flag
from classbook.core.scope import AssignmentScope
from classbook.db.models.user import User
from classbook.schemas.equipment import EquipmentRow, EquipmentSheetIn, EquipmentSummary, EquipmentToggle
from classbook.schemas.sheet import SaveReport

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sheet", response_model=List[EquipmentRow])
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
    return bulk.equipment_sheet(db, class_id, day)


@router.put("/sheet", response_model=SaveReport)
def save_sheet(
    sheet: EquipmentSheetIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    scope: AssignmentScope = Depends(get_scope),
):
    try:
        reports.load_class(db, scope, sheet.class_id)
    except ClassbookError as e:
        raise to_http_error(e)

    try:
        return bulk.save_equipment_sheet(db, sheet.class_id, sheet.date, sheet.rows, user_id=current_user.id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Equipment sheet save failed for class_id={sheet.class_id}")
        raise HTTPException(status_code=500, detail="Could not save equipment checks")


@router.post("/cycle", response_model=EquipmentToggle)
def toggle_flag(request: EquipmentToggle, current_user: User = Depends(get_current_user)):
    return {"forgot_equipment": cycle_equipment_flag(request.forgot_equipment)}


@router.get("/summary", response_model=EquipmentSummary)
def get_summary(
    class_id: int,
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    scope: AssignmentScope = Depends(get_scope),
):
    try:
        return reports.compute_equipment_summary(db, scope, class_id, date_range)
    except ClassbookError as e:
        raise to_http_error(e)
