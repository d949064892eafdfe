"""
Weight entry routes: list, upsert, update and delete, plus the derived summary.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from .. import metrics, schemas
from ..auth import get_current_user
from ..exceptions import ValidationError
from ..services import WeightRecords, get_goal

router = APIRouter(prefix="/api/weights", tags=["Weights"])


def get_weight_records(db: Session = Depends(get_db)) -> WeightRecords:
    return WeightRecords(db)


@router.get("", response_model=schemas.WeightList)
def list_weights(
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: WeightRecords = Depends(get_weight_records),
):
    """
    Get all weight entries for the current user, newest first.
    """
    return {"weights": records.list(current_user.id)}


@router.post("", response_model=schemas.WeightEntry)
def upsert_weight(
    payload: schemas.WeightPayload,
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: WeightRecords = Depends(get_weight_records),
):
    """
    Record the weight for a day. An existing entry for the same date is
    overwritten.

    - **date**: Day of the measurement (YYYY-MM-DD)
    - **weight**: Weight in kg
    - **notes**: Optional free text
    """
    return records.upsert(
        current_user.id,
        payload.date,
        weight=payload.weight,
        notes=payload.notes,
    )


@router.put("", response_model=schemas.WeightEntry)
def update_weight(
    payload: schemas.WeightPayload,
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: WeightRecords = Depends(get_weight_records),
):
    """
    Overwrite a weight entry by id. Ids that don't belong to the current user
    are left alone and the submitted values are echoed back.
    """
    if not payload.id or not payload.date:
        raise ValidationError("ID and date are required")

    entry = records.update(
        current_user.id,
        payload.id,
        payload.date,
        weight=payload.weight,
        notes=payload.notes,
    )
    if entry is None:
        return schemas.WeightEntry(
            id=payload.id,
            date=payload.date,
            weight=payload.weight,
            notes=payload.notes,
        )
    return entry


@router.delete("", response_model=schemas.SuccessResponse)
def delete_weight(
    id: Optional[int] = Query(None),
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: WeightRecords = Depends(get_weight_records),
):
    """
    Delete a weight entry. Unknown or foreign ids are a no-op.
    """
    if not id:
        raise ValidationError("ID is required")

    records.delete(current_user.id, id)
    return {"success": True}


@router.get("/summary", response_model=schemas.WeightSummary)
def weight_summary(
    period: str = Query("all", description="7, 30, 90 or all"),
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: WeightRecords = Depends(get_weight_records),
):
    """
    Current weight, change since the previous entry, min/max/average over the
    period and progress towards the goal weight.
    """
    if period not in metrics.PERIODS:
        raise ValidationError(f"Invalid period, expected one of: {', '.join(metrics.PERIODS)}")

    entries = records.list(current_user.id)
    goal_weight = get_goal(records.db, current_user.id)
    return metrics.summarize_weights(entries, goal_weight, period, date.today())
