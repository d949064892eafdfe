"""
Body measurement routes. Same shape as the weight routes, every size optional.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from .. import schemas
from ..auth import get_current_user
from ..exceptions import ValidationError
from ..services import MeasurementRecords

router = APIRouter(prefix="/api/measurements", tags=["Measurements"])

SIZE_FIELDS = ("chest", "waist", "hips", "thigh", "arm")


def get_measurement_records(db: Session = Depends(get_db)) -> MeasurementRecords:
    return MeasurementRecords(db)


def _values(payload: schemas.MeasurementPayload) -> dict:
    return payload.model_dump(include={*SIZE_FIELDS, "notes"})


@router.get("", response_model=schemas.MeasurementList)
def list_measurements(
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: MeasurementRecords = Depends(get_measurement_records),
):
    """
    Get all measurements for the current user, newest first.
    """
    return {"measurements": records.list(current_user.id)}


@router.post("", response_model=schemas.MeasurementEntry)
def upsert_measurement(
    payload: schemas.MeasurementPayload,
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: MeasurementRecords = Depends(get_measurement_records),
):
    """
    Record measurements (cm) for a day, replacing any existing ones for that
    date. Sizes left out are stored as empty.
    """
    return records.upsert(current_user.id, payload.date, **_values(payload))


@router.put("", response_model=schemas.MeasurementEntry)
def update_measurement(
    payload: schemas.MeasurementPayload,
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: MeasurementRecords = Depends(get_measurement_records),
):
    """
    Overwrite a measurement by id.
    """
    if not payload.id or not payload.date:
        raise ValidationError("ID and date are required")

    values = _values(payload)
    entry = records.update(current_user.id, payload.id, payload.date, **values)
    if entry is None:
        return schemas.MeasurementEntry(id=payload.id, date=payload.date, **values)
    return entry


@router.delete("", response_model=schemas.SuccessResponse)
def delete_measurement(
    id: Optional[int] = Query(None),
    current_user: schemas.SessionUser = Depends(get_current_user),
    records: MeasurementRecords = Depends(get_measurement_records),
):
    if not id:
        raise ValidationError("ID is required")

    records.delete(current_user.id, id)
    return {"success": True}
