"""
Per-user CRUD for date-keyed records (weight entries and measurements).

Every query is filtered by the owning user. Updates and deletes aimed at
another user's record match zero rows and are not reported as errors, so
callers can't tell foreign ids from missing ones.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..exceptions import DuplicateEntryError, ValidationError

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _upsert_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        raise RuntimeError(f"Upsert is not supported on the {dialect} dialect") from None


def _required_message(names) -> str:
    labels = [name.replace("_", " ") for name in names]
    if len(labels) == 1:
        text = f"{labels[0]} is required"
    else:
        text = f"{', '.join(labels[:-1])} and {labels[-1]} are required"
    return text[0].upper() + text[1:]


class RecordService:
    """
    Records keyed by (user, date). Subclasses name the model and its value
    columns; ``required`` lists the value columns that may not be null.
    """
    model = None
    fields: tuple = ()
    required: tuple = ()

    def __init__(self, db: Session):
        self.db = db

    def _values(self, fields: dict) -> dict:
        unknown = set(fields) - set(self.fields)
        if unknown:
            raise TypeError(f"Unknown fields for {self.model.__tablename__}: {', '.join(sorted(unknown))}")
        # Full overwrite: anything not supplied is stored as null
        return {name: fields.get(name) for name in self.fields}

    def _validate(self, entry_date: Optional[date], values: dict) -> None:
        missing = [name for name in self.required if values.get(name) is None]
        if entry_date is None or missing:
            raise ValidationError(_required_message(["date", *self.required]))

    def list(self, user_id: int) -> List:
        """All of the user's records, newest date first."""
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(desc(self.model.date), desc(self.model.id))
            .all()
        )

    def get(self, user_id: int, record_id: int):
        return self.db.query(self.model).filter(
            self.model.id == record_id,
            self.model.user_id == user_id
        ).first()

    def get_by_date(self, user_id: int, entry_date: date):
        return self.db.query(self.model).filter(
            self.model.user_id == user_id,
            self.model.date == entry_date
        ).first()

    def upsert(self, user_id: int, entry_date: Optional[date], **fields):
        """
        Insert the record for (user, date) or overwrite the existing one.
        Runs as a single INSERT ... ON CONFLICT DO UPDATE statement.
        """
        values = self._values(fields)
        self._validate(entry_date, values)

        insert = _upsert_insert(self.db)
        table = self.model.__table__
        stmt = insert(table).values(user_id=user_id, date=entry_date, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.user_id, table.c.date],
            set_={name: stmt.excluded[name] for name in self.fields},
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        record = self.get_by_date(user_id, entry_date)
        logger.debug("Upserted %s %s for user %s", table.name, entry_date, user_id)
        return record

    def update(self, user_id: int, record_id: int, entry_date: Optional[date], **fields):
        """
        Overwrite a record by id. Returns the stored record, or None when no
        record with that id belongs to the user.
        """
        values = self._values(fields)
        self._validate(entry_date, values)

        try:
            rows = self.db.query(self.model).filter(
                self.model.id == record_id,
                self.model.user_id == user_id
            ).update({"date": entry_date, **values}, synchronize_session=False)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEntryError(entry_date)

        if not rows:
            return None
        return self.get(user_id, record_id)

    def delete(self, user_id: int, record_id: int) -> bool:
        """Delete a record by id. Returns whether a row was removed."""
        rows = self.db.query(self.model).filter(
            self.model.id == record_id,
            self.model.user_id == user_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return rows > 0


class WeightRecords(RecordService):
    model = models.Weight
    fields = ("weight", "notes")
    required = ("weight",)


class MeasurementRecords(RecordService):
    model = models.Measurement
    fields = ("chest", "waist", "hips", "thigh", "arm", "notes")
