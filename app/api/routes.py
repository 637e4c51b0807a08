from datetime import datetime
import math
import re

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.electricity import SaveOutcome, list_readings, save_reading

router = APIRouter()

# up to two fractional digits, e.g. "100", "100.5", "100.25"
READING_PATTERN = re.compile(r"^-?\d+(\.\d{1,2})?$")


@router.get("/health")
def health():
    return {"status": "ok"}


def _parse_reading(value, field: str) -> float:
    text = str(value).strip()
    if not READING_PATTERN.match(text):
        raise ValueError(f"{field} must be a number with at most 2 decimal places")
    value = float(text)
    # very long digit strings overflow to inf, which JSON cannot carry
    if not math.isfinite(value):
        raise ValueError(f"{field} is out of range")
    return value


class ReadingSubmission(BaseModel):
    date: str
    electricity: float
    diff: float = 0
    id: int | None = None

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v):
        text = str(v).strip()
        try:
            datetime.strptime(text, "%Y-%m-%d")
        except ValueError:
            raise ValueError("date must be a calendar date formatted as YYYY-MM-DD")
        # strptime accepts single-digit months/days
        if len(text) != 10:
            raise ValueError("date must be a calendar date formatted as YYYY-MM-DD")
        return text

    @field_validator("electricity", mode="before")
    @classmethod
    def check_electricity(cls, v):
        if v is None or isinstance(v, bool) or str(v).strip().startswith("-"):
            raise ValueError("electricity must be a non-negative number")
        return _parse_reading(v, "electricity")

    @field_validator("diff", mode="before")
    @classmethod
    def check_diff(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0
        return _parse_reading(v, "diff")

    @field_validator("id")
    @classmethod
    def check_id(cls, v):
        if v is not None and v < 1:
            raise ValueError("id must be a positive integer")
        return v


@router.post("/electricity")
def submit_reading(req: ReadingSubmission, db: Session = Depends(get_db)):
    """
    Record a daily electricity reading.

    Without `id` a new row is inserted, unless a reading for the same date
    already exists. With `id` the matching row is overwritten.
    """
    result = save_reading(db, req.date, req.electricity, diff=req.diff, id=req.id)
    if result.outcome == SaveOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.message)
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.message)

    record = result.record
    return {
        "success": True,
        "updated": result.outcome == SaveOutcome.UPDATED,
        "message": result.message,
        "record": {
            "id": record.id,
            "date": record.date,
            "electricity": record.electricity,
            "diff": record.diff,
        },
    }


@router.get("/electricity")
def get_readings(db: Session = Depends(get_db)):
    return {"list": list_readings(db)}
