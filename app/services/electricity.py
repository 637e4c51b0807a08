import enum
import logging
from dataclasses import dataclass

from sqlalchemy import insert, literal, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.dailyelectricity import DailyElectricity

logger = logging.getLogger(__name__)


class SaveOutcome(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    FAILED = "failed"


MESSAGES = {
    SaveOutcome.CREATED: "Reading saved",
    SaveOutcome.UPDATED: "Reading updated",
    SaveOutcome.DUPLICATE: "A reading for this date already exists",
    SaveOutcome.NOT_FOUND: "Reading not found",
    SaveOutcome.FAILED: "Failed to save reading",
}


@dataclass
class SaveResult:
    outcome: SaveOutcome
    record: DailyElectricity | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in (SaveOutcome.CREATED, SaveOutcome.UPDATED)

    @property
    def message(self) -> str:
        return MESSAGES[self.outcome]


def _find_by_date(session: Session, date: str) -> DailyElectricity | None:
    stmt = select(DailyElectricity).where(DailyElectricity.date == date).order_by(DailyElectricity.id.desc())
    return session.scalars(stmt).first()


def _insert_if_absent(session: Session, date: str, electricity: float, diff: float) -> bool:
    """Insert a row for `date` unless one already exists, as a single statement.

    Returns True when a row was written.
    """
    table = DailyElectricity.__table__
    taken = select(table.c.id).where(table.c.date == date).correlate(None).exists()
    candidate = select(literal(date), literal(electricity), literal(diff)).where(~taken)
    result = session.execute(
        insert(table).from_select(["date", "electricity", "diff"], candidate)
    )
    return result.rowcount == 1


def _update(session: Session, record_id: int, date: str, electricity: float, diff: float) -> SaveResult:
    record = session.get(DailyElectricity, record_id)
    if record is None:
        logger.warning("No reading with id=%s to update", record_id)
        return SaveResult(SaveOutcome.NOT_FOUND)
    try:
        record.date = date
        record.electricity = electricity
        record.diff = diff
        session.commit()
        session.refresh(record)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to update reading id=%s", record_id)
        return SaveResult(SaveOutcome.FAILED)
    logger.info("Updated reading id=%s date=%s electricity=%s diff=%s", record_id, date, electricity, diff)
    return SaveResult(SaveOutcome.UPDATED, record)


def save_reading(
    session: Session,
    date: str,
    electricity: float,
    diff: float = 0,
    id: int | None = None,
) -> SaveResult:
    """Insert a new daily reading, or update an existing one when `id` is given.

    - With `id`: overwrite date/electricity/diff of that row. The date is not
      checked against other rows.
    - Without `id`: reject if a reading for `date` exists, otherwise insert.
    """
    if id is not None:
        return _update(session, id, date, electricity, diff)

    if _find_by_date(session, date) is not None:
        logger.warning("Reading for %s already exists", date)
        return SaveResult(SaveOutcome.DUPLICATE)

    try:
        inserted = _insert_if_absent(session, date, electricity, diff)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to insert reading for %s", date)
        return SaveResult(SaveOutcome.FAILED)

    if not inserted:
        # another request wrote this date between the lookup and the insert
        logger.warning("Reading for %s already exists", date)
        return SaveResult(SaveOutcome.DUPLICATE)

    record = _find_by_date(session, date)
    logger.info("Saved reading id=%s date=%s electricity=%s diff=%s", record.id, date, electricity, diff)
    return SaveResult(SaveOutcome.CREATED, record)


def list_readings(session: Session) -> list[dict]:
    """Return id, date, electricity and diff of every stored reading."""
    stmt = select(
        DailyElectricity.id,
        DailyElectricity.date,
        DailyElectricity.electricity,
        DailyElectricity.diff,
    )
    return [dict(r) for r in session.execute(stmt).mappings().all()]
