"""Creating and editing daily symptom logs.

A user keeps at most one log per calendar day.  A second log for a day that
already has one is rejected; the caller should update the existing log.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Sequence
from uuid import UUID

from src.models.tracking import SymptomLogCreate, SymptomLogUpdate
from src.tracking.records import SymptomEntry, SymptomLog, as_day

logger = logging.getLogger("blosom.tracking.symptom_log")


class DuplicateLogError(ValueError):
    """Raised when a log already exists for the requested day.

    Attributes:
        log_date:        The day that is already logged.
        existing_log_id: Identifier of the log to update instead.
    """

    def __init__(self, log_date: date, existing_log_id: UUID | None = None) -> None:
        self.log_date = log_date
        self.existing_log_id = existing_log_id
        super().__init__(
            f"A log for {log_date.isoformat()} already exists. "
            "Please update the existing log instead."
        )


def ensure_unique_log_day(existing_logs: Sequence[SymptomLog], log_date: date) -> None:
    """Reject a new log for a day the user has already logged.

    Args:
        existing_logs: The user's logs (any window containing ``log_date``).
        log_date:      Day of the new log.

    Raises:
        DuplicateLogError: If a log for that day exists.
    """
    day = as_day(log_date)
    for log in existing_logs:
        if log.log_date == day:
            logger.info("Rejected duplicate symptom log for %s", day)
            raise DuplicateLogError(day, log.log_id)


def build_symptom_log(
    user_id: UUID,
    payload: SymptomLogCreate,
    existing_logs: Sequence[SymptomLog],
    today: date | None = None,
    log_id: UUID | None = None,
) -> SymptomLog:
    """Create a daily log after checking the one-per-day rule.

    Args:
        user_id:       Owner of the log.
        payload:       Validated create request; its date defaults to ``today``.
        existing_logs: The user's existing logs.
        today:         Reference date (defaults to ``date.today()``).
        log_id:        Identifier assigned by the persistence layer, if known.

    Raises:
        DuplicateLogError: If the day is already logged.
    """
    log_date = payload.log_date or today or date.today()
    ensure_unique_log_day(existing_logs, log_date)
    return SymptomLog(
        log_date=log_date,
        symptoms=[SymptomEntry(name=s.name, severity=s.severity) for s in payload.symptoms],
        mood=payload.mood,
        energy_level=payload.energy_level,
        sleep_hours=payload.sleep_hours,
        water_intake=payload.water_intake,
        exercise=payload.exercise,
        user_id=user_id,
        log_id=log_id,
        notes=payload.notes,
    )


def apply_symptom_log_update(log: SymptomLog, changes: SymptomLogUpdate) -> SymptomLog:
    """Return ``log`` with the fields set in ``changes`` applied.

    The log's day is fixed; move a log by deleting and recreating it.
    """
    updates = changes.model_dump(exclude_unset=True)
    if "symptoms" in updates:
        updates["symptoms"] = [
            SymptomEntry(name=s.name, severity=s.severity) for s in changes.symptoms or []
        ]
    for key in ("mood", "water_intake", "exercise", "energy_level"):
        if key in updates and updates[key] is None:
            del updates[key]
    return dataclasses.replace(log, **updates)
