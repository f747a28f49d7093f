"""Creating and editing cycle records.

Cycle length is derived once, when a cycle is logged, from the most recent
earlier actual cycle.  Period length follows the record's own dates and is
recomputed whenever they change.  Editing or deleting one cycle never
touches the lengths stored on other cycles.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Sequence
from uuid import UUID

from src.models.tracking import CycleCreate, CycleUpdate
from src.tracking.records import CycleDateError, CycleRecord

logger = logging.getLogger("blosom.tracking.cycle_log")


def compute_cycle_length(previous_start: date, start: date) -> int:
    """Days from the previous cycle's start to this cycle's start."""
    return (start - previous_start).days


def compute_period_length(start: date, end: date) -> int:
    """Inclusive number of period days.

    Raises:
        CycleDateError: If ``end`` is before ``start``.
    """
    if end < start:
        raise CycleDateError(f"Period end {end} is before its start {start}")
    return (end - start).days + 1


def find_previous_cycle(
    cycles: Sequence[CycleRecord], start: date
) -> CycleRecord | None:
    """Return the latest actual cycle that started strictly before ``start``.

    Args:
        cycles: The user's cycle records, in any order.
        start:  Start date of the cycle being logged.
    """
    earlier = [c for c in cycles if c.is_actual and c.start_date < start]
    return max(earlier, key=lambda c: c.start_date, default=None)


def build_actual_cycle(
    user_id: UUID,
    payload: CycleCreate,
    history: Sequence[CycleRecord],
    cycle_id: UUID | None = None,
) -> CycleRecord:
    """Create a user-entered cycle with its derived lengths.

    Args:
        user_id:  Owner of the new cycle.
        payload:  Validated create request.
        history:  The user's existing cycle records.
        cycle_id: Identifier assigned by the persistence layer, if known.

    Returns:
        The new CycleRecord; ``history`` is left untouched.
    """
    previous = find_previous_cycle(history, payload.start_date)
    cycle_length = (
        compute_cycle_length(previous.start_date, payload.start_date) if previous else None
    )
    period_length = (
        compute_period_length(payload.start_date, payload.end_date)
        if payload.end_date is not None
        else None
    )
    if previous is None:
        logger.info("First cycle for user %s; cycle length left unset", user_id)

    return CycleRecord(
        start_date=payload.start_date,
        end_date=payload.end_date,
        cycle_length=cycle_length,
        period_length=period_length,
        flow_intensity=payload.flow_intensity,
        is_predicted=False,
        user_id=user_id,
        cycle_id=cycle_id,
        notes=payload.notes,
    )


def apply_cycle_update(cycle: CycleRecord, changes: CycleUpdate) -> CycleRecord:
    """Return ``cycle`` with the fields set in ``changes`` applied.

    Period length is recomputed when either date changes and an end date is
    present.  Cycle length only changes when given explicitly.

    Raises:
        CycleDateError: If the resulting end date is before the start date.
    """
    updates = changes.model_dump(exclude_unset=True)
    for key in ("start_date", "flow_intensity"):
        if key in updates and updates[key] is None:
            del updates[key]  # required fields cannot be cleared

    updated = dataclasses.replace(cycle, **updates)
    if "start_date" in updates or "end_date" in updates:
        updated.period_length = (
            compute_period_length(updated.start_date, updated.end_date)
            if updated.end_date is not None
            else None
        )
    return updated
