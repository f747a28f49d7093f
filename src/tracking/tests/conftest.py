"""Shared fixtures and record builders for tracking tests."""

from __future__ import annotations

from datetime import date, timedelta
from uuid import UUID, uuid4

import pytest

from src.models.tracking import Mood
from src.tracking.config_loader import TrackingConfig, load_tracking_config
from src.tracking.records import CycleRecord, SymptomEntry, SymptomLog

# Canonical test users
TEST_USER_ID = UUID("12345678-1234-5678-1234-567812345678")
OTHER_USER_ID = UUID("87654321-4321-8765-4321-876543218765")
TEST_DATE = date(2026, 2, 23)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tracking_config() -> TrackingConfig:
    """Load the real tracking config for tests."""
    return load_tracking_config()


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------


def make_cycle(
    start: date,
    cycle_length: int | None = None,
    period_length: int | None = None,
    is_predicted: bool = False,
    user_id: UUID = TEST_USER_ID,
) -> CycleRecord:
    return CycleRecord(
        start_date=start,
        end_date=start + timedelta(days=period_length - 1) if period_length else None,
        cycle_length=cycle_length,
        period_length=period_length,
        is_predicted=is_predicted,
        user_id=user_id,
        cycle_id=uuid4(),
    )


def build_history(lengths: list[int], latest_start: date = TEST_DATE) -> list[CycleRecord]:
    """Actual cycles, most recent first, whose cycle lengths are ``lengths``.

    Each start date is the next (more recent) start minus its cycle length.
    """
    cycles = []
    start = latest_start
    for length in lengths:
        cycles.append(make_cycle(start, cycle_length=length, period_length=5))
        start -= timedelta(days=length)
    return cycles


def make_log(
    day: date,
    symptoms: dict[str, int] | None = None,
    mood: Mood | str | None = Mood.okay,
    energy_level: int | None = 5,
    sleep_hours: float | None = None,
    user_id: UUID = TEST_USER_ID,
) -> SymptomLog:
    return SymptomLog(
        log_date=day,
        symptoms=[SymptomEntry(name=n, severity=s) for n, s in (symptoms or {}).items()],
        mood=mood,
        energy_level=energy_level,
        sleep_hours=sleep_hours,
        user_id=user_id,
        log_id=uuid4(),
    )
