"""In-memory cycle and symptom records consumed by the tracking engines.

These are plain dataclasses rather than pydantic models: the persistence
layer hands over rows that have already been validated on the way in, and
the engines only need attribute access.  Dates are normalised to day
granularity on construction.  A malformed date, an end date before the
start date, or a repeated symptom name raises ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from src.models.tracking import ExerciseLevel, FlowIntensity, Mood, SymptomName


class CycleDateError(ValueError):
    """Raised when a cycle's end date falls before its start date."""


def as_day(value: date | datetime | str) -> date:
    """Truncate a date, datetime, or ISO-8601 string to a calendar date.

    Args:
        value: ``date``, ``datetime`` or string such as ``"2026-02-01"`` or
               ``"2026-02-01T08:30:00Z"``.

    Returns:
        The calendar date.

    Raises:
        ValueError: If a string is not a valid ISO date.
        TypeError:  For any other type.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "T" in text or " " in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


@dataclass
class CycleRecord:
    """A single menstrual cycle as stored for one user.

    Attributes:
        start_date:     First day of the period.
        end_date:       Last day of the period (optional).
        cycle_length:   Days since the previous actual cycle started; None
                        for the first cycle a user logs.
        period_length:  Inclusive day span ``end_date - start_date + 1``.
        flow_intensity: Flow for this period.
        is_predicted:   True for system projections; user-entered cycles are
                        always False.
        user_id:        Owner.
        cycle_id:       Identifier in the database.
        notes:          Free text.
    """

    start_date: date
    end_date: date | None = None
    cycle_length: int | None = None
    period_length: int | None = None
    flow_intensity: FlowIntensity = FlowIntensity.moderate
    is_predicted: bool = False
    user_id: UUID | None = None
    cycle_id: UUID | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        self.start_date = as_day(self.start_date)
        if self.end_date is not None:
            self.end_date = as_day(self.end_date)
            if self.end_date < self.start_date:
                raise CycleDateError(
                    f"Period end {self.end_date} is before its start {self.start_date}"
                )
        self.flow_intensity = FlowIntensity(self.flow_intensity)

    @property
    def is_actual(self) -> bool:
        return not self.is_predicted


@dataclass
class SymptomEntry:
    """One symptom reported in a daily log (severity 1 = barely noticeable, 5 = severe)."""

    name: SymptomName
    severity: int = 3

    def __post_init__(self) -> None:
        self.name = SymptomName(self.name)


@dataclass
class SymptomLog:
    """A single day's wellness log.

    Attributes:
        log_date:     Calendar date (one log per user per day).
        symptoms:     Symptoms reported that day, names unique.
        mood:         Overall mood, or None if not recorded.
        energy_level: 1–10, or None if not recorded.
        sleep_hours:  Hours slept, or None if not recorded.
        water_intake: Glasses of water.
        exercise:     Exercise intensity.
        user_id:      Owner.
        log_id:       Identifier in the database.
        notes:        Free text.
    """

    log_date: date
    symptoms: list[SymptomEntry] = field(default_factory=list)
    mood: Mood | None = Mood.okay
    energy_level: int | None = 5
    sleep_hours: float | None = None
    water_intake: int = 0
    exercise: ExerciseLevel = ExerciseLevel.none
    user_id: UUID | None = None
    log_id: UUID | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        self.log_date = as_day(self.log_date)
        names = [entry.name for entry in self.symptoms]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate symptom names in log for {self.log_date}")
        self.mood = Mood(self.mood) if self.mood else None
        self.exercise = ExerciseLevel(self.exercise)
