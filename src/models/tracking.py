"""Pydantic models for manual tracking: menstrual cycles, daily symptom logs,
and the prediction / statistics summaries derived from them."""

from __future__ import annotations

import uuid
from datetime import date
from enum import Enum

from pydantic import Field, field_validator, model_validator

from src.models.base import BlosomBase, CamelResponse, TimestampMixin

NO_CYCLES_MESSAGE = "No cycles logged yet"
NO_LOGS_MESSAGE = "No logs found in this period"


# ---------- Enums ----------

class FlowIntensity(str, Enum):
    light = "light"
    moderate = "moderate"
    heavy = "heavy"
    spotting = "spotting"


class Mood(str, Enum):
    great = "great"
    good = "good"
    okay = "okay"
    bad = "bad"
    terrible = "terrible"


class ExerciseLevel(str, Enum):
    none = "none"
    light = "light"
    moderate = "moderate"
    intense = "intense"


class SymptomName(str, Enum):
    # Physical
    cramps = "cramps"
    bloating = "bloating"
    headache = "headache"
    fatigue = "fatigue"
    acne = "acne"
    hair_loss = "hair_loss"
    weight_gain = "weight_gain"
    nausea = "nausea"
    back_pain = "back_pain"
    breast_tenderness = "breast_tenderness"
    # Emotional
    mood_swings = "mood_swings"
    anxiety = "anxiety"
    depression = "depression"
    irritability = "irritability"
    brain_fog = "brain_fog"
    # PCOD specific
    irregular_period = "irregular_period"
    heavy_bleeding = "heavy_bleeding"
    spotting = "spotting"
    pelvic_pain = "pelvic_pain"
    increased_hair_growth = "increased_hair_growth"
    sleep_issues = "sleep_issues"
    food_cravings = "food_cravings"


class PredictionConfidence(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


# ---------- Menstrual Cycles ----------

class CycleBase(BlosomBase):
    start_date: date
    end_date: date | None = None
    flow_intensity: FlowIntensity = FlowIntensity.moderate
    notes: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "CycleBase":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class CycleCreate(CycleBase):
    pass


class CycleUpdate(BlosomBase):
    start_date: date | None = None
    end_date: date | None = None
    cycle_length: int | None = Field(default=None, ge=0)
    flow_intensity: FlowIntensity | None = None
    notes: str | None = Field(default=None, max_length=500)


class CycleRead(CycleBase, TimestampMixin):
    cycle_id: uuid.UUID | None = None
    user_id: uuid.UUID
    cycle_length: int | None = Field(default=None, ge=0)
    period_length: int | None = Field(default=None, ge=0)
    is_predicted: bool = False


# ---------- Symptom Logs ----------

class SymptomEntryIn(BlosomBase):
    name: SymptomName
    severity: int = Field(default=3, ge=1, le=5)


def _unique_symptom_names(symptoms: list[SymptomEntryIn]) -> list[SymptomEntryIn]:
    seen: set[SymptomName] = set()
    for entry in symptoms:
        if entry.name in seen:
            raise ValueError(f"Symptom '{entry.name.value}' is listed more than once")
        seen.add(entry.name)
    return symptoms


class SymptomLogBase(BlosomBase):
    symptoms: list[SymptomEntryIn] = Field(default_factory=list)
    mood: Mood = Mood.okay
    energy_level: int = Field(default=5, ge=1, le=10)
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    water_intake: int = Field(default=0, ge=0)
    exercise: ExerciseLevel = ExerciseLevel.none
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("symptoms")
    @classmethod
    def _check_symptoms(cls, symptoms: list[SymptomEntryIn]) -> list[SymptomEntryIn]:
        return _unique_symptom_names(symptoms)


class SymptomLogCreate(SymptomLogBase):
    log_date: date | None = None  # defaults to today


class SymptomLogUpdate(BlosomBase):
    symptoms: list[SymptomEntryIn] | None = None
    mood: Mood | None = None
    energy_level: int | None = Field(default=None, ge=1, le=10)
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    water_intake: int | None = Field(default=None, ge=0)
    exercise: ExerciseLevel | None = None
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("symptoms")
    @classmethod
    def _check_symptoms(
        cls, symptoms: list[SymptomEntryIn] | None
    ) -> list[SymptomEntryIn] | None:
        return None if symptoms is None else _unique_symptom_names(symptoms)


class SymptomLogRead(SymptomLogBase, TimestampMixin):
    log_id: uuid.UUID | None = None
    user_id: uuid.UUID
    log_date: date


# ---------- Summaries ----------

class PredictionRead(CamelResponse):
    predicted_start_date: date
    predicted_cycle_length: int
    confidence: PredictionConfidence
    based_on_cycles: int


class CycleStatsRead(CamelResponse):
    total_cycles_logged: int
    average_cycle_length: int | None = None
    shortest_cycle: int | None = None
    longest_cycle: int | None = None
    average_period_length: int | None = None
    irregular_cycles: int = 0
    last_cycle_date: date | None = None


class SymptomFrequencyRead(CamelResponse):
    name: SymptomName
    count: int
    average_severity: float
    frequency: int


class SymptomStatsRead(CamelResponse):
    total_logs_in_period: int
    top_symptoms: list[SymptomFrequencyRead] = Field(default_factory=list)
    mood_distribution: dict[Mood, int] = Field(default_factory=dict)
    average_energy_level: float | None = None
    average_sleep_hours: float | None = None


class CycleStatsResponse(CamelResponse):
    """``stats`` is ``None`` with an explanatory message when nothing is logged."""

    stats: CycleStatsRead | None = None
    message: str | None = None

    @classmethod
    def from_result(cls, stats: object | None) -> "CycleStatsResponse":
        if stats is None:
            return cls(stats=None, message=NO_CYCLES_MESSAGE)
        return cls(stats=CycleStatsRead.model_validate(stats))


class SymptomStatsResponse(CamelResponse):
    stats: SymptomStatsRead | None = None
    message: str | None = None

    @classmethod
    def from_result(cls, stats: object | None) -> "SymptomStatsResponse":
        if stats is None:
            return cls(stats=None, message=NO_LOGS_MESSAGE)
        return cls(stats=SymptomStatsRead.model_validate(stats))
