"""Blosom cycle and symptom analytics.

Pure, stateless routines over a user's already-fetched records.  Cycle and
symptom data is health data: callers must scope every input to the
requesting user before calling in.

Core modules:
    cycle_predictor — Next cycle start, length and confidence
    stats           — Cycle statistics and symptom statistics
    cycle_log       — Derive cycle / period lengths on create and edit
    symptom_log     — One-log-per-day rule for daily symptom logs
    selection       — Scope, sort, limit, window and page the input records
    records         — CycleRecord / SymptomLog dataclasses
    rounding        — Shared half-up rounding
    config_loader   — Load/validate/hot-reload tracking_config.yaml
"""

from src.tracking.config_loader import TrackingConfig, get_tracking_config
from src.tracking.cycle_predictor import CyclePrediction, CyclePredictor, predict_next_cycle
from src.tracking.records import CycleRecord, SymptomEntry, SymptomLog
from src.tracking.stats import (
    CycleStats,
    StatsAggregator,
    SymptomFrequency,
    SymptomStats,
    compute_cycle_stats,
    compute_symptom_stats,
)

__all__ = [
    "CyclePredictor",
    "CyclePrediction",
    "predict_next_cycle",
    "StatsAggregator",
    "CycleStats",
    "SymptomStats",
    "SymptomFrequency",
    "compute_cycle_stats",
    "compute_symptom_stats",
    "CycleRecord",
    "SymptomLog",
    "SymptomEntry",
    "TrackingConfig",
    "get_tracking_config",
]
