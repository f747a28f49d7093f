"""Descriptive statistics over a user's cycles and symptom logs.

Two independent routines:

- cycle stats:   averages and extremes of cycle / period lengths, plus the
                 number of cycles outside the normal 21–35 day window.
- symptom stats: per-symptom frequency and severity, mood histogram, and
                 average energy and sleep over a window of daily logs.

Both return None for an empty input ("nothing logged yet"), which callers
report distinctly from "logged, but no usable lengths".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from src.models.tracking import Mood, SymptomName
from src.tracking.config_loader import TrackingConfig, get_tracking_config
from src.tracking.records import CycleRecord, SymptomLog
from src.tracking.rounding import round_half_up

logger = logging.getLogger("blosom.tracking.stats")


@dataclass(frozen=True)
class CycleStats:
    """Summary of the most recent actual cycles.

    Every average/extreme is None when no record carries the underlying value.
    """

    total_cycles_logged: int
    average_cycle_length: int | None
    shortest_cycle: int | None
    longest_cycle: int | None
    average_period_length: int | None
    irregular_cycles: int
    last_cycle_date: date | None


@dataclass(frozen=True)
class SymptomFrequency:
    """How often and how badly one symptom showed up in the window.

    Attributes:
        name:             Symptom.
        count:            Logs the symptom appeared in.
        average_severity: Mean severity, one decimal.
        frequency:        Percentage of logged days it appeared on.
    """

    name: SymptomName
    count: int
    average_severity: float
    frequency: int


@dataclass(frozen=True)
class SymptomStats:
    total_logs_in_period: int
    top_symptoms: list[SymptomFrequency] = field(default_factory=list)
    mood_distribution: dict[Mood, int] = field(default_factory=dict)
    average_energy_level: float | None = None
    average_sleep_hours: float | None = None


@dataclass
class _SymptomTally:
    count: int = 0
    total_severity: int = 0


class StatsAggregator:
    """Compute cycle and symptom statistics.

    Usage::

        aggregator = StatsAggregator()
        cycle_stats = aggregator.cycle_stats(recent_actual_cycles)
        symptom_stats = aggregator.symptom_stats(logs_in_window)
    """

    def __init__(self, config: TrackingConfig | None = None) -> None:
        self._config = config or get_tracking_config()

    def cycle_stats(self, cycles: Sequence[CycleRecord]) -> CycleStats | None:
        """Summarise actual cycles, most recent first, already limited by the caller.

        Args:
            cycles: Actual cycle records (``is_predicted`` False).

        Returns:
            CycleStats, or None if no cycles were given.
        """
        if not cycles:
            logger.info("No cycles logged; skipping cycle stats")
            return None

        cs = self._config.cycle_stats
        cycle_lengths = [c.cycle_length for c in cycles if c.cycle_length is not None]
        period_lengths = [c.period_length for c in cycles if c.period_length is not None]

        return CycleStats(
            total_cycles_logged=len(cycles),
            average_cycle_length=_mean_days(cycle_lengths),
            shortest_cycle=min(cycle_lengths) if cycle_lengths else None,
            longest_cycle=max(cycle_lengths) if cycle_lengths else None,
            average_period_length=_mean_days(period_lengths),
            irregular_cycles=sum(1 for length in cycle_lengths if cs.is_irregular(length)),
            last_cycle_date=cycles[0].start_date,
        )

    def symptom_stats(self, logs: Sequence[SymptomLog]) -> SymptomStats | None:
        """Summarise the symptom logs of one window.

        Note the two averages use different denominators: energy is divided
        by every log in the window, sleep only by the logs that recorded it.

        Args:
            logs: Logs already filtered to the window, in any order.

        Returns:
            SymptomStats, or None if the window holds no logs.
        """
        if not logs:
            logger.info("No symptom logs in window; skipping symptom stats")
            return None

        tallies: dict[SymptomName, _SymptomTally] = {}
        mood_counts: dict[Mood, int] = {}
        total_energy = 0
        total_sleep = 0.0
        sleep_count = 0

        for log in logs:
            for symptom in log.symptoms:
                tally = tallies.setdefault(symptom.name, _SymptomTally())
                tally.count += 1
                tally.total_severity += symptom.severity

            if log.mood:
                mood_counts[log.mood] = mood_counts.get(log.mood, 0) + 1

            if log.energy_level is not None:
                total_energy += log.energy_level
            if log.sleep_hours is not None:
                total_sleep += log.sleep_hours
                sleep_count += 1

        total_logs = len(logs)
        frequencies = [
            SymptomFrequency(
                name=name,
                count=tally.count,
                average_severity=round_half_up(tally.total_severity / tally.count, 1),
                frequency=round_half_up(tally.count * 100 / total_logs),
            )
            for name, tally in tallies.items()
        ]
        # sorted() is stable: equal counts keep first-seen order
        top = sorted(frequencies, key=lambda f: f.count, reverse=True)
        top = top[: self._config.symptom_stats.top_symptoms_limit]

        return SymptomStats(
            total_logs_in_period=total_logs,
            top_symptoms=top,
            mood_distribution=mood_counts,
            average_energy_level=round_half_up(total_energy / total_logs, 1),
            average_sleep_hours=(
                round_half_up(total_sleep / sleep_count, 1) if sleep_count else None
            ),
        )


def _mean_days(values: list[int]) -> int | None:
    if not values:
        return None
    return round_half_up(sum(values) / len(values))


def compute_cycle_stats(recent_actual_cycles: Sequence[CycleRecord]) -> CycleStats | None:
    """Cycle stats with the global tracking config."""
    return StatsAggregator().cycle_stats(recent_actual_cycles)


def compute_symptom_stats(logs_in_window: Sequence[SymptomLog]) -> SymptomStats | None:
    """Symptom stats with the global tracking config."""
    return StatsAggregator().symptom_stats(logs_in_window)
