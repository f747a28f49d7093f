"""Next-cycle prediction from a user's logged cycles.

Averages the cycle lengths of the most recent actual cycles (3 by default)
and projects that many days forward from the most recent actual cycle start.
With no length-bearing cycles yet, a 28-day default is used so a user who
has logged a single period still gets a (low confidence) forecast.

Input is treated as most-recent-first; see ``selection.most_recent_first``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

from src.models.tracking import PredictionConfidence
from src.tracking.config_loader import TrackingConfig, get_tracking_config
from src.tracking.records import CycleRecord
from src.tracking.rounding import round_half_up

logger = logging.getLogger("blosom.tracking.cycle_predictor")


@dataclass(frozen=True)
class CyclePrediction:
    """Forecast for the user's next cycle.

    Attributes:
        predicted_start_date:   Expected first day of the next period.
        predicted_cycle_length: Averaged (or default) cycle length in days.
        confidence:             high / medium / low, from the history size.
        based_on_cycles:        Number of actual, length-bearing cycles seen.
    """

    predicted_start_date: date
    predicted_cycle_length: int
    confidence: PredictionConfidence
    based_on_cycles: int


class CyclePredictor:
    """Predict the next cycle start from historical cycle records.

    Usage::

        predictor = CyclePredictor()
        prediction = predictor.predict(cycles)  # most recent first
        if prediction is not None:
            print(prediction.predicted_start_date, prediction.confidence)
    """

    def __init__(self, config: TrackingConfig | None = None) -> None:
        self._config = config or get_tracking_config()

    @property
    def _pc_config(self):
        return self._config.prediction

    def predict(self, cycles: Sequence[CycleRecord]) -> CyclePrediction | None:
        """Forecast the next cycle.

        Args:
            cycles: The user's cycle records, most recent first.

        Returns:
            CyclePrediction, or None when there is no actual cycle to anchor on.
        """
        if not cycles:
            return None

        pc = self._pc_config
        actual_cycles = [
            c for c in cycles if not c.is_predicted and c.cycle_length is not None
        ]

        recent = actual_cycles[: pc.rolling_average_cycles]
        if recent:
            average_length = round_half_up(
                sum(c.cycle_length for c in recent) / len(recent)
            )
        else:
            average_length = pc.default_cycle_length

        # Anchor on the most recent actual cycle, with or without a length
        last_cycle = next((c for c in cycles if not c.is_predicted), None)
        if last_cycle is None:
            logger.debug("No actual cycle among %d records; no prediction", len(cycles))
            return None

        prediction = CyclePrediction(
            predicted_start_date=last_cycle.start_date + timedelta(days=average_length),
            predicted_cycle_length=average_length,
            confidence=self.confidence_for(len(actual_cycles)),
            based_on_cycles=len(actual_cycles),
        )
        logger.debug(
            "Predicted %s (%d days, %s) from %d cycles",
            prediction.predicted_start_date,
            average_length,
            prediction.confidence.value,
            len(actual_cycles),
        )
        return prediction

    def confidence_for(self, actual_cycle_count: int) -> PredictionConfidence:
        """Map the number of actual, length-bearing cycles to a confidence label."""
        pc = self._pc_config
        if actual_cycle_count >= pc.high_min_cycles:
            return PredictionConfidence.high
        if actual_cycle_count >= pc.medium_min_cycles:
            return PredictionConfidence.medium
        return PredictionConfidence.low


def predict_next_cycle(cycles: Sequence[CycleRecord]) -> CyclePrediction | None:
    """Predict the next cycle with the global tracking config."""
    return CyclePredictor().predict(cycles)
