"""Tests for creating and editing cycle records."""

from __future__ import annotations

import copy
from datetime import date

import pytest

from src.models.tracking import CycleCreate, CycleRead, CycleUpdate, FlowIntensity
from src.tracking.cycle_log import (
    CycleDateError,
    apply_cycle_update,
    build_actual_cycle,
    compute_period_length,
    find_previous_cycle,
)
from src.tracking.cycle_predictor import CyclePredictor
from src.tracking.config_loader import TrackingConfig
from src.tracking.records import CycleRecord
from src.tracking.tests.conftest import TEST_USER_ID, make_cycle


class TestBuildActualCycle:
    def test_first_cycle_has_no_cycle_length(self) -> None:
        cycle = build_actual_cycle(
            TEST_USER_ID,
            CycleCreate(start_date=date(2026, 1, 3), end_date=date(2026, 1, 7)),
            history=[],
        )
        assert cycle.cycle_length is None
        assert cycle.period_length == 5
        assert cycle.is_predicted is False
        assert cycle.user_id == TEST_USER_ID
        assert cycle.flow_intensity == FlowIntensity.moderate

    def test_cycle_length_from_previous_actual_cycle(self) -> None:
        history = [
            make_cycle(date(2026, 1, 3)),
            make_cycle(date(2025, 12, 5), cycle_length=29),
        ]
        cycle = build_actual_cycle(
            TEST_USER_ID, CycleCreate(start_date=date(2026, 2, 1)), history
        )
        assert cycle.cycle_length == 29  # Jan 3 -> Feb 1
        assert cycle.period_length is None

    def test_predicted_records_are_not_previous_cycles(self) -> None:
        history = [
            make_cycle(date(2026, 1, 28), is_predicted=True),
            make_cycle(date(2026, 1, 1)),
        ]
        cycle = build_actual_cycle(
            TEST_USER_ID, CycleCreate(start_date=date(2026, 2, 1)), history
        )
        assert cycle.cycle_length == 31

    def test_backfilled_cycle_uses_the_cycle_before_it(self) -> None:
        history = [make_cycle(date(2026, 3, 1)), make_cycle(date(2026, 1, 1))]
        cycle = build_actual_cycle(
            TEST_USER_ID, CycleCreate(start_date=date(2026, 1, 30)), history
        )
        assert cycle.cycle_length == 29
        assert find_previous_cycle(history, date(2025, 12, 1)) is None

    def test_history_is_not_modified(self) -> None:
        history = [make_cycle(date(2026, 1, 1), cycle_length=30)]
        snapshot = copy.deepcopy(history)
        build_actual_cycle(TEST_USER_ID, CycleCreate(start_date=date(2026, 1, 29)), history)
        assert history == snapshot

    def test_logged_cycles_feed_the_predictor(
        self, tracking_config: TrackingConfig
    ) -> None:
        history: list = []
        for start in (date(2026, 1, 1), date(2026, 1, 29), date(2026, 2, 28), date(2026, 3, 28)):
            history.insert(
                0, build_actual_cycle(TEST_USER_ID, CycleCreate(start_date=start), history)
            )
        # lengths: 28, 30, 28 (newest first)
        prediction = CyclePredictor(tracking_config).predict(history)
        assert prediction is not None
        assert prediction.predicted_cycle_length == 29
        assert prediction.predicted_start_date == date(2026, 4, 26)


class TestCycleCreateValidation:
    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValueError):
            CycleCreate(start_date=date(2026, 1, 10), end_date=date(2026, 1, 9))

    def test_notes_length_limit(self) -> None:
        with pytest.raises(ValueError):
            CycleCreate(start_date=date(2026, 1, 10), notes="x" * 501)


class TestApplyCycleUpdate:
    def test_end_date_recomputes_period_length(self) -> None:
        cycle = make_cycle(date(2026, 1, 1), cycle_length=28)
        updated = apply_cycle_update(cycle, CycleUpdate(end_date=date(2026, 1, 6)))
        assert updated.period_length == 6
        assert updated.cycle_length == 28
        assert cycle.period_length is None

    def test_start_date_change_recomputes_period_length(self) -> None:
        cycle = make_cycle(date(2026, 1, 1), period_length=5)
        updated = apply_cycle_update(cycle, CycleUpdate(start_date=date(2026, 1, 3)))
        assert updated.period_length == 3

    def test_clearing_end_date_clears_period_length(self) -> None:
        cycle = make_cycle(date(2026, 1, 1), period_length=5)
        updated = apply_cycle_update(cycle, CycleUpdate(end_date=None))
        assert updated.end_date is None
        assert updated.period_length is None

    def test_cycle_length_only_changes_explicitly(self) -> None:
        cycle = make_cycle(date(2026, 1, 1), cycle_length=28)
        assert apply_cycle_update(cycle, CycleUpdate(notes="tired")).cycle_length == 28
        assert apply_cycle_update(cycle, CycleUpdate(cycle_length=31)).cycle_length == 31

    def test_flow_intensity_update(self) -> None:
        cycle = make_cycle(date(2026, 1, 1))
        updated = apply_cycle_update(cycle, CycleUpdate(flow_intensity="heavy"))
        assert updated.flow_intensity == FlowIntensity.heavy

    def test_end_before_start_raises(self) -> None:
        cycle = make_cycle(date(2026, 1, 10))
        with pytest.raises(CycleDateError):
            apply_cycle_update(cycle, CycleUpdate(end_date=date(2026, 1, 2)))

    def test_period_length_is_inclusive(self) -> None:
        assert compute_period_length(date(2026, 1, 1), date(2026, 1, 1)) == 1
        assert compute_period_length(date(2026, 1, 30), date(2026, 2, 2)) == 4


class TestCycleRead:
    def test_reads_from_record(self) -> None:
        cycle = build_actual_cycle(
            TEST_USER_ID,
            CycleCreate(start_date=date(2026, 2, 1), end_date=date(2026, 2, 5), flow_intensity="light"),
            history=[make_cycle(date(2026, 1, 4))],
        )
        read = CycleRead.model_validate(cycle)
        assert read.user_id == TEST_USER_ID
        assert read.cycle_length == 28
        assert read.period_length == 5
        assert read.flow_intensity == FlowIntensity.light
        assert read.is_predicted is False


class TestCycleRecordDates:
    def test_record_with_end_before_start_rejected(self) -> None:
        with pytest.raises(CycleDateError):
            CycleRecord(start_date=date(2026, 1, 10), end_date=date(2026, 1, 9))

    def test_single_day_period_allowed(self) -> None:
        record = CycleRecord(start_date=date(2026, 1, 10), end_date="2026-01-10")
        assert record.end_date == record.start_date
