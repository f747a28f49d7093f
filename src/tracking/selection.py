"""Selecting the records each routine runs on.

In-memory counterparts of the persistence queries that feed the predictor,
the aggregator and the list views: scope to one user, newest first, actual
cycles only, last N cycles, logs within a trailing window or an explicit
date range, and page slicing.

History limits and the trailing window default to the values in
``tracking_config.yaml``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Generic, Iterable, Protocol, Sequence, TypeVar
from uuid import UUID

from src.tracking.config_loader import TrackingConfig, get_tracking_config
from src.tracking.records import CycleRecord, SymptomLog, as_day


class _Owned(Protocol):
    user_id: UUID | None


R = TypeVar("R", bound=_Owned)
T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing plus the counts a client needs to page through it."""

    items: list[T]
    total: int
    page: int
    pages: int


def scope_to_user(records: Iterable[R], user_id: UUID) -> list[R]:
    """Keep only the records owned by ``user_id``."""
    return [r for r in records if r.user_id == user_id]


def most_recent_first(cycles: Iterable[CycleRecord]) -> list[CycleRecord]:
    """Sort cycles by start date, newest first."""
    return sorted(cycles, key=lambda c: c.start_date, reverse=True)


def recent_actual_cycles(
    cycles: Iterable[CycleRecord],
    limit: int | None = None,
    config: TrackingConfig | None = None,
) -> list[CycleRecord]:
    """The ``limit`` most recent user-entered cycles, newest first.

    Args:
        cycles: The user's cycle records, in any order.
        limit:  Maximum number returned; defaults to
                ``cycle_prediction.history_limit`` (6).
        config: Tracking config; the global config when omitted.

    Raises:
        ValueError: If ``limit`` is not positive.
    """
    if limit is None:
        limit = (config or get_tracking_config()).prediction.history_limit
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return most_recent_first(c for c in cycles if c.is_actual)[:limit]


def stats_history(
    cycles: Iterable[CycleRecord], config: TrackingConfig | None = None
) -> list[CycleRecord]:
    """Actual cycles for the statistics view, capped at ``cycle_stats.history_limit`` (12)."""
    cfg = config or get_tracking_config()
    return recent_actual_cycles(cycles, cfg.cycle_stats.history_limit)


def window_start(
    days: int | None = None,
    today: date | None = None,
    config: TrackingConfig | None = None,
) -> date:
    """First day included in a trailing window of ``days`` days.

    ``days`` defaults to ``symptom_stats.default_window_days`` (30).

    Raises:
        ValueError: If ``days`` is not positive.
    """
    if days is None:
        days = (config or get_tracking_config()).symptom_stats.default_window_days
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    return (today or date.today()) - timedelta(days=days)


def logs_in_window(
    logs: Sequence[SymptomLog],
    days: int | None = None,
    today: date | None = None,
    config: TrackingConfig | None = None,
) -> list[SymptomLog]:
    """Logs dated on or after ``today - days``, in their original order."""
    start = window_start(days, today, config)
    return [log for log in logs if log.log_date >= start]


def logs_between(
    logs: Iterable[SymptomLog],
    start: date | datetime | str | None = None,
    end: date | datetime | str | None = None,
) -> list[SymptomLog]:
    """Logs dated within ``[start, end]``, newest first.

    Either bound may be omitted; both bounds are inclusive.
    """
    start_day = as_day(start) if start is not None else None
    end_day = as_day(end) if end is not None else None
    selected = [
        log
        for log in logs
        if (start_day is None or log.log_date >= start_day)
        and (end_day is None or log.log_date <= end_day)
    ]
    return sorted(selected, key=lambda log: log.log_date, reverse=True)


def paginate(items: Sequence[T], limit: int, page: int = 1) -> Page[T]:
    """Slice one page out of an already ordered listing.

    Pages are 1-based; a page past the end has no items but still reports
    ``total`` and ``pages``.

    Raises:
        ValueError: If ``limit`` or ``page`` is not positive.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    total = len(items)
    offset = (page - 1) * limit
    return Page(
        items=list(items[offset:offset + limit]),
        total=total,
        page=page,
        pages=math.ceil(total / limit),
    )
