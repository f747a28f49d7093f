"""Load, validate, and hot-reload the Blosom tracking configuration.

The config lives in ``tracking_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_tracking_config()`` to re-read from
disk after an edit — no restart required.

Usage::

    from src.tracking.config_loader import get_tracking_config

    config = get_tracking_config()
    config.prediction.default_cycle_length   # 28
    config.cycle_stats.is_irregular(40)      # True
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger("blosom.tracking.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "tracking_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CyclePredictionConfig:
    """Next-cycle prediction settings."""

    default_cycle_length: int = 28
    rolling_average_cycles: int = 3
    history_limit: int = 6
    high_min_cycles: int = 3    # ≥ this many actual cycles = high confidence
    medium_min_cycles: int = 2  # ≥ this = medium, below = low


@dataclass
class CycleStatsConfig:
    """Cycle statistics settings."""

    history_limit: int = 12
    normal_min_days: int = 21
    normal_max_days: int = 35

    def is_irregular(self, cycle_length: int) -> bool:
        """True if the length falls outside the inclusive normal window."""
        return cycle_length < self.normal_min_days or cycle_length > self.normal_max_days


@dataclass
class SymptomStatsConfig:
    """Symptom statistics settings."""

    default_window_days: int = 30
    top_symptoms_limit: int = 10


@dataclass
class TrackingConfig:
    """Complete, validated tracking configuration.

    This is the single in-memory representation of tracking_config.yaml.
    The predictor, aggregator, and record selection helpers read from it.

    Attributes:
        version:      Config schema version string.
        prediction:   Next-cycle prediction settings.
        cycle_stats:  Cycle statistics settings.
        symptom_stats: Symptom statistics settings.
    """

    version: str
    prediction: CyclePredictionConfig
    cycle_stats: CycleStatsConfig
    symptom_stats: SymptomStatsConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracking_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracking config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> TrackingConfig:
    """Validate the raw YAML dict and construct a TrackingConfig.

    Missing keys fall back to the dataclass defaults.  Every problem found is
    collected before raising, so one run reports all of them.

    Args:
        raw: Parsed YAML dict.

    Returns:
        Validated TrackingConfig instance.

    Raises:
        ConfigValidationError: If any value is missing its type or range.
    """
    errors: list[str] = []

    def _section(key: str) -> dict:
        value = raw.get(key) or {}
        if not isinstance(value, dict):
            errors.append(f"'{key}' must be a mapping")
            return {}
        return value

    def _positive_int(d: dict, key: str, section: str, default: int) -> int:
        value: Any = d.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{section}.{key} must be an integer, got {value!r}")
            return default
        if value < 1:
            errors.append(f"{section}.{key} = {value} must be >= 1")
        return value

    version = str(raw.get("version", "1.0"))

    # ── Cycle prediction ──
    cp_raw = _section("cycle_prediction")
    conf_raw = cp_raw.get("confidence") or {}
    if not isinstance(conf_raw, dict):
        errors.append("cycle_prediction.confidence must be a mapping")
        conf_raw = {}
    prediction = CyclePredictionConfig(
        default_cycle_length=_positive_int(cp_raw, "default_cycle_length", "cycle_prediction", 28),
        rolling_average_cycles=_positive_int(cp_raw, "rolling_average_cycles", "cycle_prediction", 3),
        history_limit=_positive_int(cp_raw, "history_limit", "cycle_prediction", 6),
        high_min_cycles=_positive_int(conf_raw, "high_min_cycles", "cycle_prediction.confidence", 3),
        medium_min_cycles=_positive_int(conf_raw, "medium_min_cycles", "cycle_prediction.confidence", 2),
    )
    if prediction.medium_min_cycles > prediction.high_min_cycles:
        errors.append(
            "cycle_prediction.confidence.medium_min_cycles "
            f"({prediction.medium_min_cycles}) exceeds high_min_cycles "
            f"({prediction.high_min_cycles})"
        )
    if prediction.rolling_average_cycles > prediction.history_limit:
        logger.warning(
            "rolling_average_cycles (%d) exceeds history_limit (%d); "
            "at most %d cycles will be averaged.",
            prediction.rolling_average_cycles,
            prediction.history_limit,
            prediction.history_limit,
        )

    # ── Cycle stats ──
    cs_raw = _section("cycle_stats")
    cycle_stats = CycleStatsConfig(
        history_limit=_positive_int(cs_raw, "history_limit", "cycle_stats", 12),
        normal_min_days=_positive_int(cs_raw, "normal_min_days", "cycle_stats", 21),
        normal_max_days=_positive_int(cs_raw, "normal_max_days", "cycle_stats", 35),
    )
    if cycle_stats.normal_min_days > cycle_stats.normal_max_days:
        errors.append(
            f"cycle_stats.normal_min_days ({cycle_stats.normal_min_days}) exceeds "
            f"normal_max_days ({cycle_stats.normal_max_days})"
        )

    # ── Symptom stats ──
    ss_raw = _section("symptom_stats")
    symptom_stats = SymptomStatsConfig(
        default_window_days=_positive_int(ss_raw, "default_window_days", "symptom_stats", 30),
        top_symptoms_limit=_positive_int(ss_raw, "top_symptoms_limit", "symptom_stats", 10),
    )

    if errors:
        raise ConfigValidationError(
            f"tracking_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackingConfig(
        version=version,
        prediction=prediction,
        cycle_stats=cycle_stats,
        symptom_stats=symptom_stats,
        _raw=raw,
    )


def load_tracking_config(path: Path | None = None) -> TrackingConfig:
    """Load and validate the tracking config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracking_config.yaml by default.

    Returns:
        Validated TrackingConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{target} must contain a mapping at the top level")
    config = _validate_and_build(raw)
    logger.info("Loaded tracking config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackingConfig | None = None
_config_lock = threading.Lock()


def _configured_path() -> Path | None:
    from src.config import get_settings

    return get_settings().tracking_config_path


def get_tracking_config() -> TrackingConfig:
    """Return the global TrackingConfig singleton, loading it on first call.

    Honours ``Settings.tracking_config_path`` when set.  Thread-safe.

    Returns:
        The current TrackingConfig instance.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_tracking_config(_configured_path())
    return _config


def reload_tracking_config(path: Path | None = None) -> TrackingConfig:
    """Reload the tracking config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Args:
        path: Override path to YAML. Defaults to the configured or bundled file.

    Returns:
        The newly loaded TrackingConfig.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_tracking_config(path or _configured_path())  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info(
        "Reloaded tracking config: %s → %s",
        old_version,
        new_config.version,
    )
    return new_config
