"""Load, validate, and hot-reload the cycle engine configuration.

The config lives in ``cycle_config.yaml`` alongside this module, or at the
path named by the ``CYCLE_CONFIG_PATH`` setting.  It is loaded once and
cached.  Call ``reload_cycle_config()`` to re-read from disk.

Usage::

    from src.cycles.config_loader import get_cycle_config

    config = get_cycle_config()
    config.segmentation.cycle_gap_days      # 14
    config.insights.warning_window_days     # 5
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, fields
from pathlib import Path

from src.config import get_settings

logger = logging.getLogger("gutcheck.cycles.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "cycle_config.yaml"

DEFAULT_CYCLE_GAP_DAYS = 14
DEFAULT_RECENT_CYCLE_COUNT = 3
DEFAULT_WARNING_WINDOW_DAYS = 5
DEFAULT_MAX_WARNING_SIGNS = 5
DEFAULT_MIN_CYCLES_FOR_FREQUENCY = 2


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when the cycle config fails validation."""


def _require_positive_ints(section: object) -> None:
    """Reject any field of a config section that is not an integer >= 1."""
    errors = []
    for f in fields(section):
        value = getattr(section, f.name)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{f.name} must be an integer, got {value!r}")
        elif value < 1:
            errors.append(f"{f.name} = {value} must be >= 1")
    if errors:
        raise ConfigValidationError(
            f"{type(section).__name__}: " + "; ".join(errors)
        )


@dataclass(frozen=True)
class SegmentationConfig:
    """Settings for splitting period-tracking days into cycles."""

    cycle_gap_days: int = DEFAULT_CYCLE_GAP_DAYS

    def __post_init__(self) -> None:
        _require_positive_ints(self)


@dataclass(frozen=True)
class InsightConfig:
    """Settings for recent statistics and warning-sign ranking."""

    recent_cycle_count: int = DEFAULT_RECENT_CYCLE_COUNT
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS
    max_warning_signs: int = DEFAULT_MAX_WARNING_SIGNS
    min_cycles_for_frequency: int = DEFAULT_MIN_CYCLES_FOR_FREQUENCY

    def __post_init__(self) -> None:
        _require_positive_ints(self)


@dataclass(frozen=True)
class CycleEngineConfig:
    """Complete, validated cycle engine configuration.

    Attributes:
        version:       Config schema version string.
        segmentation:  Cycle segmentation parameters.
        insights:      Insight analysis parameters.
    """

    version: str = "1.0"
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
    insights: InsightConfig = field(default_factory=InsightConfig)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    import yaml  # pyyaml

    if not path.exists():
        raise FileNotFoundError(f"Cycle config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _validate_and_build(raw: dict) -> CycleEngineConfig:
    """Validate the raw YAML dict and construct a CycleEngineConfig.

    Missing keys fall back to the module defaults.  Every value must be a
    positive integer; all problems are reported together.

    Raises:
        ConfigValidationError: If any value is invalid.
    """
    errors: list[str] = []

    def _positive_int(section: dict, section_name: str, key: str, default: int) -> int:
        value = section.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{section_name}.{key} must be an integer, got {value!r}")
            return default
        if value < 1:
            errors.append(f"{section_name}.{key} = {value} must be >= 1")
            return default
        return value

    def _section(name: str) -> dict:
        section = raw.get(name) or {}
        if not isinstance(section, dict):
            errors.append(f"'{name}' must be a mapping")
            return {}
        return section

    version = str(raw.get("version", "1.0"))

    # ── Segmentation ──
    seg_raw = _section("segmentation")
    segmentation = SegmentationConfig(
        cycle_gap_days=_positive_int(
            seg_raw, "segmentation", "cycle_gap_days", DEFAULT_CYCLE_GAP_DAYS
        ),
    )

    # ── Insights ──
    ins_raw = _section("insights")
    insights = InsightConfig(
        recent_cycle_count=_positive_int(
            ins_raw, "insights", "recent_cycle_count", DEFAULT_RECENT_CYCLE_COUNT
        ),
        warning_window_days=_positive_int(
            ins_raw, "insights", "warning_window_days", DEFAULT_WARNING_WINDOW_DAYS
        ),
        max_warning_signs=_positive_int(
            ins_raw, "insights", "max_warning_signs", DEFAULT_MAX_WARNING_SIGNS
        ),
        min_cycles_for_frequency=_positive_int(
            ins_raw,
            "insights",
            "min_cycles_for_frequency",
            DEFAULT_MIN_CYCLES_FOR_FREQUENCY,
        ),
    )

    if insights.min_cycles_for_frequency > insights.recent_cycle_count:
        logger.warning(
            "min_cycles_for_frequency (%d) exceeds recent_cycle_count (%d); "
            "frequency notes will never be shown.",
            insights.min_cycles_for_frequency,
            insights.recent_cycle_count,
        )

    if errors:
        raise ConfigValidationError(
            f"cycle_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return CycleEngineConfig(
        version=version,
        segmentation=segmentation,
        insights=insights,
    )


def _default_path() -> Path:
    override = get_settings().cycle_config_path
    return Path(override) if override else _CONFIG_PATH


def load_cycle_config(path: Path | None = None) -> CycleEngineConfig:
    """Load and validate the cycle config from disk.

    Args:
        path: Override path to YAML.  Uses ``CYCLE_CONFIG_PATH`` or the
              bundled cycle_config.yaml by default.
    """
    target = path or _default_path()
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded cycle config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: CycleEngineConfig | None = None
_config_lock = threading.Lock()


def get_cycle_config() -> CycleEngineConfig:
    """Return the global CycleEngineConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_cycle_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_cycle_config()
    return _config


def reload_cycle_config(path: Path | None = None) -> CycleEngineConfig:
    """Reload the cycle config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is
    re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_cycle_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info(
        "Reloaded cycle config: %s → %s",
        old_version,
        new_config.version,
    )
    return new_config
