"""End-to-end cycle insight pipeline.

Validates what the record source hands over, segments cycles, and analyses
them in one call::

    snapshot = compute_insights(records, as_of=date(2026, 3, 1), catalog=catalog)

Callers with long histories can trim the input first with
``records_in_window``.
"""

from __future__ import annotations

import calendar
import logging
from collections import Counter
from collections.abc import Iterable
from datetime import date

from src.cycles.catalog import SymptomCatalog
from src.cycles.config_loader import CycleEngineConfig, get_cycle_config
from src.cycles.insights import InsightAnalyzer, InsightSnapshot
from src.cycles.segmenter import CycleSegmenter
from src.models.tracking import DailyRecord

logger = logging.getLogger("gutcheck.cycles.engine")


class DuplicateRecordError(ValueError):
    """Raised when a record source yields more than one record per date."""

    def __init__(self, dates: list[date]) -> None:
        self.dates = dates
        listed = ", ".join(d.isoformat() for d in dates)
        super().__init__(f"Multiple daily records for the same date: {listed}")


def ensure_unique_dates(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    """Return ``records`` as a list, checking there is one record per date.

    Raises:
        DuplicateRecordError: Listing every duplicated date, oldest first.
    """
    materialised = list(records)
    counts = Counter(r.date for r in materialised)
    duplicates = sorted(d for d, n in counts.items() if n > 1)
    if duplicates:
        raise DuplicateRecordError(duplicates)
    return materialised


def records_in_window(
    records: Iterable[DailyRecord], as_of: date, months: int
) -> list[DailyRecord]:
    """Keep records from the last ``months`` calendar months up to ``as_of``.

    The window starts on the same day-of-month ``months`` months earlier,
    clamped to the end of shorter months.
    """
    if months < 1:
        raise ValueError(f"months must be >= 1, got {months}")

    year, month = divmod(as_of.year * 12 + (as_of.month - 1) - months, 12)
    month += 1
    day = min(as_of.day, calendar.monthrange(year, month)[1])
    start = date(year, month, day)

    return [r for r in records if start <= r.date <= as_of]


def compute_insights(
    records: Iterable[DailyRecord],
    as_of: date,
    catalog: SymptomCatalog | None = None,
    config: CycleEngineConfig | None = None,
) -> InsightSnapshot | None:
    """Segment a subject's records into cycles and analyse them.

    Args:
        records: All daily records for one subject.
        as_of:   Reference date used for the current cycle day.
        catalog: Optional symptom catalog for warning-sign names.
        config:  Engine config; defaults to the global cycle config.

    Returns:
        InsightSnapshot, or None if the subject has no ongoing cycle.

    Raises:
        DuplicateRecordError: If two records share a date.
    """
    config = config or get_cycle_config()
    validated = ensure_unique_dates(records)

    cycles = CycleSegmenter(config).segment(validated)
    snapshot = InsightAnalyzer(config).analyze(validated, cycles, as_of, catalog)

    logger.debug(
        "Computed insights from %d records: %d cycles, snapshot=%s",
        len(validated), len(cycles), "yes" if snapshot else "none",
    )
    return snapshot
