"""Cycle insight analysis: current cycle day, recent statistics, warning signs.

Consumes segmented cycles plus the subject's daily records and produces an
immutable ``InsightSnapshot``:

- days elapsed in the ongoing cycle
- lengths and bleeding-day counts of the last few closed cycles
- symptoms that tend to show up in the days before a period starts, e.g.
  "Bloating 2-3 days before (In 3 of 3 cycles)"

Only closed cycles feed the statistics and warning signs; the days before
the ongoing cycle's start are known, but its outcome is not.
"""

from __future__ import annotations

import logging
import statistics
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from src.cycles.catalog import SymptomCatalog
from src.cycles.config_loader import CycleEngineConfig, InsightConfig, get_cycle_config
from src.cycles.segmenter import CycleInterval
from src.models.tracking import DailyRecord

logger = logging.getLogger("gutcheck.cycles.insights")


@dataclass(frozen=True)
class WarningSign:
    """A symptom that appeared in the days before period starts.

    Attributes:
        symptom_id:        Catalog identifier of the symptom.
        symptom_name:      Display name (the id when no catalog is used).
        days_before_range: Timing text, e.g. "2-3 days before".
        frequency_note:    "In C of M cycles", or None when fewer cycles
                           were analysed than the frequency threshold.
        occurrence_count:  Total observations across all windows.
        cycle_count:       Distinct cycles the symptom appeared in.
    """

    symptom_id: str
    symptom_name: str
    days_before_range: str
    frequency_note: str | None
    occurrence_count: int
    cycle_count: int


@dataclass(frozen=True)
class InsightSnapshot:
    """Insights for a subject with an ongoing cycle."""

    current_cycle_day: int
    recent_cycle_lengths: tuple[int, ...] = ()
    recent_period_lengths: tuple[int, ...] = ()
    warning_signs: tuple[WarningSign, ...] = ()
    cycles_analyzed: int = 0

    @property
    def has_warning_signs(self) -> bool:
        return bool(self.warning_signs)

    @property
    def average_cycle_length(self) -> float | None:
        if not self.recent_cycle_lengths:
            return None
        return statistics.mean(self.recent_cycle_lengths)

    @property
    def average_period_length(self) -> float | None:
        if not self.recent_period_lengths:
            return None
        return statistics.mean(self.recent_period_lengths)

    @property
    def cycle_length_variability(self) -> str:
        """Human-readable consistency of recent cycle lengths."""
        if len(self.recent_cycle_lengths) < 2:
            return "Not enough data"
        spread = max(self.recent_cycle_lengths) - min(self.recent_cycle_lengths)
        if spread <= 3:
            return "Very consistent"
        if spread <= 7:
            return "Moderately consistent"
        return "Variable"


@dataclass
class _SymptomOccurrence:
    """Running tally for one symptom across pre-period windows."""

    total_count: int = 0
    cycles: set[date] = field(default_factory=set)
    days_before: list[int] = field(default_factory=list)


def days_before_range(days_before: Sequence[int]) -> str:
    """Render timing text for a set of days-before values.

    Examples: [3] → "3 days before", [1, 1] → "1 day before",
    [2, 3, 2] → "2-3 days before".
    """
    if not days_before:
        return "Before period"
    low, high = min(days_before), max(days_before)
    if low == high:
        return f"{low} day{'' if low == 1 else 's'} before"
    return f"{low}-{high} days before"


class InsightAnalyzer:
    """Derive an ``InsightSnapshot`` from cycles and daily records.

    Pure and stateless per call: the reference date is always passed in.

    Usage::

        analyzer = InsightAnalyzer()
        snapshot = analyzer.analyze(records, cycles, as_of=date(2026, 3, 1))
        if snapshot is not None:
            print(snapshot.current_cycle_day, snapshot.recent_cycle_lengths)
    """

    def __init__(self, config: CycleEngineConfig | None = None) -> None:
        self._config = config or get_cycle_config()

    @property
    def _ins_config(self) -> InsightConfig:
        return self._config.insights

    def analyze(
        self,
        records: Iterable[DailyRecord],
        cycles: Sequence[CycleInterval],
        as_of: date,
        catalog: SymptomCatalog | None = None,
    ) -> InsightSnapshot | None:
        """Build insights for the subject's ongoing cycle.

        Args:
            records: The subject's daily records (any order, one per date).
            cycles:  Output of ``CycleSegmenter.segment`` for those records.
            as_of:   Reference date ("today") for the current cycle day.
            catalog: Symptom name lookup.  Symptoms missing from a supplied
                     catalog are left out of the warning signs.

        Returns:
            InsightSnapshot, or None if there is no ongoing cycle.
        """
        if not cycles or not cycles[-1].is_open:
            logger.info("No ongoing cycle; insights unavailable")
            return None

        current = cycles[-1]
        current_cycle_day = max(0, (as_of - current.start_date).days)

        recent = self.recent_closed_cycles(cycles)
        cycle_lengths = tuple(c.length_days for c in recent if c.length_days is not None)
        period_lengths = tuple(c.flow_day_count for c in recent)

        warning_signs = self.warning_signs(records, recent, catalog)

        return InsightSnapshot(
            current_cycle_day=current_cycle_day,
            recent_cycle_lengths=cycle_lengths,
            recent_period_lengths=period_lengths,
            warning_signs=tuple(warning_signs),
            cycles_analyzed=len(recent),
        )

    def recent_closed_cycles(
        self, cycles: Sequence[CycleInterval]
    ) -> list[CycleInterval]:
        """Return up to ``recent_cycle_count`` closed cycles, oldest first."""
        closed = [c for c in cycles if not c.is_open]
        return closed[-self._ins_config.recent_cycle_count:]

    def warning_signs(
        self,
        records: Iterable[DailyRecord],
        cycles: Sequence[CycleInterval],
        catalog: SymptomCatalog | None = None,
    ) -> list[WarningSign]:
        """Rank symptoms logged in the window before each cycle's start.

        Symptoms are ranked by total occurrences (descending), ties broken
        by symptom id, and the top ``max_warning_signs`` are returned.
        """
        ic = self._ins_config
        if not cycles:
            return []

        by_date = {r.date: r for r in records}
        tracking: dict[str, _SymptomOccurrence] = {}

        for cycle in cycles:
            for days_before in range(1, ic.warning_window_days + 1):
                record = by_date.get(cycle.start_date - timedelta(days=days_before))
                if record is None:
                    continue
                for observation in record.symptoms:
                    occurrence = tracking.setdefault(
                        observation.symptom_id, _SymptomOccurrence()
                    )
                    occurrence.total_count += 1
                    occurrence.cycles.add(cycle.start_date)
                    occurrence.days_before.append(days_before)

        total_cycles = len(cycles)
        show_frequency = total_cycles >= ic.min_cycles_for_frequency

        signs: list[WarningSign] = []
        for symptom_id, occurrence in tracking.items():
            if catalog is None:
                name = symptom_id
            else:
                symptom = catalog.symptom(symptom_id)
                if symptom is None:
                    logger.debug("Symptom %s not in catalog; skipping", symptom_id)
                    continue
                name = symptom.name

            signs.append(
                WarningSign(
                    symptom_id=symptom_id,
                    symptom_name=name,
                    days_before_range=days_before_range(occurrence.days_before),
                    frequency_note=(
                        f"In {len(occurrence.cycles)} of {total_cycles} cycles"
                        if show_frequency
                        else None
                    ),
                    occurrence_count=occurrence.total_count,
                    cycle_count=len(occurrence.cycles),
                )
            )

        signs.sort(key=lambda s: (-s.occurrence_count, s.symptom_id))
        return signs[: ic.max_warning_signs]


def analyze(
    records: Iterable[DailyRecord],
    cycles: Sequence[CycleInterval],
    as_of: date,
    catalog: SymptomCatalog | None = None,
    config: CycleEngineConfig | None = None,
) -> InsightSnapshot | None:
    """Module-level shortcut for ``InsightAnalyzer(config).analyze(...)``."""
    return InsightAnalyzer(config).analyze(records, cycles, as_of, catalog)
