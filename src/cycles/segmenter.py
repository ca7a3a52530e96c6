"""Cycle segmentation from sparse, irregularly logged flow data.

Period-tracking days (any day with a flow observation, including "no flow")
are sorted and walked in order.  A logging gap of ``cycle_gap_days`` or
more between two consecutive tracking days closes the current cycle the
day before the next tracking day and starts a new one.  The final cycle is
always left open.

Example with the default 14-day gap::

    Jan 01  heavy    ┐
    Jan 02  medium   │ cycle 1: Jan 01 – Jan 21 (closed)
    Jan 03  none     ┘
    Jan 22  light    ┐ cycle 2: Jan 22 – (open)
    Jan 23  medium   ┘
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from src.cycles.config_loader import CycleEngineConfig, get_cycle_config
from src.models.tracking import DailyRecord

logger = logging.getLogger("gutcheck.cycles.segmenter")


@dataclass(frozen=True)
class CycleInterval:
    """A single derived menstrual cycle.

    Attributes:
        start_date:   First period-tracking day of the cycle.
        end_date:     Last day of the cycle, or None while still ongoing.
        period_days:  Period-tracking records in this cycle, oldest first.
    """

    start_date: date
    end_date: date | None
    period_days: tuple[DailyRecord, ...]

    @property
    def is_open(self) -> bool:
        return self.end_date is None

    @property
    def length_days(self) -> int | None:
        """Inclusive day count from start to end; None for an open cycle."""
        if self.end_date is None:
            return None
        return (self.end_date - self.start_date).days + 1

    @property
    def flow_day_count(self) -> int:
        """Number of period days with actual flow (light/medium/heavy)."""
        return sum(1 for record in self.period_days if record.has_actual_flow)

    def contains(self, day: date) -> bool:
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date


class CycleSegmenter:
    """Split a subject's daily records into ordered cycle intervals.

    Usage::

        segmenter = CycleSegmenter()
        cycles = segmenter.segment(records)
        current = cycles[-1] if cycles else None
    """

    def __init__(self, config: CycleEngineConfig | None = None) -> None:
        self._config = config or get_cycle_config()

    @property
    def gap_days(self) -> int:
        return self._config.segmentation.cycle_gap_days

    def segment(self, records: Iterable[DailyRecord]) -> list[CycleInterval]:
        """Group period-tracking days into cycles.

        Args:
            records: Daily records for one subject, in any order.  At most
                     one record per date is assumed.

        Returns:
            Cycles in chronological order.  Every cycle but the last is
            closed; the last is open.  Empty if no day has flow data.
        """
        tracking_days = sorted(
            (r for r in records if r.has_period_logged),
            key=lambda r: r.date,
        )
        if not tracking_days:
            return []

        gap = self.gap_days
        cycles: list[CycleInterval] = []
        current: list[DailyRecord] = [tracking_days[0]]

        for previous, record in zip(tracking_days, tracking_days[1:]):
            if (record.date - previous.date).days >= gap:
                cycles.append(
                    CycleInterval(
                        start_date=current[0].date,
                        end_date=record.date - timedelta(days=1),
                        period_days=tuple(current),
                    )
                )
                current = [record]
            else:
                current.append(record)

        cycles.append(
            CycleInterval(
                start_date=current[0].date,
                end_date=None,
                period_days=tuple(current),
            )
        )

        logger.debug(
            "Segmented %d tracking days into %d cycles (gap=%d)",
            len(tracking_days), len(cycles), gap,
        )
        return cycles


def segment(
    records: Iterable[DailyRecord], config: CycleEngineConfig | None = None
) -> list[CycleInterval]:
    """Module-level shortcut for ``CycleSegmenter(config).segment(records)``."""
    return CycleSegmenter(config).segment(records)
