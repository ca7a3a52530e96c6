"""Tests for the end-to-end insight pipeline and record-source validation."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from src.cycles.catalog import InMemorySymptomCatalog
from src.cycles.config_loader import CycleEngineConfig
from src.cycles.engine import (
    DuplicateRecordError,
    compute_insights,
    ensure_unique_dates,
    records_in_window,
)
from src.cycles.tests.conftest import day, record
from src.models.tracking import DailyRecord, FlowLevel


class TestComputeInsights:
    def test_end_to_end_three_cycles(
        self,
        cycle_config: CycleEngineConfig,
        three_cycle_history: list[DailyRecord],
        catalog: InMemorySymptomCatalog,
    ) -> None:
        snapshot = compute_insights(
            three_cycle_history, as_of=day(150), catalog=catalog, config=cycle_config
        )
        assert snapshot is not None
        assert snapshot.current_cycle_day == 22
        assert snapshot.recent_cycle_lengths == (37, 39, 52)
        assert snapshot.warning_signs[0].symptom_name == "Bloating"
        assert snapshot.warning_signs[0].frequency_note == "In 3 of 3 cycles"

    def test_accepts_generator_input(
        self, cycle_config: CycleEngineConfig, three_cycle_history: list[DailyRecord]
    ) -> None:
        snapshot = compute_insights(
            (r for r in three_cycle_history), as_of=day(150), config=cycle_config
        )
        assert snapshot is not None
        assert snapshot.warning_signs

    def test_no_records_returns_none(self, cycle_config: CycleEngineConfig) -> None:
        assert compute_insights([], as_of=day(0), config=cycle_config) is None

    def test_duplicate_dates_rejected(self, cycle_config: CycleEngineConfig) -> None:
        records = [record(0, FlowLevel.heavy), record(0, FlowLevel.light)]
        with pytest.raises(DuplicateRecordError) as excinfo:
            compute_insights(records, as_of=day(1), config=cycle_config)
        assert excinfo.value.dates == [day(0)]

    def test_uses_global_config_by_default(self) -> None:
        snapshot = compute_insights([record(0, FlowLevel.light)], as_of=day(3))
        assert snapshot is not None
        assert snapshot.current_cycle_day == 3


class TestEnsureUniqueDates:
    def test_returns_list(self) -> None:
        records = [record(0), record(1)]
        assert ensure_unique_dates(iter(records)) == records

    def test_lists_all_duplicates_sorted(self) -> None:
        records = [record(5), record(2), record(5), record(2), record(3)]
        with pytest.raises(DuplicateRecordError) as excinfo:
            ensure_unique_dates(records)
        assert excinfo.value.dates == [day(2), day(5)]
        assert isinstance(excinfo.value, ValueError)

    def test_datetime_normalised_before_comparison(self) -> None:
        records = [
            DailyRecord(date=datetime(2026, 1, 1, 8, 30)),
            DailyRecord(date=datetime(2026, 1, 1, 22, 0)),
        ]
        with pytest.raises(DuplicateRecordError):
            ensure_unique_dates(records)


class TestRecordsInWindow:
    def test_keeps_last_months(self) -> None:
        records = [
            DailyRecord(date=date(2025, 11, 14)),
            DailyRecord(date=date(2025, 11, 15)),
            DailyRecord(date=date(2026, 2, 15)),
            DailyRecord(date=date(2026, 2, 16)),
        ]
        kept = records_in_window(records, as_of=date(2026, 2, 15), months=3)
        assert [r.date for r in kept] == [date(2025, 11, 15), date(2026, 2, 15)]

    def test_clamps_to_month_end(self) -> None:
        records = [DailyRecord(date=date(2026, 2, 27)), DailyRecord(date=date(2026, 2, 28))]
        kept = records_in_window(records, as_of=date(2026, 3, 31), months=1)
        assert [r.date for r in kept] == [date(2026, 2, 28)]

    def test_clamps_to_leap_day(self) -> None:
        records = [DailyRecord(date=date(2024, 2, 28)), DailyRecord(date=date(2024, 2, 29))]
        kept = records_in_window(records, as_of=date(2024, 3, 31), months=1)
        assert [r.date for r in kept] == [date(2024, 2, 29)]

    def test_window_across_year_boundary(self) -> None:
        records = [DailyRecord(date=date(2025, 12, 9)), DailyRecord(date=date(2025, 12, 10))]
        kept = records_in_window(records, as_of=date(2026, 1, 10), months=1)
        assert [r.date for r in kept] == [date(2025, 12, 10)]

    def test_rejects_non_positive_months(self) -> None:
        with pytest.raises(ValueError):
            records_in_window([], as_of=date(2026, 1, 1), months=0)
