"""Shared fixtures and record builders for cycle engine tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.cycles.catalog import InMemorySymptomCatalog
from src.cycles.config_loader import CycleEngineConfig, load_cycle_config
from src.models.tracking import DailyRecord, FlowLevel, Symptom, SymptomObservation

# Canonical anchor date for synthetic histories
DAY0 = date(2026, 1, 1)


def day(offset: int) -> date:
    return DAY0 + timedelta(days=offset)


def record(
    offset: int,
    flow: FlowLevel | None = None,
    symptoms: tuple[str, ...] = (),
) -> DailyRecord:
    return DailyRecord(
        date=day(offset),
        flow=flow,
        symptoms=tuple(SymptomObservation(symptom_id=s) for s in symptoms),
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_config() -> CycleEngineConfig:
    """Load the real bundled cycle config for tests."""
    return load_cycle_config()


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog() -> InMemorySymptomCatalog:
    return InMemorySymptomCatalog(
        [
            Symptom(id="bloating", name="Bloating", category="Digestive & Gut Health"),
            Symptom(id="cramps", name="Cramps", category="Cycle & Hormonal"),
            Symptom(id="fatigue", name="Fatigue", category="Energy, Mood & Mental Clarity"),
            Symptom(id="brain_fog", name="Brain fog", category="Energy, Mood & Mental Clarity"),
            Symptom(id="irritability", name="Irritability", category="Energy, Mood & Mental Clarity"),
            Symptom(id="nausea", name="Nausea", category="Digestive & Gut Health"),
        ]
    )


# ---------------------------------------------------------------------------
# Record history fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def three_cycle_history() -> list[DailyRecord]:
    """Three closed cycles of 37, 39 and 52 days, then an ongoing cycle.

    Period starts fall on day 0, 37, 76 and 128.  Bloating is logged 2 and
    3 days before each closed cycle's start; fatigue appears only once,
    4 days before the start on day 76.  Cramps are logged only before the
    ongoing cycle, which never feeds warning signs.
    """
    starts = [0, 37, 76, 128]
    records: dict[int, DailyRecord] = {}
    flows = [FlowLevel.heavy, FlowLevel.heavy, FlowLevel.medium, FlowLevel.light]

    for start in starts:
        for i, flow in enumerate(flows):
            records[start + i] = record(start + i, flow)

    for start in starts[:3]:
        records[start - 2] = record(start - 2, symptoms=("bloating",))
        records[start - 3] = record(start - 3, symptoms=("bloating",))
    records[76 - 4] = record(76 - 4, symptoms=("fatigue",))
    records[128 - 1] = record(128 - 1, symptoms=("cramps",))

    return [records[k] for k in sorted(records)]
