"""Pydantic models for daily cycle tracking: flow, symptoms, catalog entries."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from uuid import UUID

from pydantic import Field, field_validator

from src.models.base import GutCheckBase


# ---------- Enums ----------

class FlowLevel(str, Enum):
    """Logged menstrual flow.

    ``none`` means the user is tracking their period but had no flow that
    day.  A record with no flow at all (``DailyRecord.flow is None``) means
    the day carries no period data.
    """

    none = "none"
    light = "light"
    medium = "medium"
    heavy = "heavy"


class Severity(str, Enum):
    mild = "mild"
    moderate = "moderate"
    severe = "severe"


_ACTUAL_FLOW = frozenset({FlowLevel.light, FlowLevel.medium, FlowLevel.heavy})


def is_actual_flow(flow: FlowLevel | None) -> bool:
    """Return True if ``flow`` counts as a bleeding day.

    Light, medium and heavy count.  "No flow" tracking days and days with
    no flow data do not.
    """
    return flow in _ACTUAL_FLOW


# ---------- Symptoms ----------

class SymptomObservation(GutCheckBase):
    """One symptom logged on a day, optionally with a severity."""

    symptom_id: str = Field(min_length=1)
    severity: Severity | None = None

    @field_validator("symptom_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return str(value) if isinstance(value, UUID) else value


class Symptom(GutCheckBase):
    """Catalog entry mapping a symptom identifier to its display name."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return str(value) if isinstance(value, UUID) else value


# ---------- Daily record ----------

class DailyRecord(GutCheckBase):
    """All cycle-tracking data one subject logged for a single calendar day.

    ``date`` is normalised to a plain calendar date; a ``datetime`` is
    truncated to its day so time-of-day never leaks into day arithmetic.
    """

    date: dt.date
    flow: FlowLevel | None = None
    symptoms: tuple[SymptomObservation, ...] = ()
    had_spotting: bool = False
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalise_date(cls, value: object) -> object:
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @property
    def has_period_logged(self) -> bool:
        return self.flow is not None

    @property
    def has_actual_flow(self) -> bool:
        return is_actual_flow(self.flow)

    @property
    def symptom_ids(self) -> list[str]:
        return [s.symptom_id for s in self.symptoms]
