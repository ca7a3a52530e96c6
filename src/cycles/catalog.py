"""Symptom catalog lookup used to name warning signs."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from src.models.tracking import Symptom


class SymptomCatalog(Protocol):
    """Identifier-keyed symptom lookup supplied by the host application."""

    def symptom(self, symptom_id: str) -> Symptom | None: ...


class InMemorySymptomCatalog:
    """Dict-backed ``SymptomCatalog``.

    Usage::

        catalog = InMemorySymptomCatalog([Symptom(id="bloating", name="Bloating")])
        catalog.symptom("bloating").name   # "Bloating"
    """

    def __init__(self, symptoms: Iterable[Symptom] = ()) -> None:
        self._by_id: dict[str, Symptom] = {s.id: s for s in symptoms}

    def symptom(self, symptom_id: str) -> Symptom | None:
        return self._by_id.get(symptom_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, symptom_id: object) -> bool:
        return symptom_id in self._by_id
