"""GutCheck cycle segmentation and pattern-insight engine.

Turns a subject's daily flow and symptom logs into discrete cycles, recent
cycle statistics, and symptoms that tend to precede a period.  Everything
here is pure computation: no I/O, no wall-clock reads, no shared state.

Modules:
    segmenter    : Split period-tracking days into cycles by logging gaps
    insights     : Current cycle day, recent lengths, warning signs
    engine       : Validate input and run segmentation + analysis
    catalog      : Symptom name lookup
    config_loader: Load/validate/hot-reload cycle_config.yaml
"""

from src.cycles.catalog import InMemorySymptomCatalog, SymptomCatalog
from src.cycles.config_loader import (
    DEFAULT_CYCLE_GAP_DAYS,
    DEFAULT_WARNING_WINDOW_DAYS,
    CycleEngineConfig,
    get_cycle_config,
)
from src.cycles.engine import DuplicateRecordError, compute_insights
from src.cycles.insights import InsightAnalyzer, InsightSnapshot, WarningSign, analyze
from src.cycles.segmenter import CycleInterval, CycleSegmenter, segment

__all__ = [
    "CycleSegmenter",
    "CycleInterval",
    "segment",
    "InsightAnalyzer",
    "InsightSnapshot",
    "WarningSign",
    "analyze",
    "compute_insights",
    "DuplicateRecordError",
    "SymptomCatalog",
    "InMemorySymptomCatalog",
    "CycleEngineConfig",
    "get_cycle_config",
    "DEFAULT_CYCLE_GAP_DAYS",
    "DEFAULT_WARNING_WINDOW_DAYS",
]
