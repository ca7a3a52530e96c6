"""Shared Pydantic base model for GutCheck schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GutCheckBase(BaseModel):
    """Base model with shared config for all GutCheck schemas.

    Models are frozen: records handed to the cycle engine are immutable
    snapshots and may be shared across concurrent analyses.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )
