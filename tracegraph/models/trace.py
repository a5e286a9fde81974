"""
tracegraph/models/trace.py

Trace event records emitted by the compiler.

Each event describes one analysis/resolution step.  Events locate
themselves in the compiled source with a half-open byte span and may
point at a structural parent (``parent_id``) or at another span they
consulted while resolving (``ref_span``).
"""
from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Span(BaseModel):
    """Half-open byte range ``[low, high)`` in the original source text."""
    model_config = ConfigDict(frozen=True)

    low: int
    high: int

    def contains(self, other: Span) -> bool:
        """True when *other* lies entirely within this span."""
        return self.low <= other.low and other.high <= self.high


class Event(BaseModel):
    """A single compiler trace event."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int
    parent_id: int | None = None
    source: Span
    ref_span: Span | None = Field(
        default=None,
        validation_alias=AliasChoices("ref_span", "ref_spans"),
        serialization_alias="ref_spans",
    )
    ok: Any | None = None
    error: Any | None = None

    @property
    def is_no_result(self) -> bool:
        """An event with neither outcome recorded is a pass-through step."""
        return self.ok is None and self.error is None
