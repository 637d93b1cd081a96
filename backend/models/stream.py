"""Pydantic models for the stream API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class StreamDocument(BaseModel):
    """Shape of the persisted stream document (see lexicon.kernel.stream)."""

    generated: str
    generation: int
    stats: dict[str, Any]
    events: list[dict[str, Any]]


class StreamErrorResponse(BaseModel):
    """Body returned when no stream document can be served."""

    error: str


class HealthResponse(BaseModel):
    status: str
