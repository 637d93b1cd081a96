"""
Pydantic models for Lexicon Stream.

All data shapes defined here. No imports from services or routes.
"""

from backend.models.stream import HealthResponse, StreamDocument, StreamErrorResponse

__all__ = [
    "StreamDocument",
    "StreamErrorResponse",
    "HealthResponse",
]
