"""
Lexicon Kernel — Stream Assembly

Combines the reconstructed events and the statistics of one snapshot into the
stream document that is persisted and served.

Stream document = {
    "generated":  ISO 8601 UTC timestamp,
    "generation": int,
    "stats":      LexiconStats.to_dict(),
    "events":     [Event.to_dict(), ...],
}
"""

from __future__ import annotations

from typing import Any

from lexicon.kernel.events import reconstruct_events
from lexicon.kernel.stats import aggregate_stats
from lexicon.kernel.types import Event, LexiconStats, Snapshot, now_iso


def stream_document(
    snapshot: Snapshot,
    events: list[Event],
    stats: LexiconStats,
    generated: str,
) -> dict[str, Any]:
    """Serialize already-derived events and statistics into a stream document."""
    return {
        "generated": generated,
        "generation": snapshot.generation,
        "stats": stats.to_dict(),
        "events": [event.to_dict() for event in events],
    }


def assemble_stream(snapshot: Snapshot, generated: str | None = None) -> dict[str, Any]:
    """
    Build the stream document for a snapshot.

    generated defaults to the current time; pass it explicitly for a
    deterministic document.
    """
    return stream_document(
        snapshot,
        reconstruct_events(snapshot),
        aggregate_stats(snapshot),
        generated or now_iso(),
    )
