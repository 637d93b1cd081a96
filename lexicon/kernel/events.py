"""
Lexicon Kernel — Event Reconstruction

Pure function: Snapshot → ordered list of Events

A snapshot only holds the current state of the lexicon. This module derives
the history that state implies: one birth per living word, a birth and a death
per extinct record, one event per compound and per sound shift.

Traversal order is living words, extinct records, compounds, shifts. The
result is stable-sorted by generation, then by type priority, so events that
tie on both keep traversal order. Same snapshot in, same list out.
"""

from __future__ import annotations

from lexicon.kernel.types import (
    BirthEvent,
    CompoundEvent,
    DeathEvent,
    Event,
    ExtinctRecord,
    ShiftEvent,
    Snapshot,
)

# Within one generation: deaths first, births last
TYPE_PRIORITY: dict[str, int] = {
    "death": 0,
    "shift": 1,
    "compound": 2,
    "birth": 3,
}
UNKNOWN_TYPE_PRIORITY = 5

STILLBORN_MAX_LIFESPAN = 5
UNKNOWN_CATEGORY = "unknown"


# ---------------------------------------------------------------------------
# Policy helpers (shared with the statistics aggregator)
# ---------------------------------------------------------------------------


def death_generation(record: ExtinctRecord) -> int:
    """
    Generation a record died in.

    Records without a recorded death are taken to have died one generation
    after birth.
    """
    if record.died is not None:
        return record.died
    return record.born + 1


def recorded_uses(record: ExtinctRecord) -> int:
    return record.uses or 0


def is_stillborn(uses: int, lifespan: int) -> bool:
    """A word that was never used and died within five generations."""
    return uses == 0 and lifespan <= STILLBORN_MAX_LIFESPAN


def sort_key(event: Event) -> tuple[int, int]:
    return (event.gen, TYPE_PRIORITY.get(event.type, UNKNOWN_TYPE_PRIORITY))


# ---------------------------------------------------------------------------
# Reconstruction
# ---------------------------------------------------------------------------


def reconstruct_events(snapshot: Snapshot) -> list[Event]:
    """
    Derive the ordered event timeline implied by a snapshot.

    Returns a new list; the snapshot is not modified.
    """
    events: list[Event] = []
    gen = snapshot.generation

    # Living words: births only
    for word, info in snapshot.words.items():
        events.append(
            BirthEvent(
                gen=info.born,
                word=word,
                meaning=info.meaning,
                category=info.category,
                fitness=info.fitness,
                age=gen - info.born,
                alive=True,
            )
        )

    # Extinct words: birth and death
    for record in snapshot.extinct:
        category = record.category or UNKNOWN_CATEGORY
        died = death_generation(record)
        lifespan = died - record.born
        uses = recorded_uses(record)

        events.append(
            BirthEvent(
                gen=record.born,
                word=record.word,
                meaning=record.meaning,
                category=category,
                alive=False,
            )
        )
        events.append(
            DeathEvent(
                gen=died,
                word=record.word,
                meaning=record.meaning,
                category=category,
                lifespan=lifespan,
                uses=uses,
                stillborn=is_stillborn(uses, lifespan),
            )
        )

    for word, info in snapshot.compounds.items():
        events.append(
            CompoundEvent(
                gen=info.born,
                word=word,
                meaning=info.compound_meaning,
                parts=info.parts,
                part_meanings=info.meanings,
            )
        )

    for shift in snapshot.sound_shifts:
        events.append(
            ShiftEvent(
                gen=shift.gen,
                from_=shift.from_,
                to=shift.to,
                meaning=shift.meaning,
            )
        )

    # sorted() is stable; ties keep traversal order
    return sorted(events, key=sort_key)


def count_by_type(events: list[Event]) -> dict[str, int]:
    """Number of events per type, in priority order."""
    counts = {event_type: 0 for event_type in ("birth", "death", "compound", "shift")}
    for event in events:
        counts[event.type] = counts.get(event.type, 0) + 1
    return counts
