"""
Lexicon Kernel — Statistics Aggregation

Pure function: Snapshot → LexiconStats

Works directly on the snapshot; it does not consume the reconstructed events.

Two lifespan policies live side by side here:
  - avg/max lifespan only count extinct records with a recorded death
  - the stillborn count uses the reconstructor's default (born + 1) for
    records without one
Both are deliberate and must stay distinct.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from lexicon.kernel.events import death_generation, is_stillborn, recorded_uses
from lexicon.kernel.types import LexiconStats, LivingWord, Snapshot

# A candidate must beat this to be the fittest word
FITNESS_FLOOR = -1.0


def round_tenth(value: float) -> float:
    """
    Round to one decimal place, half away from zero on the exact binary value.

    Same result as Number.prototype.toFixed(1): 0.25 → 0.3, 0.15 → 0.1.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _living_words(snapshot: Snapshot) -> list[LivingWord]:
    gen = snapshot.generation
    return [
        LivingWord(
            word=word,
            meaning=info.meaning,
            category=info.category,
            age=gen - info.born,
            fitness=info.fitness,
            uses=info.uses,
        )
        for word, info in snapshot.words.items()
    ]


def find_elder(living: list[LivingWord]) -> LivingWord | None:
    """Oldest living word; the first one seen wins on equal age."""
    by_age = sorted(living, key=lambda w: w.age, reverse=True)
    return by_age[0] if by_age else None


def find_fittest(living: list[LivingWord]) -> LivingWord | None:
    """
    Fittest living word; strict comparison, so the first one seen wins ties.

    Words at or below FITNESS_FLOOR never qualify, so a population made only
    of such words has no fittest word.
    """
    best: LivingWord | None = None
    for candidate in living:
        threshold = FITNESS_FLOOR if best is None else best.fitness
        if candidate.fitness > threshold:
            best = candidate
    return best


def mortality_rate(total_born: int, total_dead: int) -> float:
    if total_born <= 0:
        return 0.0
    return round_tenth(total_dead / total_born * 100)


def aggregate_stats(snapshot: Snapshot) -> LexiconStats:
    """Summary statistics for one snapshot."""
    living = _living_words(snapshot)

    categories: dict[str | None, int] = {}
    for info in snapshot.words.values():
        categories[info.category] = categories.get(info.category, 0) + 1

    lifespans = [e.died - e.born for e in snapshot.extinct if e.died is not None]
    avg_lifespan = round_tenth(sum(lifespans) / len(lifespans)) if lifespans else 0.0
    max_lifespan = max(lifespans) if lifespans else 0

    stillborn_count = sum(
        1
        for e in snapshot.extinct
        if is_stillborn(recorded_uses(e), death_generation(e) - e.born)
    )

    counters = snapshot.stats
    total_born = counters.total_generated if counters else 0
    total_dead = counters.total_extinct if counters else 0
    total_shifts = counters.total_shifts if counters else 0

    return LexiconStats(
        generation=snapshot.generation,
        population=len(living),
        total_born=total_born,
        total_dead=total_dead,
        total_compounds=len(snapshot.compounds),
        total_shifts=total_shifts,
        mortality_rate=mortality_rate(total_born, total_dead),
        avg_lifespan=avg_lifespan,
        max_lifespan=max_lifespan,
        stillborn_count=stillborn_count,
        categories=categories,
        elder=find_elder(living),
        fittest=find_fittest(living),
        living_words=tuple(sorted(living, key=lambda w: w.fitness, reverse=True)),
    )
