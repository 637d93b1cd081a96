"""
Lexicon Kernel — Shared Types

Data classes for the snapshot read from the lexicon simulation and for the
records derived from it (events, statistics). These are the contracts that
bind the reconstructor, the aggregator and the stream assembly together.

Mapping fields (words, compounds) keep the insertion order of the source
document; event ordering ties depend on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SnapshotParseError(Exception):
    """Snapshot document is missing a required field or has the wrong shape."""

    pass


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _require(d: dict[str, Any], key: str, where: str) -> Any:
    if key not in d or d[key] is None:
        raise SnapshotParseError(f"{where}: missing required field '{key}'")
    return d[key]


def _as_int(value: Any, key: str, where: str) -> int:
    # bool is an int subclass; a JSON true/false is never a generation
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotParseError(f"{where}: field '{key}' must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise SnapshotParseError(f"{where}: field '{key}' must be a whole number, got {value!r}")
    return int(value)


def _as_float(value: Any, key: str, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotParseError(f"{where}: field '{key}' must be a number, got {value!r}")
    return float(value)


def _optional_int(d: dict[str, Any], key: str, where: str) -> int | None:
    value = d.get(key)
    if value is None:
        return None
    return _as_int(value, key, where)


def _as_mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SnapshotParseError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _as_list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise SnapshotParseError(f"{where}: expected an array, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Snapshot model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WordInfo:
    """A living word."""

    born: int
    meaning: str
    category: str | None
    fitness: float
    uses: int = 0

    @classmethod
    def from_dict(cls, word: str, d: dict[str, Any]) -> WordInfo:
        where = f"words[{word!r}]"
        d = _as_mapping(d, where)
        return cls(
            born=_as_int(_require(d, "born", where), "born", where),
            meaning=_require(d, "meaning", where),
            category=d.get("category"),
            fitness=_as_float(_require(d, "fitness", where), "fitness", where),
            uses=_optional_int(d, "uses", where) or 0,
        )


@dataclass(frozen=True)
class ExtinctRecord:
    """A word that died. The same word text may appear in several records."""

    word: str
    born: int
    meaning: str | None = None
    category: str | None = None
    died: int | None = None
    uses: int | None = None

    @classmethod
    def from_dict(cls, index: int, d: dict[str, Any]) -> ExtinctRecord:
        where = f"extinct[{index}]"
        d = _as_mapping(d, where)
        return cls(
            word=_require(d, "word", where),
            meaning=d.get("meaning"),
            born=_as_int(_require(d, "born", where), "born", where),
            category=d.get("category"),
            died=_optional_int(d, "died", where),
            uses=_optional_int(d, "uses", where),
        )


@dataclass(frozen=True)
class CompoundInfo:
    """A multi-part word built from existing words."""

    born: int
    compound_meaning: str
    parts: tuple[str, ...] = ()
    meanings: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, word: str, d: dict[str, Any]) -> CompoundInfo:
        where = f"compounds[{word!r}]"
        d = _as_mapping(d, where)
        return cls(
            born=_as_int(_require(d, "born", where), "born", where),
            compound_meaning=_require(d, "compound_meaning", where),
            parts=tuple(_as_list(d.get("parts", []), f"{where}.parts")),
            meanings=tuple(_as_list(d.get("meanings", []), f"{where}.meanings")),
        )


@dataclass(frozen=True)
class ShiftRecord:
    """A sound shift applied at a generation."""

    gen: int
    from_: str
    to: str
    meaning: str | None = None

    @classmethod
    def from_dict(cls, index: int, d: dict[str, Any]) -> ShiftRecord:
        where = f"sound_shifts[{index}]"
        d = _as_mapping(d, where)
        return cls(
            gen=_as_int(_require(d, "gen", where), "gen", where),
            from_=_require(d, "from", where),
            to=_require(d, "to", where),
            meaning=d.get("meaning"),
        )


@dataclass(frozen=True)
class SourceCounters:
    """Authoritative running totals kept by the simulation."""

    total_generated: int = 0
    total_extinct: int = 0
    total_shifts: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SourceCounters:
        where = "stats"
        d = _as_mapping(d, where)
        return cls(
            total_generated=_optional_int(d, "total_generated", where) or 0,
            total_extinct=_optional_int(d, "total_extinct", where) or 0,
            total_shifts=_optional_int(d, "total_shifts", where) or 0,
        )


@dataclass(frozen=True)
class Snapshot:
    """
    One point-in-time capture of the lexicon.

    words and compounds are dicts keyed by word text; their iteration order is
    the order of the source document.
    """

    generation: int
    words: dict[str, WordInfo] = field(default_factory=dict)
    extinct: tuple[ExtinctRecord, ...] = ()
    compounds: dict[str, CompoundInfo] = field(default_factory=dict)
    sound_shifts: tuple[ShiftRecord, ...] = ()
    stats: SourceCounters | None = None

    @classmethod
    def from_dict(cls, d: Any) -> Snapshot:
        """Build a Snapshot from the decoded /api/state document."""
        d = _as_mapping(d, "snapshot")
        where = "snapshot"
        words = _as_mapping(_require(d, "words", where), "words")
        compounds = _as_mapping(d.get("compounds") or {}, "compounds")
        extinct = _as_list(d.get("extinct") or [], "extinct")
        shifts = _as_list(d.get("sound_shifts") or [], "sound_shifts")
        raw_stats = d.get("stats")

        return cls(
            generation=_as_int(_require(d, "generation", where), "generation", where),
            words={w: WordInfo.from_dict(w, info) for w, info in words.items()},
            extinct=tuple(ExtinctRecord.from_dict(i, e) for i, e in enumerate(extinct)),
            compounds={w: CompoundInfo.from_dict(w, info) for w, info in compounds.items()},
            sound_shifts=tuple(ShiftRecord.from_dict(i, s) for i, s in enumerate(shifts)),
            stats=SourceCounters.from_dict(raw_stats) if raw_stats is not None else None,
        )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BirthEvent:
    """A word appeared. Living births carry fitness and age."""

    gen: int
    word: str
    meaning: str | None
    category: str | None
    alive: bool
    fitness: float | None = None
    age: int | None = None
    type: str = field(default="birth", init=False)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "type": self.type,
            "gen": self.gen,
            "word": self.word,
            "meaning": self.meaning,
            "category": self.category,
        }
        if self.alive:
            d["fitness"] = self.fitness
            d["age"] = self.age
        d["alive"] = self.alive
        return d


@dataclass(frozen=True)
class DeathEvent:
    gen: int
    word: str
    meaning: str | None
    category: str
    lifespan: int
    uses: int
    stillborn: bool
    type: str = field(default="death", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "gen": self.gen,
            "word": self.word,
            "meaning": self.meaning,
            "category": self.category,
            "lifespan": self.lifespan,
            "uses": self.uses,
            "stillborn": self.stillborn,
        }


@dataclass(frozen=True)
class CompoundEvent:
    gen: int
    word: str
    meaning: str
    parts: tuple[str, ...]
    part_meanings: tuple[str, ...]
    type: str = field(default="compound", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "gen": self.gen,
            "word": self.word,
            "meaning": self.meaning,
            "parts": list(self.parts),
            "partMeanings": list(self.part_meanings),
        }


@dataclass(frozen=True)
class ShiftEvent:
    gen: int
    from_: str
    to: str
    meaning: str | None
    type: str = field(default="shift", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "gen": self.gen,
            "from": self.from_,
            "to": self.to,
            "meaning": self.meaning,
        }


Event = BirthEvent | DeathEvent | CompoundEvent | ShiftEvent


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LivingWord:
    """Projection of a living word used by the statistics record."""

    word: str
    meaning: str
    category: str | None
    age: int
    fitness: float
    uses: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "meaning": self.meaning,
            "category": self.category,
            "age": self.age,
            "fitness": self.fitness,
            "uses": self.uses,
        }


@dataclass(frozen=True)
class LexiconStats:
    """Aggregate statistics over one snapshot."""

    generation: int
    population: int
    total_born: int
    total_dead: int
    total_compounds: int
    total_shifts: int
    mortality_rate: float
    avg_lifespan: float
    max_lifespan: int
    stillborn_count: int
    categories: dict[str | None, int]
    elder: LivingWord | None
    fittest: LivingWord | None
    living_words: tuple[LivingWord, ...]

    def to_dict(self) -> dict[str, Any]:
        elder = None
        if self.elder is not None:
            elder = {
                "word": self.elder.word,
                "meaning": self.elder.meaning,
                "age": self.elder.age,
                "fitness": self.elder.fitness,
            }
        fittest = None
        if self.fittest is not None:
            fittest = {
                "word": self.fittest.word,
                "meaning": self.fittest.meaning,
                "fitness": self.fittest.fitness,
            }
        return {
            "generation": self.generation,
            "population": self.population,
            "totalBorn": self.total_born,
            "totalDead": self.total_dead,
            "totalCompounds": self.total_compounds,
            "totalShifts": self.total_shifts,
            "mortalityRate": self.mortality_rate,
            "avgLifespan": self.avg_lifespan,
            "maxLifespan": self.max_lifespan,
            "stillbornCount": self.stillborn_count,
            "categories": dict(self.categories),
            "elder": elder,
            "fittest": fittest,
            "livingWords": [w.to_dict() for w in self.living_words],
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def now_iso() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2026-01-02T03:04:05.678Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
