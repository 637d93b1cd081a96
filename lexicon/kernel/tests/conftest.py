"""
Lexicon kernel test configuration.

Snapshot documents shaped like the /api/state payload, shared across the
reconstruction, statistics and stream tests.
"""

from __future__ import annotations

import pytest

from lexicon.kernel.types import Snapshot


def state_doc(**overrides):
    """Minimal /api/state document; keyword arguments replace top-level keys."""
    doc = {
        "generation": 10,
        "words": {},
        "extinct": [],
        "compounds": {},
        "sound_shifts": [],
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def worked_example():
    """One living word and one stillborn extinct word at generation 10."""
    return Snapshot.from_dict(
        state_doc(
            words={"ba": {"born": 2, "meaning": "fire", "category": "noun", "fitness": 0.8, "uses": 5}},
            extinct=[{"word": "zel", "meaning": "void", "born": 1, "died": 4, "uses": 0}],
        )
    )


@pytest.fixture
def rich_snapshot():
    """Snapshot exercising every section, with ties inside generations."""
    return Snapshot.from_dict(
        state_doc(
            generation=40,
            words={
                "ka": {"born": 3, "meaning": "water", "category": "noun", "fitness": 0.9, "uses": 12},
                "mu": {"born": 3, "meaning": "to run", "category": "verb", "fitness": 0.4, "uses": 2},
                "tel": {"born": 20, "meaning": "bright", "category": "adjective", "fitness": 0.9, "uses": 7},
                "ro": {"born": 35, "meaning": "stone", "category": "noun", "fitness": 0.1, "uses": 0},
            },
            extinct=[
                {"word": "zu", "meaning": "ash", "category": "noun", "born": 1, "died": 3, "uses": 0},
                {"word": "vo", "meaning": "cold", "born": 2, "died": 20, "uses": 9},
                {"word": "pi", "meaning": "small", "category": "adjective", "born": 19},
                {"word": "zu", "meaning": "ash", "category": "noun", "born": 5, "died": 12, "uses": 3},
            ],
            compounds={
                "kamu": {
                    "born": 20,
                    "compound_meaning": "river",
                    "parts": ["ka", "mu"],
                    "meanings": ["water", "to run"],
                },
            },
            sound_shifts=[
                {"gen": 20, "from": "to", "to": "tel", "meaning": "bright"},
                {"gen": 3, "from": "kha", "to": "ka", "meaning": "water"},
            ],
            stats={"total_generated": 8, "total_extinct": 4, "total_shifts": 2},
        )
    )
