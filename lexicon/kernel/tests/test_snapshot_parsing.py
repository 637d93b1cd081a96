"""
Snapshot model — parsing the /api/state document.

Covers optional sections, defaults, iteration order and the shape errors that
abort a build.
"""

import pytest

from lexicon.kernel.tests.conftest import state_doc
from lexicon.kernel.types import Snapshot, SnapshotParseError


class TestOptionalSections:
    def test_missing_optional_sections_default_empty(self):
        snapshot = Snapshot.from_dict({"generation": 3, "words": {}})
        assert snapshot.extinct == ()
        assert snapshot.compounds == {}
        assert snapshot.sound_shifts == ()
        assert snapshot.stats is None

    def test_null_optional_sections_default_empty(self):
        snapshot = Snapshot.from_dict(state_doc(extinct=None, compounds=None, sound_shifts=None))
        assert snapshot.extinct == ()
        assert snapshot.compounds == {}
        assert snapshot.sound_shifts == ()

    def test_extinct_optional_fields(self):
        snapshot = Snapshot.from_dict(state_doc(extinct=[{"word": "zel", "meaning": "void", "born": 5}]))
        record = snapshot.extinct[0]
        assert record.category is None
        assert record.died is None
        assert record.uses is None

    def test_living_uses_defaults_to_zero(self):
        snapshot = Snapshot.from_dict(
            state_doc(words={"ba": {"born": 1, "meaning": "fire", "category": "noun", "fitness": 0.5}})
        )
        assert snapshot.words["ba"].uses == 0

    def test_living_category_not_defaulted(self):
        snapshot = Snapshot.from_dict(state_doc(words={"ba": {"born": 1, "meaning": "fire", "fitness": 0.5}}))
        assert snapshot.words["ba"].category is None

    def test_source_counters_partial(self):
        snapshot = Snapshot.from_dict(state_doc(stats={"total_generated": 12}))
        assert snapshot.stats.total_generated == 12
        assert snapshot.stats.total_extinct == 0
        assert snapshot.stats.total_shifts == 0

    def test_shift_from_key(self):
        snapshot = Snapshot.from_dict(state_doc(sound_shifts=[{"gen": 4, "from": "p", "to": "f", "meaning": "x"}]))
        assert snapshot.sound_shifts[0].from_ == "p"
        assert snapshot.sound_shifts[0].to == "f"


class TestOrder:
    def test_words_keep_document_order(self):
        words = {
            w: {"born": 1, "meaning": w, "category": "noun", "fitness": 0.1}
            for w in ["zo", "ab", "mi", "ca"]
        }
        snapshot = Snapshot.from_dict(state_doc(words=words))
        assert list(snapshot.words) == ["zo", "ab", "mi", "ca"]

    def test_reborn_words_kept_as_separate_records(self):
        snapshot = Snapshot.from_dict(
            state_doc(
                extinct=[
                    {"word": "zu", "meaning": "ash", "born": 1, "died": 3},
                    {"word": "zu", "meaning": "ash", "born": 5, "died": 9},
                ]
            )
        )
        assert [r.born for r in snapshot.extinct] == [1, 5]

    def test_whole_float_generation_accepted(self):
        snapshot = Snapshot.from_dict(state_doc(generation=12.0))
        assert snapshot.generation == 12
        assert isinstance(snapshot.generation, int)


class TestShapeErrors:
    def test_not_an_object(self):
        with pytest.raises(SnapshotParseError):
            Snapshot.from_dict(["not", "a", "snapshot"])

    def test_missing_generation(self):
        with pytest.raises(SnapshotParseError, match="generation"):
            Snapshot.from_dict({"words": {}})

    def test_missing_words(self):
        with pytest.raises(SnapshotParseError, match="words"):
            Snapshot.from_dict({"generation": 1})

    def test_word_missing_born(self):
        with pytest.raises(SnapshotParseError, match="born"):
            Snapshot.from_dict(state_doc(words={"ba": {"meaning": "fire", "category": "noun", "fitness": 0.1}}))

    def test_non_numeric_fitness(self):
        with pytest.raises(SnapshotParseError, match="fitness"):
            Snapshot.from_dict(
                state_doc(words={"ba": {"born": 1, "meaning": "fire", "category": "noun", "fitness": "high"}})
            )

    def test_boolean_generation_rejected(self):
        with pytest.raises(SnapshotParseError):
            Snapshot.from_dict(state_doc(generation=True))

    def test_fractional_generation_rejected(self):
        with pytest.raises(SnapshotParseError):
            Snapshot.from_dict(state_doc(generation=2.5))

    def test_extinct_not_a_list(self):
        with pytest.raises(SnapshotParseError, match="extinct"):
            Snapshot.from_dict(state_doc(extinct={"word": "zel"}))

    def test_shift_missing_to(self):
        with pytest.raises(SnapshotParseError, match="to"):
            Snapshot.from_dict(state_doc(sound_shifts=[{"gen": 1, "from": "p"}]))
