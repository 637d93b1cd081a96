"""
Stream assembly — the document persisted and served.
"""

import json
import re

from lexicon.kernel.stream import assemble_stream


def test_document_shape(worked_example):
    doc = assemble_stream(worked_example, generated="2026-03-01T12:00:00.000Z")
    assert list(doc) == ["generated", "generation", "stats", "events"]
    assert doc["generated"] == "2026-03-01T12:00:00.000Z"
    assert doc["generation"] == 10
    assert doc["stats"]["population"] == 1
    assert [(e["type"], e["word"]) for e in doc["events"]] == [
        ("birth", "zel"),
        ("birth", "ba"),
        ("death", "zel"),
    ]


def test_generated_defaults_to_now(worked_example):
    doc = assemble_stream(worked_example)
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", doc["generated"])


def test_document_is_json_serializable(rich_snapshot):
    doc = assemble_stream(rich_snapshot, generated="2026-03-01T12:00:00.000Z")
    assert json.loads(json.dumps(doc)) == doc
