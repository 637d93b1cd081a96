"""
File storage for stream documents and archived snapshots.

Layout:
    STREAM_FILE               current stream document (replaced on every build)
    SNAPSHOT_DIR/gen-<N>.json raw snapshot archived per generation

Every write goes to a temporary file in the target directory and is moved into
place with os.replace, so readers see either the old file or the new one.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from backend.models.stream import StreamDocument
from lexicon.kernel.types import SnapshotParseError

_ARCHIVE_RE = re.compile(r"^gen-(-?\d+)\.json$")


class StreamUnavailable(Exception):
    """No current stream document, or it cannot be read."""

    pass


def _write_json_atomic(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        # Leave nothing half-written behind
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class StreamStore:
    """Current stream document plus the per-generation snapshot archive."""

    def __init__(self, stream_file: Path, snapshot_dir: Path) -> None:
        self.stream_file = Path(stream_file)
        self.snapshot_dir = Path(snapshot_dir)

    # -------------------------------------------------------------------------
    # Current document
    # -------------------------------------------------------------------------

    def write_current(self, document: dict[str, Any]) -> Path:
        """Replace the current stream document. Returns its path."""
        _write_json_atomic(self.stream_file, document)
        return self.stream_file

    def read_current(self) -> dict[str, Any]:
        """
        Read the current stream document from disk.

        Reads the file on every call; nothing is cached.

        Raises:
            StreamUnavailable: If the file is missing, unreadable, not JSON, or
                not shaped like a stream document
        """
        try:
            raw = self.stream_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StreamUnavailable(f"Cannot read {self.stream_file}: {e}") from e

        try:
            document = json.loads(raw)
            StreamDocument.model_validate(document)
        except (json.JSONDecodeError, ValidationError) as e:
            raise StreamUnavailable(f"Corrupt stream document {self.stream_file}: {e}") from e

        return document

    # -------------------------------------------------------------------------
    # Snapshot archive
    # -------------------------------------------------------------------------

    def archive_path(self, generation: int) -> Path:
        return self.snapshot_dir / f"gen-{generation}.json"

    def archive_snapshot(self, generation: int, state: dict[str, Any]) -> Path:
        """
        Save the raw snapshot for a generation.

        Archiving the same generation twice overwrites the earlier file.
        """
        path = self.archive_path(generation)
        _write_json_atomic(path, state)
        return path

    def load_snapshot(self, path: Path) -> dict[str, Any]:
        """
        Read a raw snapshot document (e.g. an archived generation) from disk.

        Raises:
            OSError: If the file cannot be read
            SnapshotParseError: If the file is not UTF-8 encoded JSON
        """
        with open(path, encoding="utf-8") as f:
            try:
                return json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise SnapshotParseError(f"{path} is not valid JSON: {e}") from e

    def archived_generations(self) -> list[int]:
        """Generations present in the archive, ascending."""
        if not self.snapshot_dir.is_dir():
            return []
        generations = []
        for entry in self.snapshot_dir.iterdir():
            match = _ARCHIVE_RE.match(entry.name)
            if match:
                generations.append(int(match.group(1)))
        return sorted(generations)
