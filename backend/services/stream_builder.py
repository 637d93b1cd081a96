"""
Stream builder — one build of the lexicon stream.

Usage:
    builder = StreamBuilder(StateProvider(url), StreamStore(stream_file, snapshot_dir))
    result = await builder.build()

Steps: fetch snapshot → reconstruct events + aggregate stats → assemble the
stream document → write it as the current document → archive the raw
snapshot under its generation.

Any failure before the write leaves the current document untouched. Builds
are not safe to run concurrently with each other; the caller serializes them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from backend.services.state_provider import StateProvider
from backend.services.stream_store import StreamStore
from lexicon.kernel.events import count_by_type, reconstruct_events
from lexicon.kernel.stats import aggregate_stats
from lexicon.kernel.stream import stream_document
from lexicon.kernel.types import Snapshot, now_iso

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """What a build produced and where it was written."""

    generation: int
    population: int
    event_counts: dict[str, int]
    stream_path: Path
    archive_path: Path
    document: dict[str, Any]

    @property
    def total_events(self) -> int:
        return sum(self.event_counts.values())


class StreamBuilder:
    """Runs a build against a state provider and a stream store."""

    def __init__(
        self,
        provider: StateProvider,
        store: StreamStore,
        clock: Callable[[], str] = now_iso,
    ) -> None:
        self._provider = provider
        self._store = store
        self._clock = clock

    async def build(self, snapshot_file: Path | None = None) -> BuildResult:
        """
        Run one build.

        Args:
            snapshot_file: Build from this snapshot document on disk instead of
                fetching from the state provider

        Raises:
            SnapshotFetchError: State endpoint unreachable or returned bad data
            SnapshotParseError: Snapshot document has the wrong shape
            OSError: Snapshot file unreadable, or a write failed
        """
        if snapshot_file is not None:
            logger.info("Loading snapshot from %s", snapshot_file)
            state = self._store.load_snapshot(snapshot_file)
        else:
            state = await self._provider.fetch_state()

        return self.build_from_state(state, source=snapshot_file)

    def build_from_state(self, state: dict[str, Any], source: Path | None = None) -> BuildResult:
        """
        Derive, assemble and persist the stream for a raw snapshot document.

        When source is already the archive file for the snapshot's generation,
        the archive is left as it is.
        """
        snapshot = Snapshot.from_dict(state)
        logger.info("Gen %d, %d living words", snapshot.generation, len(snapshot.words))

        events = reconstruct_events(snapshot)
        stats = aggregate_stats(snapshot)
        counts = count_by_type(events)

        logger.info("Built %d events", len(events))
        logger.info(
            "  Births: %d  Deaths: %d  Compounds: %d  Shifts: %d",
            counts["birth"],
            counts["death"],
            counts["compound"],
            counts["shift"],
        )

        document = stream_document(snapshot, events, stats, self._clock())

        stream_path = self._store.write_current(document)
        logger.info("Written to %s", stream_path)

        archive_path = self._store.archive_path(snapshot.generation)
        if source is not None and Path(source).resolve() == archive_path.resolve():
            logger.info("Snapshot already archived: %s", archive_path.name)
        else:
            archive_path = self._store.archive_snapshot(snapshot.generation, state)
            logger.info("Snapshot saved: %s", archive_path.name)

        return BuildResult(
            generation=snapshot.generation,
            population=stats.population,
            event_counts=counts,
            stream_path=stream_path,
            archive_path=archive_path,
            document=document,
        )

