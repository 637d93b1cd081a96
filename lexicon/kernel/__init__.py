"""
Lexicon Kernel — the pure core.

Three components:
  types   — snapshot model, event and statistics records
  events  — snapshot → ordered event timeline  (pure, deterministic)
  stats   — snapshot → summary statistics      (pure, deterministic)

stream.assemble_stream combines the two into the served document.
"""

from lexicon.kernel.events import reconstruct_events
from lexicon.kernel.stats import aggregate_stats
from lexicon.kernel.stream import assemble_stream
from lexicon.kernel.types import Snapshot, SnapshotParseError

__all__ = [
    "Snapshot",
    "SnapshotParseError",
    "reconstruct_events",
    "aggregate_stats",
    "assemble_stream",
]
