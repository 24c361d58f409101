"""
Shared sync state between the sampler and the reporter.

Both periodic tasks only ever touch SyncedCount and SyncSnapshot through
this object; every access takes the same lock and none holds it across I/O.
"""

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SyncProgress:
    """Progress object returned by the node while it is catching up."""
    current_block: int
    highest_block: int
    starting_block: Optional[int] = None


@dataclass(frozen=True)
class SyncSnapshot:
    """Most recent successful observation of the node."""
    synced: bool
    current_block: Optional[int] = None
    highest_block: Optional[int] = None

    @classmethod
    def fully_synced(cls) -> "SyncSnapshot":
        return cls(synced=True)

    @classmethod
    def from_progress(cls, progress: SyncProgress) -> "SyncSnapshot":
        return cls(
            synced=False,
            current_block=progress.current_block,
            highest_block=progress.highest_block,
        )


class SyncState:
    """Synced-sample counter for the current reporting window plus the last snapshot."""

    def __init__(self):
        self._lock = threading.Lock()
        self._synced_count = 0
        self._snapshot: Optional[SyncSnapshot] = None

    def record_synced(self) -> None:
        with self._lock:
            self._synced_count += 1
            self._snapshot = SyncSnapshot.fully_synced()

    def record_syncing(self, progress: SyncProgress) -> None:
        with self._lock:
            self._snapshot = SyncSnapshot.from_progress(progress)

    @property
    def synced_count(self) -> int:
        with self._lock:
            return self._synced_count

    @property
    def snapshot(self) -> Optional[SyncSnapshot]:
        with self._lock:
            return self._snapshot

    def drain(self) -> tuple[int, Optional[SyncSnapshot]]:
        """Atomically read and zero the counter; also returns the snapshot seen at that instant."""
        with self._lock:
            count, self._synced_count = self._synced_count, 0
            return count, self._snapshot
