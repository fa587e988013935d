"""Per-datum registry of known transformations toward other datums."""

from __future__ import annotations

import threading
from enum import Enum
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from geodatum.datum import Datum
    from geodatum.operations.base import CoordinateOperation


class ResolutionState(Enum):
    """Resolution state of a target datum within a registry."""

    UNRESOLVED = "unresolved"
    """No entry yet: resolution has never been attempted or registered."""

    RESOLVED = "resolved"
    """At least one operation is known toward the target."""

    UNREACHABLE = "unreachable"
    """Resolution was attempted and found no path (negative cache entry)."""


class TransformationRegistry:
    """Mapping from target datum to the ordered operations reaching it.

    The first registered operation for a target is the preferred one. Entries
    are append-only: a target never returns to UNRESOLVED once recorded.
    All methods are thread-safe; each registry has its own lock.

    Targets whose entry was written by resolution (a derived sequence, a
    negative entry or a cached reverse) are tracked separately, since they
    depend on the reference datum in force when they were computed.
    """

    def __init__(self) -> None:
        self._entries: dict[Datum, list[CoordinateOperation]] = {}
        self._derived: set[Datum] = set()
        self._lock = threading.RLock()

    def register(self, target: Datum, op: CoordinateOperation) -> None:
        """Append an operation toward target, creating the entry if absent.

        Repeated registration of equivalent operations is kept as-is.
        """
        with self._lock:
            self._entries.setdefault(target, []).append(op)

    def register_derived(self, target: Datum, op: CoordinateOperation) -> None:
        """Append an operation computed by resolution toward target."""
        with self._lock:
            self._entries.setdefault(target, []).append(op)
            self._derived.add(target)

    def lookup(self, target: Datum) -> list[CoordinateOperation] | None:
        """Return a copy of the operations toward target.

        Returns:
            The cached list (possibly empty for an UNREACHABLE target), or
            None if the target has never been resolved.
        """
        with self._lock:
            ops = self._entries.get(target)
            return None if ops is None else list(ops)

    def state(self, target: Datum) -> ResolutionState:
        with self._lock:
            ops = self._entries.get(target)
        if ops is None:
            return ResolutionState.UNRESOLVED
        return ResolutionState.RESOLVED if ops else ResolutionState.UNREACHABLE

    def mark_unreachable(self, target: Datum) -> list[CoordinateOperation]:
        """Record a negative entry for target unless one already exists.

        Returns:
            Copy of the list now stored for target.
        """
        with self._lock:
            if target not in self._entries:
                self._entries[target] = []
                self._derived.add(target)
            return list(self._entries[target])

    def store_if_absent(
        self, target: Datum, ops: list[CoordinateOperation]
    ) -> tuple[list[CoordinateOperation], bool]:
        """Atomically store ops for target if no entry exists.

        Args:
            target: Target datum.
            ops: Operations to store.

        Returns:
            Tuple of (copy of the list now stored, whether ops were stored).
        """
        with self._lock:
            if target in self._entries:
                return list(self._entries[target]), False
            self._entries[target] = list(ops)
            self._derived.add(target)
            return list(ops), True

    def has_derived_entries(self) -> bool:
        """Whether any entry was written by resolution rather than registration."""
        with self._lock:
            return bool(self._derived)

    def targets(self) -> list[Datum]:
        """Target datums with an entry, in insertion order."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, target: object) -> bool:
        with self._lock:
            return target in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Datum]:
        return iter(self.targets())
