"""
Datums and transformation resolution between them.

A datum is a reference frame against which coordinates are measured. Each
Datum owns a TransformationRegistry listing the operations known to convert
its coordinates into other datums.

When no direct transformation is known, Datum.resolve() derives one through
the reference datum (WGS84 unless configured otherwise):

    D1 -> R -> D2

The derived sequence is cached in D1's registry, and its inverse is cached in
D2's registry under D1 when it can be computed. Pairs for which no path
exists are cached as unreachable and never re-derived.

Resolution only ever goes through the single reference datum, so recursion
depth is at most two levels.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from geodatum.extent import Extent
from geodatum.identifier import Identifier
from geodatum.operations.base import (
    IDENTITY,
    CoordinateOperation,
    NonInvertibleOperationError,
)
from geodatum.operations.sequence import CoordinateOperationSequence
from geodatum.registry import ResolutionState, TransformationRegistry

logger = logging.getLogger(__name__)


class ReferenceDatumError(LookupError):
    """Raised when resolution needs a reference datum and none is installed."""


class DatumKind(Enum):
    """Kind of reference frame a datum describes."""

    GEODETIC = "geodetic"
    VERTICAL = "vertical"
    ENGINEERING = "engineering"


class Datum:
    """A geodetic reference frame and its known transformations.

    Datums are equal when their identifiers are equal, and are used as
    registry keys. Descriptive attributes are read-only; only the
    transformation registry changes after construction.

    Args:
        identifier: Unique identifier of the datum.
        extent: Domain of validity, or None when not declared.
        origin: Description of the origin or anchor point.
        epoch: Realization epoch (free text, e.g. "1989.0").
    """

    kind: Optional[DatumKind] = None

    def __init__(
        self,
        identifier: Identifier,
        extent: Extent | None = None,
        origin: str | None = None,
        epoch: str | None = None,
    ):
        self._identifier = identifier
        self._extent = extent
        self._origin = origin
        self._epoch = epoch
        self._registry = TransformationRegistry()

    @property
    def identifier(self) -> Identifier:
        return self._identifier

    @property
    def name(self) -> str:
        return self._identifier.name

    @property
    def short_name(self) -> str:
        return self._identifier.short_name

    @property
    def extent(self) -> Extent | None:
        """Valid extent of this datum, or None."""
        return self._extent

    @property
    def origin(self) -> str | None:
        """Description of this datum's origin."""
        return self._origin

    @property
    def epoch(self) -> str | None:
        """Realization epoch of this datum."""
        return self._epoch

    @property
    def registry(self) -> TransformationRegistry:
        return self._registry

    def register(self, target: Datum, op: CoordinateOperation) -> None:
        """Add a known transformation from this datum to target.

        Operations registered first are preferred. A direct registration also
        replaces the effect of an earlier unreachable result for target.
        """
        self._registry.register(target, op)
        logger.debug(f"Registered '{op.name}' from {self.short_name} to {target.short_name}")

    def lookup(self, target: Datum) -> list[CoordinateOperation] | None:
        """Return cached operations toward target, or None if never resolved.

        Never triggers resolution.
        """
        return self._registry.lookup(target)

    def resolution_state(self, target: Datum) -> ResolutionState:
        return self._registry.state(target)

    def resolve(self, target: Datum) -> list[CoordinateOperation]:
        """Return the operations transforming this datum's coordinates to target.

        Cached results are returned first. Otherwise an operation is derived
        through the reference datum R and cached.

        Side effects:
            - Stores the result (possibly an empty list) in this datum's registry.
            - When a new operation is derived, stores its inverse in target's
              registry under this datum, if the inverse can be computed.

        Args:
            target: Target datum.

        Returns:
            List of usable operations, first one preferred. An empty list
            means no transformation is known. ``[IDENTITY]`` when target is
            this datum.

        Raises:
            ReferenceDatumError: If derivation is needed and no reference
                datum is installed.
        """
        if target == self:
            return [IDENTITY]

        cached = self._registry.lookup(target)
        if cached is not None:
            logger.debug(
                f"Cache hit {self.short_name} -> {target.short_name}: {len(cached)} operation(s)"
            )
            return cached

        reference = get_reference_datum()
        if reference is None:
            raise ReferenceDatumError(
                f"No reference datum installed; cannot resolve "
                f"{self.short_name} -> {target.short_name}"
            )

        # No pivot through R when R is an endpoint
        if self == reference or target == reference:
            logger.debug(f"No transformation known from {self.short_name} to {target.short_name}")
            return self._registry.mark_unreachable(target)

        to_reference = self.resolve(reference)
        from_reference = reference.resolve(target)
        if not to_reference or not from_reference:
            logger.debug(
                f"No path from {self.short_name} to {target.short_name} "
                f"through {reference.short_name}"
            )
            return self._registry.mark_unreachable(target)

        identifier = Identifier.composite(
            self.short_name, target.short_name, reference.short_name
        )
        op = CoordinateOperationSequence(identifier, to_reference[0], from_reference[0])
        stored, created = self._registry.store_if_absent(target, [op])
        if not created:
            # Another thread resolved the same pair first
            return stored

        logger.info(f"Derived '{op.name}'")
        if _cache_reverse:
            self._cache_inverse(target, op)
        return stored

    def _cache_inverse(self, target: Datum, op: CoordinateOperation) -> None:
        try:
            reverse = op.inverse()
        except NonInvertibleOperationError as e:
            # Reverse path will be derived on its own if ever requested
            logger.debug(f"Not caching reverse of '{op.name}': {e}")
            return
        target.registry.register_derived(self, reverse)

    def describe(self) -> str:
        """Identifier followed by the short names of all cached targets.

        Reports only what is already in the registry; never resolves.
        """
        targets = " - ".join(t.short_name for t in self._registry.targets())
        return f"{self._identifier} [{targets}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        return self._identifier == other._identifier

    def __hash__(self) -> int:
        return hash(self._identifier)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identifier.key!r})"


# Reference datum (installed by geodatum.catalog at import)
_reference_datum: Optional[Datum] = None

# Whether derived operations also cache their inverse on the target datum
_cache_reverse: bool = True


def set_reference_datum(datum: Datum | None) -> None:
    """Install the datum used as pivot for derived transformations."""
    global _reference_datum
    _reference_datum = datum
    if datum is not None:
        logger.info(f"Reference datum set to {datum.short_name}")


def get_reference_datum() -> Datum | None:
    return _reference_datum


def set_reverse_caching(enabled: bool) -> None:
    """Enable or disable caching of inverse operations on target datums."""
    global _cache_reverse
    _cache_reverse = enabled


def is_reverse_caching_enabled() -> bool:
    return _cache_reverse
