"""Composite operation applying a chain of operations in order."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from geodatum.identifier import Identifier
from geodatum.operations.base import (
    CoordinateOperation,
    NonInvertibleOperationError,
    as_coordinate,
)

logger = logging.getLogger(__name__)

INVERSE_SUFFIX = "_inverse"


class CoordinateOperationSequence(CoordinateOperation):
    """Ordered sequence of two or more coordinate operations.

    Component operations are shared read-only: the same operation instance
    may take part in several sequences.

    Args:
        identifier: Identifier of the composite operation.
        *operations: Components, applied first to last.

    Raises:
        ValueError: If fewer than two operations are given.

    Example:
        >>> seq = CoordinateOperationSequence(
        ...     Identifier.composite("NTF", "ED50", "WGS84"),
        ...     ntf_to_wgs84,
        ...     wgs84_to_ed50,
        ... )
        >>> seq.apply((4201000.0, 168000.0, 4780000.0))
    """

    def __init__(self, identifier: Identifier, *operations: CoordinateOperation):
        if len(operations) < 2:
            raise ValueError(
                f"A coordinate operation sequence needs at least 2 operations, "
                f"got {len(operations)}"
            )
        precision = sum(op.precision for op in operations)
        super().__init__(identifier, precision=precision)
        self.operations: tuple[CoordinateOperation, ...] = tuple(operations)

    def apply(self, coord: Sequence[float]) -> np.ndarray:
        result = as_coordinate(coord)
        for op in self.operations:
            result = op.apply(result)
        return result

    def inverse(self) -> CoordinateOperation:
        """Return the sequence of component inverses, in reverse order.

        Raises:
            NonInvertibleOperationError: If any component cannot be inverted.
        """
        inverses = []
        for op in reversed(self.operations):
            try:
                inverses.append(op.inverse())
            except NonInvertibleOperationError as e:
                raise NonInvertibleOperationError(
                    f"Cannot invert sequence '{self.name}': component '{op.name}' "
                    f"is not invertible"
                ) from e
        identifier = Identifier.local(self.name + INVERSE_SUFFIX)
        logger.debug(f"Built inverse of sequence '{self.name}' ({len(inverses)} steps)")
        return CoordinateOperationSequence(identifier, *inverses)

    def __len__(self) -> int:
        return len(self.operations)
