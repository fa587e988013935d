"""
Abstract interface for coordinate operations.

A coordinate operation maps a coordinate expressed in one reference frame to
the same position expressed in another. The transformation registry and the
pivot resolution in :mod:`geodatum.datum` only rely on two capabilities:

    - apply(coord): transform a coordinate tuple
    - inverse(): produce the reverse operation, or raise
      NonInvertibleOperationError when none is defined

Coordinates are sequences of floats; operations return float64 numpy arrays.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from geodatum.identifier import Identifier


class CoordinateOperationError(Exception):
    """Raised when a coordinate operation cannot be built or applied."""


class NonInvertibleOperationError(CoordinateOperationError):
    """Raised by CoordinateOperation.inverse() when no inverse is defined."""


class CoordinateDimensionError(CoordinateOperationError, ValueError):
    """Raised when a coordinate has the wrong number of values for an operation."""


def as_coordinate(coord: Sequence[float], dimension: int | None = None) -> np.ndarray:
    """Convert a coordinate to a 1-D float64 array.

    Args:
        coord: Coordinate values.
        dimension: Required number of values, or None to accept any length.

    Returns:
        A new float64 array (the input is never modified).

    Raises:
        CoordinateDimensionError: If the coordinate is not 1-D or has the wrong size.
    """
    arr = np.array(coord, dtype=np.float64)
    if arr.ndim != 1:
        raise CoordinateDimensionError(f"Coordinate must be 1-D, got shape {arr.shape}")
    if dimension is not None and arr.shape[0] != dimension:
        raise CoordinateDimensionError(
            f"Expected a {dimension}-D coordinate, got {arr.shape[0]} values"
        )
    return arr


class CoordinateOperation(ABC):
    """Abstract base class for coordinate operations.

    Attributes:
        identifier: Identifier of this operation.
        precision: Nominal precision in meters, used for reporting only.
    """

    def __init__(self, identifier: Identifier, precision: float = 0.0):
        self.identifier = identifier
        self.precision = precision

    @property
    def name(self) -> str:
        return self.identifier.name

    @abstractmethod
    def apply(self, coord: Sequence[float]) -> np.ndarray:
        """Transform a single coordinate.

        Args:
            coord: Input coordinate.

        Returns:
            Transformed coordinate as a float64 array.

        Raises:
            CoordinateDimensionError: If coord has the wrong dimension.
            CoordinateOperationError: If the transformation fails.
        """

    @abstractmethod
    def inverse(self) -> CoordinateOperation:
        """Return the reverse operation.

        Raises:
            NonInvertibleOperationError: If this operation has no inverse.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier.name!r})"


class Identity(CoordinateOperation):
    """Operation that leaves coordinates unchanged."""

    def __init__(self, identifier: Identifier | None = None):
        super().__init__(identifier or Identifier.local("Identity"))

    def apply(self, coord: Sequence[float]) -> np.ndarray:
        return as_coordinate(coord)

    def inverse(self) -> CoordinateOperation:
        return self


IDENTITY = Identity()
