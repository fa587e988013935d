"""Coordinate operation backed by a pyproj Transformer."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from geodatum.identifier import Identifier
from geodatum.operations.base import (
    CoordinateDimensionError,
    CoordinateOperation,
    CoordinateOperationError,
    as_coordinate,
)


class PyprojOperation(CoordinateOperation):
    """Transformation between two CRSs delegated to PROJ.

    Axis order is always (x/lon/easting, y/lat/northing[, z]) since the
    transformer is created with ``always_xy=True``.

    Args:
        source_crs: Any CRS definition accepted by pyproj (e.g., "EPSG:4326").
        target_crs: Target CRS definition.
        identifier: Operation identifier (default: LOCAL "<source>to<target>").

    Raises:
        CoordinateOperationError: If either CRS is unknown to PROJ.

    Example:
        >>> op = PyprojOperation("EPSG:4326", "EPSG:4978")
        >>> x, y, z = op.apply((2.35, 48.85, 0.0))
    """

    def __init__(self, source_crs: str, target_crs: str, identifier: Identifier | None = None):
        try:
            self.source_crs = CRS.from_user_input(source_crs)
            self.target_crs = CRS.from_user_input(target_crs)
        except CRSError as e:
            raise CoordinateOperationError(
                f"Cannot build operation from '{source_crs}' to '{target_crs}': {e}"
            ) from e
        self._source_def = source_crs
        self._target_def = target_crs
        if identifier is None:
            identifier = Identifier.local(f"{source_crs}to{target_crs}")
        super().__init__(identifier)
        self._transformer = Transformer.from_crs(self.source_crs, self.target_crs, always_xy=True)

    def apply(self, coord: Sequence[float]) -> np.ndarray:
        values = as_coordinate(coord)
        if values.shape[0] not in (2, 3):
            raise CoordinateDimensionError(
                f"Expected a 2-D or 3-D coordinate, got {values.shape[0]} values"
            )
        try:
            result = self._transformer.transform(*values.tolist(), errcheck=True)
        except ProjError as e:
            raise CoordinateOperationError(
                f"Operation '{self.name}' failed for {values.tolist()}: {e}"
            ) from e
        return np.array(result, dtype=np.float64)

    def inverse(self) -> CoordinateOperation:
        return PyprojOperation(
            self._target_def,
            self._source_def,
            identifier=Identifier.local(self.name + "_inverse"),
        )
