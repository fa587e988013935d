#!/usr/bin/env python3
"""
Geocentric (Helmert-type) transformations between datums.

All operations in this module act on geocentric Cartesian coordinates
(X, Y, Z) in meters. They are the usual way published datum shifts are
expressed, e.g. "NTF to WGS84: tx=-168 m, ty=-60 m, tz=320 m".

Seven-parameter transformation (small-angle approximation):

    X_t = T + (1 + ds * 1e-6) * R * X_s

with T = (tx, ty, tz), ds the scale difference in ppm and, for the
position vector convention (EPSG method 9606):

        | 1    -rz   ry |
    R = | rz    1   -rx |
        | -ry   rx   1  |

The coordinate frame convention (EPSG method 9607) uses the same matrix with
the rotation signs flipped. Rotations are given in arc-seconds.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

import numpy as np

from geodatum.identifier import Identifier
from geodatum.operations.base import (
    CoordinateOperation,
    NonInvertibleOperationError,
    as_coordinate,
)
from geodatum.types import ArcSeconds, Meters, PartsPerMillion

# Condition number above which a geocentric matrix is treated as singular
MAX_CONDITION = 1.0 / np.finfo(np.float64).eps

ARCSEC_TO_RAD = math.pi / (180.0 * 3600.0)


class RotationConvention(Enum):
    """Sign convention of Helmert rotation parameters."""

    POSITION_VECTOR = "position_vector"
    """EPSG method 9606 (used by IERS and most European agencies)."""

    COORDINATE_FRAME = "coordinate_frame"
    """EPSG method 9607 (used by NIMA/NGA and most US publications)."""


class GeocentricAffine(CoordinateOperation):
    """Affine transformation ``X_t = M @ X_s + T`` of geocentric coordinates.

    Args:
        identifier: Operation identifier.
        matrix: 3x3 linear part.
        translation: 3-vector in meters.
        precision: Nominal precision in meters.
    """

    def __init__(
        self,
        identifier: Identifier,
        matrix: np.ndarray,
        translation: Sequence[float],
        precision: float = 0.0,
    ):
        super().__init__(identifier, precision=precision)
        self.matrix = np.array(matrix, dtype=np.float64)
        if self.matrix.shape != (3, 3):
            raise ValueError(f"Geocentric matrix must be 3x3, got shape {self.matrix.shape}")
        self.translation = as_coordinate(translation, dimension=3)

    def apply(self, coord: Sequence[float]) -> np.ndarray:
        xyz = as_coordinate(coord, dimension=3)
        return self.matrix @ xyz + self.translation

    def inverse(self) -> CoordinateOperation:
        cond = np.linalg.cond(self.matrix)
        if not np.isfinite(cond) or cond > MAX_CONDITION:
            raise NonInvertibleOperationError(
                f"Operation '{self.name}' has a singular matrix (condition number {cond:.3e})"
            )
        inv_matrix = np.linalg.inv(self.matrix)
        return GeocentricAffine(
            Identifier.local(self.name + "_inverse"),
            inv_matrix,
            -inv_matrix @ self.translation,
            precision=self.precision,
        )


class GeocentricTranslation(GeocentricAffine):
    """Three-parameter datum shift (EPSG method 9603)."""

    def __init__(
        self,
        tx: Meters,
        ty: Meters,
        tz: Meters,
        identifier: Identifier | None = None,
        precision: float = 0.0,
    ):
        if identifier is None:
            identifier = Identifier.local(f"Translation({tx:g}, {ty:g}, {tz:g})")
        super().__init__(identifier, np.eye(3), (tx, ty, tz), precision=precision)

    def inverse(self) -> CoordinateOperation:
        tx, ty, tz = (-self.translation).tolist()
        return GeocentricTranslation(
            Meters(tx),
            Meters(ty),
            Meters(tz),
            identifier=Identifier.local(self.name + "_inverse"),
            precision=self.precision,
        )


class SevenParameterTransformation(GeocentricAffine):
    """Seven-parameter Helmert transformation.

    Args:
        tx, ty, tz: Translations in meters.
        rx, ry, rz: Rotations in arc-seconds.
        ds: Scale difference in parts per million.
        convention: Rotation sign convention (default: position vector).
        identifier: Operation identifier (default: LOCAL name built from parameters).
        precision: Nominal precision in meters.
    """

    def __init__(
        self,
        tx: Meters,
        ty: Meters,
        tz: Meters,
        rx: ArcSeconds = ArcSeconds(0.0),
        ry: ArcSeconds = ArcSeconds(0.0),
        rz: ArcSeconds = ArcSeconds(0.0),
        ds: PartsPerMillion = PartsPerMillion(0.0),
        convention: RotationConvention = RotationConvention.POSITION_VECTOR,
        identifier: Identifier | None = None,
        precision: float = 0.0,
    ):
        self.parameters = (tx, ty, tz, rx, ry, rz, ds)
        self.convention = convention
        if identifier is None:
            identifier = Identifier.local(
                "Helmert(" + ", ".join(f"{p:g}" for p in self.parameters) + ")"
            )
        matrix = self.rotation_matrix(rx, ry, rz, ds, convention)
        super().__init__(identifier, matrix, (tx, ty, tz), precision=precision)

    @staticmethod
    def rotation_matrix(
        rx: ArcSeconds,
        ry: ArcSeconds,
        rz: ArcSeconds,
        ds: PartsPerMillion,
        convention: RotationConvention,
    ) -> np.ndarray:
        """Build the scaled small-angle rotation matrix."""
        sign = 1.0 if convention is RotationConvention.POSITION_VECTOR else -1.0
        ax = sign * rx * ARCSEC_TO_RAD
        ay = sign * ry * ARCSEC_TO_RAD
        az = sign * rz * ARCSEC_TO_RAD
        rotation = np.array(
            [
                [1.0, -az, ay],
                [az, 1.0, -ax],
                [-ay, ax, 1.0],
            ],
            dtype=np.float64,
        )
        return (1.0 + ds * 1e-6) * rotation
