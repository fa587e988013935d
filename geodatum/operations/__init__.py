"""Coordinate operations: the abstract interface and concrete implementations."""

from geodatum.operations.base import (
    IDENTITY,
    CoordinateDimensionError,
    CoordinateOperation,
    CoordinateOperationError,
    Identity,
    NonInvertibleOperationError,
)
from geodatum.operations.helmert import (
    GeocentricAffine,
    GeocentricTranslation,
    RotationConvention,
    SevenParameterTransformation,
)
from geodatum.operations.pyproj_operation import PyprojOperation
from geodatum.operations.sequence import CoordinateOperationSequence

__all__ = [
    # Interface and errors
    "CoordinateOperation",
    "CoordinateOperationError",
    "CoordinateDimensionError",
    "NonInvertibleOperationError",
    # Operations
    "IDENTITY",
    "Identity",
    "CoordinateOperationSequence",
    "GeocentricAffine",
    "GeocentricTranslation",
    "SevenParameterTransformation",
    "RotationConvention",
    "PyprojOperation",
]
