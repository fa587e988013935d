"""
Unit type annotations for type-safe numeric parameters.

This module defines NewType aliases for the physical units used across the
geodatum package. They are zero-overhead type hints that help catch unit
mismatches at static analysis time while remaining transparent at runtime.

Usage Example:
    >>> from geodatum.types import ArcSeconds, Meters, PartsPerMillion
    >>>
    >>> def helmert(tx: Meters, rx: ArcSeconds, ds: PartsPerMillion) -> None:
    ...     pass
"""

from typing import NewType

# Angular units
Degrees = NewType('Degrees', float)
"""Angle in degrees (e.g., latitude, longitude, prime meridian offset)"""

ArcSeconds = NewType('ArcSeconds', float)
"""Angle in arc-seconds (e.g., published Helmert rotation parameters)"""

# Distance/position units
Meters = NewType('Meters', float)
"""Distance or position in meters (e.g., geocentric X, Y, Z, translations, axes)"""

# Dimensionless quantities
PartsPerMillion = NewType('PartsPerMillion', float)
"""Scale difference in parts per million (e.g., Helmert scale parameter)"""

Unitless = NewType('Unitless', float)
"""Dimensionless scalar (e.g., flattening, eccentricity, ratios)"""
