"""Geodetic, vertical and engineering datums with their reference surfaces."""

from __future__ import annotations

import math
from dataclasses import dataclass

from geodatum.datum import Datum, DatumKind, ReferenceDatumError, get_reference_datum
from geodatum.extent import Extent
from geodatum.identifier import Identifier
from geodatum.operations.base import CoordinateOperation
from geodatum.types import Degrees, Meters, Unitless


@dataclass(frozen=True)
class Ellipsoid:
    """Reference ellipsoid defined by its semi-major axis and inverse flattening.

    Attributes:
        name: Ellipsoid name.
        semi_major_axis: Equatorial radius in meters.
        inverse_flattening: 1/f. Use ``math.inf`` for a sphere.
    """

    name: str
    semi_major_axis: Meters
    inverse_flattening: Unitless

    def __post_init__(self) -> None:
        if self.semi_major_axis <= 0:
            raise ValueError(f"semi_major_axis must be positive, got {self.semi_major_axis}")
        if self.inverse_flattening <= 1:
            raise ValueError(
                f"inverse_flattening must be greater than 1, got {self.inverse_flattening}"
            )

    @property
    def flattening(self) -> Unitless:
        if math.isinf(self.inverse_flattening):
            return Unitless(0.0)
        return Unitless(1.0 / self.inverse_flattening)

    @property
    def semi_minor_axis(self) -> Meters:
        return Meters(self.semi_major_axis * (1.0 - self.flattening))

    @property
    def eccentricity_squared(self) -> Unitless:
        f = self.flattening
        return Unitless(f * (2.0 - f))


@dataclass(frozen=True)
class PrimeMeridian:
    """Prime meridian and its longitude from Greenwich."""

    name: str
    longitude_deg: Degrees = Degrees(0.0)


GRS80 = Ellipsoid("GRS 1980", Meters(6378137.0), Unitless(298.257222101))
WGS84_ELLIPSOID = Ellipsoid("WGS 84", Meters(6378137.0), Unitless(298.257223563))
CLARKE_1880_IGN = Ellipsoid("Clarke 1880 (IGN)", Meters(6378249.2), Unitless(293.4660212936269))
INTERNATIONAL_1924 = Ellipsoid("International 1924", Meters(6378388.0), Unitless(297.0))

GREENWICH = PrimeMeridian("Greenwich")
PARIS = PrimeMeridian("Paris", Degrees(2.33722917))


class GeodeticDatum(Datum):
    """Horizontal datum based on an ellipsoid and a prime meridian."""

    kind = DatumKind.GEODETIC

    def __init__(
        self,
        identifier: Identifier,
        ellipsoid: Ellipsoid,
        prime_meridian: PrimeMeridian = GREENWICH,
        extent: Extent | None = None,
        origin: str | None = None,
        epoch: str | None = None,
    ):
        super().__init__(identifier, extent=extent, origin=origin, epoch=epoch)
        self.ellipsoid = ellipsoid
        self.prime_meridian = prime_meridian

    def to_reference(self) -> list[CoordinateOperation]:
        """Operations from this datum to the installed reference datum.

        Raises:
            ReferenceDatumError: If no reference datum is installed.
        """
        reference = get_reference_datum()
        if reference is None:
            raise ReferenceDatumError(f"No reference datum installed for {self.short_name}")
        return self.resolve(reference)


class VerticalDatum(Datum):
    """Reference surface for heights (e.g., a geoid or mean sea level)."""

    kind = DatumKind.VERTICAL


class EngineeringDatum(Datum):
    """Local datum for engineering or site coordinates."""

    kind = DatumKind.ENGINEERING
