"""Validity extents for datums."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from geodatum.types import Degrees


class Extent(Protocol):
    """Protocol for the domain of validity of a datum."""

    name: str

    def is_inside(self, coord: Sequence[float]) -> bool:
        """Return True if the coordinate lies within this extent."""
        ...


@dataclass(frozen=True)
class GeographicExtent:
    """Latitude/longitude bounding box.

    Coordinates passed to :meth:`is_inside` are ``(lon, lat, ...)``, following
    the same axis order as pyproj with ``always_xy=True``. Longitude bounds may
    cross the antimeridian (``west_lon > east_lon``).

    Attributes:
        name: Descriptive name of the area (e.g., "France").
        south_lat: Southern bound in degrees.
        north_lat: Northern bound in degrees.
        west_lon: Western bound in degrees.
        east_lon: Eastern bound in degrees.
    """

    name: str
    south_lat: Degrees
    north_lat: Degrees
    west_lon: Degrees
    east_lon: Degrees

    def __post_init__(self) -> None:
        if not -90.0 <= self.south_lat <= self.north_lat <= 90.0:
            raise ValueError(
                f"Invalid latitude bounds for extent '{self.name}': "
                f"south={self.south_lat}, north={self.north_lat}"
            )
        for lon in (self.west_lon, self.east_lon):
            if not -180.0 <= lon <= 180.0:
                raise ValueError(
                    f"Longitude {lon} out of range [-180, 180] for extent '{self.name}'"
                )

    def is_inside(self, coord: Sequence[float]) -> bool:
        if len(coord) < 2:
            raise ValueError(f"Expected at least (lon, lat), got {len(coord)} values")
        lon, lat = coord[0], coord[1]
        if not self.south_lat <= lat <= self.north_lat:
            return False
        if self.west_lon <= self.east_lon:
            return self.west_lon <= lon <= self.east_lon
        # Crosses the antimeridian
        return lon >= self.west_lon or lon <= self.east_lon


WORLD = GeographicExtent(
    name="World",
    south_lat=Degrees(-90.0),
    north_lat=Degrees(90.0),
    west_lon=Degrees(-180.0),
    east_lon=Degrees(180.0),
)
