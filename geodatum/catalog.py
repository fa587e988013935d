"""
Built-in catalog of well-known datums.

Each datum is registered with its published geocentric translation to WGS84
(and the inverse on WGS84), and WGS84 is installed as the reference datum
when this module is imported. Transformations between any two of these
datums are then derived on demand through WGS84:

    >>> from geodatum.catalog import NTF, ED50
    >>> ops = NTF.resolve(ED50)
    >>> ops[0].name
    'NTFtoED50throughWGS84'

Parameters are the EPSG "to WGS 84" translations (EPSG:1149, 1193, 1133, 1188).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from geodatum.datum import (
    Datum,
    get_reference_datum,
    set_reference_datum,
    set_reverse_caching,
)
from geodatum.extent import WORLD, GeographicExtent
from geodatum.geodetic import (
    CLARKE_1880_IGN,
    GRS80,
    INTERNATIONAL_1924,
    WGS84_ELLIPSOID,
    GeodeticDatum,
)
from geodatum.identifier import Identifier
from geodatum.operations.base import CoordinateOperation, NonInvertibleOperationError
from geodatum.operations.helmert import GeocentricTranslation
from geodatum.types import Degrees, Meters

if TYPE_CHECKING:
    from geodatum.config import GeodatumConfig

logger = logging.getLogger(__name__)


class DatumCatalog:
    """Lookup of datums by ``authority:code``, code, or short name."""

    def __init__(self, datums: list[Datum] | None = None):
        self._datums: dict[str, Datum] = {}
        for datum in datums or []:
            self.add(datum)

    def add(self, datum: Datum) -> None:
        """Add a datum.

        Raises:
            ValueError: If a datum with the same identifier or short name exists.
        """
        key = datum.identifier.key
        if key in self._datums:
            raise ValueError(f"Datum {key} is already in the catalog")
        if any(d.short_name == datum.short_name for d in self._datums.values()):
            raise ValueError(f"Short name '{datum.short_name}' is already in the catalog")
        self._datums[key] = datum

    def get(self, name: str) -> Datum:
        """Find a datum by ``authority:code``, short name, or bare code.

        Matching is tried in that order. Short names are matched
        case-insensitively. A bare code shared by datums of several
        authorities is refused; use ``authority:code`` instead.

        Raises:
            KeyError: If no datum matches, or a bare code is ambiguous.
        """
        if name in self._datums:
            return self._datums[name]
        lowered = name.lower()
        for datum in self._datums.values():
            if datum.short_name.lower() == lowered:
                return datum
        matches = [d for d in self._datums.values() if d.identifier.code == name]
        if len(matches) > 1:
            keys = ", ".join(d.identifier.key for d in matches)
            raise KeyError(f"Ambiguous datum code: {name}. Use one of: {keys}")
        if matches:
            return matches[0]
        available = ", ".join(self.names())
        raise KeyError(f"Unknown datum: {name}. Available: {available}")

    def names(self) -> list[str]:
        return [d.short_name for d in self._datums.values()]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self.get(name)
        except KeyError:
            return False
        return True

    def __iter__(self) -> Iterator[Datum]:
        return iter(list(self._datums.values()))

    def __len__(self) -> int:
        return len(self._datums)


def register_with_inverse(source: Datum, target: Datum, op: CoordinateOperation) -> None:
    """Register op from source to target, and its inverse from target to source."""
    source.register(target, op)
    try:
        target.register(source, op.inverse())
    except NonInvertibleOperationError:
        logger.warning(f"'{op.name}' is not invertible; registered {source.short_name} side only")


WGS84 = GeodeticDatum(
    Identifier("EPSG", "6326", "World Geodetic System 1984", "WGS84"),
    WGS84_ELLIPSOID,
    extent=WORLD,
    origin="Earth centre of mass",
    epoch="1984",
)

ETRS89 = GeodeticDatum(
    Identifier("EPSG", "6258", "European Terrestrial Reference System 1989", "ETRS89"),
    GRS80,
    extent=GeographicExtent(
        "Europe - ETRF by country", Degrees(32.88), Degrees(84.73), Degrees(-16.1), Degrees(40.18)
    ),
    origin="Fixed to the stable part of the Eurasian plate",
    epoch="1989.0",
)

NTF = GeodeticDatum(
    Identifier("EPSG", "6275", "Nouvelle Triangulation Francaise", "NTF"),
    CLARKE_1880_IGN,
    extent=GeographicExtent(
        "France - onshore", Degrees(41.31), Degrees(51.14), Degrees(-4.87), Degrees(9.63)
    ),
    origin="Pantheon, Paris",
    epoch=None,
)

ED50 = GeodeticDatum(
    Identifier("EPSG", "6230", "European Datum 1950", "ED50"),
    INTERNATIONAL_1924,
    extent=GeographicExtent(
        "Europe - ED50 by country", Degrees(34.88), Degrees(84.73), Degrees(-10.56), Degrees(40.18)
    ),
    origin="Fundamental point: Potsdam (Helmert Tower)",
    epoch="1950",
)

NAD83 = GeodeticDatum(
    Identifier("EPSG", "6269", "North American Datum 1983", "NAD83"),
    GRS80,
    extent=GeographicExtent(
        "North America - NAD83", Degrees(14.92), Degrees(86.46), Degrees(167.65), Degrees(-40.73)
    ),
    origin="Origin at geocentre",
    epoch="1986",
)

_TO_WGS84 = {
    ETRS89: GeocentricTranslation(
        Meters(0.0), Meters(0.0), Meters(0.0),
        identifier=Identifier("EPSG", "1149", "ETRS89 to WGS 84 (1)"), precision=1.0,
    ),
    NTF: GeocentricTranslation(
        Meters(-168.0), Meters(-60.0), Meters(320.0),
        identifier=Identifier("EPSG", "1193", "NTF to WGS 84 (1)"), precision=2.0,
    ),
    ED50: GeocentricTranslation(
        Meters(-87.0), Meters(-98.0), Meters(-121.0),
        identifier=Identifier("EPSG", "1133", "ED50 to WGS 84 (1)"), precision=10.0,
    ),
    NAD83: GeocentricTranslation(
        Meters(0.0), Meters(0.0), Meters(0.0),
        identifier=Identifier("EPSG", "1188", "NAD83 to WGS 84 (1)"), precision=4.0,
    ),
}

for _datum, _op in _TO_WGS84.items():
    register_with_inverse(_datum, WGS84, _op)

set_reference_datum(WGS84)

_default_catalog = DatumCatalog([WGS84, ETRS89, NTF, ED50, NAD83])


def default_catalog() -> DatumCatalog:
    """Return the catalog of built-in datums."""
    return _default_catalog


def configure(config: GeodatumConfig, catalog: DatumCatalog | None = None) -> Datum:
    """Apply runtime settings.

    Installs the configured reference datum, the reverse caching flag and the
    log level of the ``geodatum`` logger.

    Derived and negative entries depend on the reference datum they were
    computed through, so the reference can only be changed before any datum
    of the catalog has resolved a derived pair. Run ``configure`` at startup.
    A reference that some catalog datums cannot reach directly is accepted
    with a warning: derived pairs involving those datums resolve to ``[]``.

    Args:
        config: Settings to apply.
        catalog: Catalog in which the reference datum is looked up
            (default: built-in catalog).

    Returns:
        The installed reference datum.

    Raises:
        ValueError: If the reference datum is not in the catalog, or if it
            differs from the current one after derived entries were cached.
    """
    catalog = catalog if catalog is not None else default_catalog()
    try:
        reference = catalog.get(config.reference_datum)
    except KeyError as e:
        raise ValueError(f"Invalid reference_datum: {e.args[0]}") from None

    current = get_reference_datum()
    if reference != current:
        derived = [d.short_name for d in catalog if d.registry.has_derived_entries()]
        if derived:
            raise ValueError(
                f"Cannot change reference_datum to {reference.short_name}: "
                f"{', '.join(derived)} already cached transformations derived "
                f"through {current.short_name if current else 'no reference'}"
            )
        unreachable = [d.short_name for d in catalog if d != reference and not d.lookup(reference)]
        if unreachable:
            logger.warning(
                f"Reference datum {reference.short_name} has no registered transformation "
                f"from {', '.join(unreachable)}; derived pairs involving them are unreachable"
            )

    set_reference_datum(reference)
    set_reverse_caching(config.cache_reverse)
    logging.getLogger("geodatum").setLevel(config.log_level)
    return reference
