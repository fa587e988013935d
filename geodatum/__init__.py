"""
Geodetic Datum Transformation Package.

This package models geodetic reference frames (datums) and resolves the
coordinate operations that convert coordinates between them.

Each datum keeps a registry of known transformations toward other datums.
When no direct transformation is registered, one is derived by composing
"source -> reference datum" with "reference datum -> target" and cached on
both endpoints (the reverse only when the operation can be inverted).

Example Usage:
    >>> from geodatum import NTF, ED50
    >>>
    >>> ops = NTF.resolve(ED50)
    >>> if ops:
    ...     x, y, z = ops[0].apply((4201000.0, 168000.0, 4780000.0))
    >>> print(ED50.describe())
    [EPSG:6230,European Datum 1950] [WGS84 - NTF]

Available Classes:
    Datums:
        - Datum: Base datum with transformation registry and resolution
        - GeodeticDatum, VerticalDatum, EngineeringDatum: Datum kinds
        - Ellipsoid, PrimeMeridian: Geodetic reference surfaces
        - DatumCatalog: Lookup of datums by code or short name

    Operations:
        - CoordinateOperation: Base interface (apply / inverse)
        - CoordinateOperationSequence: Composite of chained operations
        - GeocentricTranslation, SevenParameterTransformation: Helmert shifts
        - PyprojOperation: CRS-to-CRS operation delegated to PROJ
"""

# Identifiers and extents
from geodatum.identifier import Identifier
from geodatum.extent import WORLD, Extent, GeographicExtent

# Operations
from geodatum.operations import (
    IDENTITY,
    CoordinateDimensionError,
    CoordinateOperation,
    CoordinateOperationError,
    CoordinateOperationSequence,
    GeocentricTranslation,
    Identity,
    NonInvertibleOperationError,
    PyprojOperation,
    RotationConvention,
    SevenParameterTransformation,
)

# Datums and resolution
from geodatum.registry import ResolutionState, TransformationRegistry
from geodatum.datum import (
    Datum,
    DatumKind,
    ReferenceDatumError,
    get_reference_datum,
    set_reference_datum,
)
from geodatum.geodetic import (
    EngineeringDatum,
    Ellipsoid,
    GeodeticDatum,
    PrimeMeridian,
    VerticalDatum,
)

# Catalog and configuration
from geodatum.catalog import (
    ED50,
    ETRS89,
    NAD83,
    NTF,
    WGS84,
    DatumCatalog,
    configure,
    default_catalog,
)
from geodatum.config import GeodatumConfig, get_default_config

# Define public API
__all__ = [
    # Identifiers and extents
    'Identifier',
    'Extent',
    'GeographicExtent',
    'WORLD',

    # Operations
    'CoordinateOperation',
    'CoordinateOperationError',
    'CoordinateDimensionError',
    'NonInvertibleOperationError',
    'IDENTITY',
    'Identity',
    'CoordinateOperationSequence',
    'GeocentricTranslation',
    'SevenParameterTransformation',
    'RotationConvention',
    'PyprojOperation',

    # Datums
    'Datum',
    'DatumKind',
    'ReferenceDatumError',
    'ResolutionState',
    'TransformationRegistry',
    'GeodeticDatum',
    'VerticalDatum',
    'EngineeringDatum',
    'Ellipsoid',
    'PrimeMeridian',
    'get_reference_datum',
    'set_reference_datum',

    # Catalog and configuration
    'WGS84',
    'ETRS89',
    'NTF',
    'ED50',
    'NAD83',
    'DatumCatalog',
    'default_catalog',
    'configure',
    'GeodatumConfig',
    'get_default_config',
]

# Package metadata
__version__ = '0.1.0'
__description__ = 'Geodetic datums and transformation resolution through a reference datum'
