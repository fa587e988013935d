"""Shared fixtures for geodatum tests."""

import logging

import pytest

from geodatum.catalog import default_catalog
from geodatum.datum import (
    Datum,
    get_reference_datum,
    is_reverse_caching_enabled,
    set_reference_datum,
    set_reverse_caching,
)
from geodatum.identifier import Identifier


@pytest.fixture(autouse=True)
def restore_settings():
    """Restore the reference datum, reverse caching and log level after each test."""
    reference = get_reference_datum()
    cache_reverse = is_reverse_caching_enabled()
    level = logging.getLogger("geodatum").level
    yield
    set_reference_datum(reference)
    set_reverse_caching(cache_reverse)
    logging.getLogger("geodatum").setLevel(level)


@pytest.fixture(autouse=True)
def restore_catalog_registries():
    """Reset the built-in datums' registries to their import-time contents after each test.

    The built-in datums are module singletons, so anything a test resolves
    through them would otherwise be visible to every later test.
    """
    registries = [datum.registry for datum in default_catalog()]
    saved = [
        ({target: list(ops) for target, ops in r._entries.items()}, set(r._derived))
        for r in registries
    ]
    yield
    for registry, (entries, derived) in zip(registries, saved):
        with registry._lock:
            registry._entries = entries
            registry._derived = derived


@pytest.fixture
def make_datum():
    """Factory for test datums in the TEST authority."""

    def _make(short_name: str, **kwargs) -> Datum:
        return Datum(Identifier("TEST", short_name, f"Datum {short_name}", short_name), **kwargs)

    return _make


@pytest.fixture
def reference(make_datum) -> Datum:
    """A fresh reference datum 'R', installed for the duration of the test."""
    datum = make_datum("R")
    set_reference_datum(datum)
    return datum
