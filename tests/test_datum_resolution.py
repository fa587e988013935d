"""Tests for transformation resolution through the reference datum."""

from concurrent.futures import ThreadPoolExecutor
from typing import Sequence
from unittest import mock

import numpy as np
import pytest

import geodatum.datum as datum_module
from geodatum.datum import (
    Datum,
    ReferenceDatumError,
    set_reference_datum,
    set_reverse_caching,
)
from geodatum.identifier import Identifier
from geodatum.operations import (
    IDENTITY,
    CoordinateOperation,
    CoordinateOperationSequence,
    GeocentricTranslation,
    NonInvertibleOperationError,
)
from geodatum.operations.base import as_coordinate
from geodatum.registry import ResolutionState


class OneWayOperation(CoordinateOperation):
    """Operation without an inverse (drops the height)."""

    def __init__(self, name: str = "oneWay"):
        super().__init__(Identifier.local(name))

    def apply(self, coord: Sequence[float]) -> np.ndarray:
        xyz = as_coordinate(coord, dimension=3)
        xyz[2] = 0.0
        return xyz

    def inverse(self) -> CoordinateOperation:
        raise NonInvertibleOperationError(f"'{self.name}' discards the height")


@pytest.fixture
def op_ar() -> GeocentricTranslation:
    return GeocentricTranslation(1.0, 2.0, 3.0, identifier=Identifier.local("opAR"))


@pytest.fixture
def op_rb() -> GeocentricTranslation:
    return GeocentricTranslation(10.0, 0.0, 0.0, identifier=Identifier.local("opRB"))


@pytest.fixture
def datums(make_datum, reference, op_ar, op_rb) -> tuple[Datum, Datum, Datum]:
    """A, B and R with A->R and R->B registered."""
    a = make_datum("A")
    b = make_datum("B")
    a.register(reference, op_ar)
    reference.register(b, op_rb)
    return a, b, reference


def _counting_sequence():
    """Patch the sequence constructor used by resolution, counting derivations."""
    return mock.patch.object(
        datum_module,
        "CoordinateOperationSequence",
        wraps=CoordinateOperationSequence,
    )


class TestDatumAttributes:
    """Tests for datum identity and read-only attributes."""

    def test_accessors(self, make_datum) -> None:
        """Test extent, origin and epoch are returned as given."""
        datum = make_datum("A", origin="Pillar 1", epoch="2000.0")

        assert datum.extent is None
        assert datum.origin == "Pillar 1"
        assert datum.epoch == "2000.0"
        assert datum.short_name == "A"
        assert datum.name == "Datum A"

    def test_attributes_are_read_only(self, make_datum) -> None:
        """Test descriptive attributes cannot be reassigned."""
        datum = make_datum("A")

        with pytest.raises(AttributeError):
            datum.origin = "elsewhere"  # type: ignore[misc]

    def test_equality_by_identifier(self) -> None:
        """Test datums with the same identifier are equal and hash alike."""
        d1 = Datum(Identifier("TEST", "A", "First name"))
        d2 = Datum(Identifier("TEST", "A", "Other name"))
        d3 = Datum(Identifier("TEST", "B"))

        assert d1 == d2
        assert hash(d1) == hash(d2)
        assert d1 != d3


class TestResolveEndToEnd:
    """A -> B derived through R."""

    def test_derives_composite(self, datums) -> None:
        """Test resolve returns a single operation named after the convention."""
        a, b, _ = datums

        ops = a.resolve(b)

        assert len(ops) == 1
        assert ops[0].name == "AtoBthroughR"
        assert isinstance(ops[0], CoordinateOperationSequence)

    def test_composite_applies_both_hops(self, datums) -> None:
        """Test the derived operation applies A->R then R->B."""
        a, b, _ = datums

        result = a.resolve(b)[0].apply((0.0, 0.0, 0.0))

        np.testing.assert_allclose(result, [11.0, 2.0, 3.0])

    def test_caches_forward_and_reverse(self, datums) -> None:
        """Test the forward op is cached on A and its inverse on B."""
        a, b, _ = datums

        forward = a.resolve(b)

        assert a.lookup(b) == forward
        reverse = b.lookup(a)
        assert reverse is not None
        assert len(reverse) == 1

    def test_reverse_is_keyed_by_origin(self, datums) -> None:
        """Test the inverse is registered on B under A, not under B itself."""
        a, b, _ = datums

        a.resolve(b)

        assert b.lookup(a) is not None
        assert b.lookup(b) is None
        assert b.resolution_state(a) is ResolutionState.RESOLVED

    def test_reverse_undoes_forward(self, datums) -> None:
        """Test the cached reverse maps B coordinates back to A."""
        a, b, _ = datums
        forward = a.resolve(b)[0]
        reverse = b.resolve(a)[0]

        point = np.array([4201000.0, 168000.0, 4780000.0])

        np.testing.assert_allclose(reverse.apply(forward.apply(point)), point, atol=1e-6)


class TestMemoization:
    """Tests for result caching."""

    def test_second_call_does_not_derive(self, datums) -> None:
        """Test repeated resolution returns equal results with one derivation."""
        a, b, _ = datums

        with _counting_sequence() as sequence:
            first = a.resolve(b)
            second = a.resolve(b)

        assert sequence.call_count == 1
        assert first == second
        assert [op.name for op in first] == [op.name for op in second]

    def test_returns_copies(self, datums) -> None:
        """Test callers cannot modify the cached list."""
        a, b, _ = datums

        a.resolve(b).clear()

        assert len(a.resolve(b)) == 1

    def test_only_first_operation_is_composed(self, datums, reference, op_ar) -> None:
        """Test alternative operations beyond the first are ignored by derivation."""
        a, b, _ = datums
        alternative = GeocentricTranslation(5.0, 5.0, 5.0, identifier=Identifier.local("alt"))
        a.register(reference, alternative)

        composite = a.resolve(b)[0]

        assert composite.operations[0] is op_ar


class TestNegativeCaching:
    """Tests for pairs without a path."""

    def test_no_path_returns_empty(self, make_datum, reference) -> None:
        """Test unrelated datums resolve to an empty list, twice."""
        a = make_datum("A")
        c = make_datum("C")

        with _counting_sequence() as sequence:
            assert a.resolve(c) == []
            assert a.resolve(c) == []

        assert sequence.call_count == 0
        assert a.resolution_state(c) is ResolutionState.UNREACHABLE
        assert a.lookup(c) == []

    def test_missing_second_hop(self, datums, make_datum) -> None:
        """Test a known first hop alone is not enough."""
        a, _, _ = datums
        c = make_datum("C")

        assert a.resolve(c) == []

    def test_negative_result_is_not_retried(self, make_datum, reference) -> None:
        """Test registering hops later does not revive a negative entry."""
        a = make_datum("A")
        b = make_datum("B")
        assert a.resolve(b) == []

        a.register(reference, GeocentricTranslation(1.0, 0.0, 0.0))
        reference.register(b, GeocentricTranslation(0.0, 1.0, 0.0))

        assert a.resolve(b) == []

    def test_direct_registration_supersedes_negative(self, make_datum, reference) -> None:
        """Test an explicit registration replaces the negative entry."""
        a = make_datum("A")
        b = make_datum("B")
        assert a.resolve(b) == []

        direct = GeocentricTranslation(1.0, 1.0, 1.0, identifier=Identifier.local("direct"))
        a.register(b, direct)

        assert a.lookup(b) == [direct]
        assert a.resolve(b) == [direct]
        assert a.resolution_state(b) is ResolutionState.RESOLVED


class TestReverseTolerance:
    """Tests for the best-effort reverse caching."""

    def test_non_invertible_hop(self, make_datum, reference, op_ar) -> None:
        """Test forward resolution succeeds when the inverse cannot be built."""
        a = make_datum("A")
        b = make_datum("B")
        a.register(reference, op_ar)
        reference.register(b, OneWayOperation())

        ops = a.resolve(b)

        assert len(ops) == 1
        assert ops[0].name == "AtoBthroughR"
        assert b.lookup(a) is None
        assert b.resolution_state(a) is ResolutionState.UNRESOLVED

    def test_non_invertible_reverse_derived_independently(
        self, make_datum, reference, op_ar
    ) -> None:
        """Test the reverse path is later derived on its own through R."""
        a = make_datum("A")
        b = make_datum("B")
        a.register(reference, op_ar)
        reference.register(b, OneWayOperation())

        a.resolve(b)

        # B has no hop to R, so the reverse path is unreachable
        assert b.resolve(a) == []

    def test_reverse_caching_disabled(self, datums) -> None:
        """Test nothing is written to the target when reverse caching is off."""
        a, b, _ = datums
        set_reverse_caching(False)

        assert len(a.resolve(b)) == 1
        assert b.lookup(a) is None


class TestSelfAndReference:
    """Tests for self-resolution and the reference datum as endpoint."""

    def test_reference_to_itself(self, reference) -> None:
        """Test R -> R terminates with the identity."""
        assert reference.resolve(reference) == [IDENTITY]
        assert len(reference.registry) == 0

    def test_any_datum_to_itself(self, make_datum) -> None:
        """Test self-resolution needs no reference datum."""
        a = make_datum("A")
        set_reference_datum(None)

        assert a.resolve(a) == [IDENTITY]

    def test_to_reference_without_direct(self, make_datum, reference) -> None:
        """Test A -> R with nothing registered is unreachable, without recursion."""
        a = make_datum("A")

        assert a.resolve(reference) == []
        assert reference.resolve(a) == []
        assert a.resolution_state(reference) is ResolutionState.UNREACHABLE

    def test_to_reference_direct(self, datums, reference, op_ar) -> None:
        """Test a direct hop to R is returned as registered."""
        a, _, _ = datums

        assert a.resolve(reference) == [op_ar]

    def test_no_reference_installed(self, make_datum) -> None:
        """Test derivation without a reference datum is a configuration error."""
        a = make_datum("A")
        b = make_datum("B")
        set_reference_datum(None)

        with pytest.raises(ReferenceDatumError):
            a.resolve(b)

    def test_cached_entries_need_no_reference(self, make_datum) -> None:
        """Test direct registrations resolve even without a reference datum."""
        a = make_datum("A")
        b = make_datum("B")
        op = GeocentricTranslation(1.0, 0.0, 0.0)
        a.register(b, op)
        set_reference_datum(None)

        assert a.resolve(b) == [op]


class TestDescribe:
    """Tests for the diagnostic summary."""

    def test_empty(self, make_datum) -> None:
        """Test a datum without registrations lists no targets."""
        assert make_datum("A").describe() == "[TEST:A,Datum A] []"

    def test_lists_targets_in_order(self, datums) -> None:
        """Test targets appear in registration order."""
        a, b, _ = datums

        a.resolve(b)

        assert a.describe() == "[TEST:A,Datum A] [R - B]"
        assert str(a) == a.describe()

    def test_does_not_resolve(self, datums) -> None:
        """Test describe never triggers derivation."""
        a, b, _ = datums

        a.describe()
        b.describe()

        assert a.lookup(b) is None
        assert b.describe() == "[TEST:B,Datum B] []"


class TestConcurrentResolution:
    """Tests for concurrent resolution of the same pair."""

    def test_single_entry_per_target(self, datums) -> None:
        """Test concurrent resolution stores exactly one derived operation."""
        a, b, _ = datums

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: a.resolve(b), range(32)))

        stored = a.lookup(b)
        assert len(stored) == 1
        assert all(result == stored for result in results)
        assert len(b.lookup(a)) == 1
