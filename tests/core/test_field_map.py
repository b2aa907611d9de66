#!filepath: tests/core/test_field_map.py
import pytest

from namedvec.core.field_map import FieldMap
from namedvec.core.regions import ArrayRegion, NestedRegion, ScalarRegion
from namedvec.utils.errors import LayoutError, UnknownFieldError


@pytest.fixture
def fm() -> FieldMap:
    return FieldMap(
        ["a", "b", "c"],
        [ArrayRegion(0, 1, (1,)), ArrayRegion(1, 3, (2,)), ScalarRegion(3)],
    )


def test_mapping_protocol(fm):
    assert list(fm) == ["a", "b", "c"]
    assert len(fm) == 3
    assert fm["c"] == ScalarRegion(3)
    assert "b" in fm
    assert "z" not in fm
    assert 0 not in fm


def test_length_and_names(fm):
    assert fm.length == 4
    assert fm.names == ("a", "b", "c")


def test_empty_map_has_zero_length():
    assert FieldMap([], []).length == 0


def test_unknown_field(fm):
    with pytest.raises(UnknownFieldError, match="no field 'z'"):
        fm["z"]

    with pytest.raises(KeyError):
        fm["z"]


def test_duplicate_names_rejected():
    with pytest.raises(LayoutError, match="duplicate"):
        FieldMap(["a", "a"], [ScalarRegion(0), ScalarRegion(1)])


def test_count_mismatch_rejected():
    with pytest.raises(LayoutError, match="2 names for 1 regions"):
        FieldMap(["a", "b"], [ScalarRegion(0)])


def test_non_region_rejected():
    with pytest.raises(LayoutError, match="not a region descriptor"):
        FieldMap(["a"], [(0, 1)])


def test_immutable(fm):
    with pytest.raises(AttributeError):
        fm._names = ("x",)


def test_validate_accepts_partition(fm):
    assert fm.validate() is fm


def test_validate_rejects_gap():
    gap = FieldMap(["a", "b"], [ScalarRegion(0), ScalarRegion(2)])

    with pytest.raises(LayoutError, match="starts at 2, expected 1"):
        gap.validate()


def test_validate_rejects_overlap():
    overlap = FieldMap(["a", "b"], [ArrayRegion(0, 2, (2,)), ScalarRegion(1)])

    with pytest.raises(LayoutError):
        overlap.validate()


def test_validate_recurses_into_nested():
    bad_inner = FieldMap(["x", "y"], [ScalarRegion(1), ScalarRegion(1)])
    outer = FieldMap(["n"], [NestedRegion(0, 2, bad_inner)])

    with pytest.raises(LayoutError):
        outer.validate()


def test_same_layout_is_names_and_order(fm):
    other = FieldMap(
        ["a", "b", "c"],
        [ScalarRegion(0), ArrayRegion(1, 4, (3,)), ScalarRegion(4)],
    )
    swapped = FieldMap(["b", "a"], [ScalarRegion(0), ScalarRegion(1)])

    assert fm.same_layout(other)
    assert fm != other
    assert not swapped.same_layout(FieldMap(["a", "b"], [ScalarRegion(0), ScalarRegion(1)]))


def test_structural_equality(fm):
    copy = FieldMap.from_pairs(list(fm.items()))

    assert copy == fm
    assert hash(copy) == hash(fm)
