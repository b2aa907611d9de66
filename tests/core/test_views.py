# tests/core/test_views.py
import numpy as np
import pytest

from namedvec import NamedVec
from namedvec.core.field_map import FieldMap
from namedvec.core.regions import ArrayRegion, NestedRegion, ScalarRegion
from namedvec.core.views import read_view, write_view
from namedvec.utils.errors import ElementTypeError, ShapeMismatchError


def test_scalar_read_write():
    data = np.arange(4.0)

    assert read_view(data, ScalarRegion(2)) == 2.0
    write_view(data, ScalarRegion(2), 7)
    assert data.tolist() == [0.0, 1.0, 7.0, 3.0]


def test_array_read_aliases():
    data = np.arange(6)
    view = read_view(data, ArrayRegion(0, 6, (3, 2)))

    assert view.shape == (3, 2)
    view[2, 1] = -5
    assert data[5] == -5


def test_array_write_broadcasts():
    data = np.zeros(6)
    write_view(data, ArrayRegion(0, 6, (2, 3)), [1.0, 2.0, 3.0])

    assert data.tolist() == [1.0, 2.0, 3.0, 1.0, 2.0, 3.0]


def test_array_write_shape_mismatch():
    data = np.zeros(4)

    with pytest.raises(ShapeMismatchError, match="cannot assign shape"):
        write_view(data, ArrayRegion(0, 4, (2, 2)), [1.0, 2.0, 3.0])


def test_write_rejects_unsafe_cast():
    data = np.zeros(2, dtype=np.int64)

    with pytest.raises(ElementTypeError):
        write_view(data, ArrayRegion(0, 2, (2,)), [0.5, 1.5])


def test_nested_read_wraps_slice():
    inner = FieldMap(["x", "y"], [ScalarRegion(0), ScalarRegion(1)])
    data = np.array([9.0, 1.0, 2.0])

    view = read_view(data, NestedRegion(1, 3, inner))

    assert isinstance(view, NamedVec)
    assert view.fields is inner
    assert view.y == 2.0

    view.x = 10.0
    assert data[1] == 10.0


def test_nested_write_flattens_value():
    inner = FieldMap(["m"], [ArrayRegion(0, 4, (2, 2))])
    data = np.zeros(4)

    write_view(data, NestedRegion(0, 4, inner), np.array([[1.0, 2.0], [3.0, 4.0]]))
    assert data.tolist() == [1.0, 2.0, 3.0, 4.0]


def test_unknown_region_type():
    data = np.zeros(2)

    with pytest.raises(TypeError, match="unknown region type"):
        read_view(data, (0, 1))

    with pytest.raises(TypeError, match="unknown region type"):
        write_view(data, (0, 1), 0.0)
