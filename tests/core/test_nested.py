#!filepath: tests/core/test_nested.py
import numpy as np
import pytest

from namedvec import NamedVec
from namedvec.utils.errors import ShapeMismatchError


def test_nested_flat_layout(nested_vec):
    assert nested_vec == [0.5, 1.0, 2.0, 3.0]
    assert nested_vec.dtype == np.float64


def test_nested_read_is_namedvec_view(nested_vec):
    q = nested_vec.q

    assert isinstance(q, NamedVec)
    assert q.fields is nested_vec.fields["q"].fields
    assert q == [1.0, 2.0, 3.0]
    assert q.x == 1.0
    assert q.y.tolist() == [2.0, 3.0]
    assert np.shares_memory(q.data, nested_vec.data)


def test_nested_mutation_propagates_to_root(nested_vec):
    nested_vec.q.y[1] = 9.0
    nested_vec.q.x = -1.0

    assert nested_vec == [0.5, -1.0, 2.0, 9.0]


def test_nested_source_not_aliased():
    inner = NamedVec(x=1.0, y=[2.0, 3.0])
    outer = NamedVec(p=[0.5], q=inner)

    outer.q.y[0] = 100.0
    assert inner.y.tolist() == [2.0, 3.0]


def test_nested_write_from_flat_and_namedvec(nested_vec):
    nested_vec.q = [7, 8, 9]
    assert nested_vec == [0.5, 7.0, 8.0, 9.0]

    nested_vec.q = NamedVec(x=0.0, y=[1.0, 2.0])
    assert nested_vec == [0.5, 0.0, 1.0, 2.0]


def test_nested_write_size_mismatch(nested_vec):
    with pytest.raises(ShapeMismatchError):
        nested_vec.q = [1.0, 2.0]


def test_doubly_nested():
    leaf = NamedVec(u=[1, 2])
    mid = NamedVec(k=0, leaf=leaf)
    root = NamedVec(head=5, mid=mid)

    assert root == [5, 0, 1, 2]
    root.mid.leaf.u[1] = 20
    assert root[3] == 20
    assert root.mid.leaf.fields is leaf.fields


def test_nested_promotes_with_outer_dtype():
    inner = NamedVec(i=[1, 2])
    outer = NamedVec(f=0.5, n=inner)

    assert outer.dtype == np.float64
    assert outer.n.dtype == np.float64
    assert outer.n.i.tolist() == [1.0, 2.0]
