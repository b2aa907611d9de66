#!filepath: namedvec/core/vector.py
"""
NamedVec (FINAL / FROZEN)

A hybrid between a flat numeric vector and a named record.

- Flat side: one contiguous 1-D numpy buffer. len / v[i] / numpy ufuncs /
  np.asarray(v) all work on it directly, so generic numeric code (linear
  algebra, iterative solvers) runs unmodified.
- Named side: each field is an aliasing view into a disjoint region of
  that same buffer (scalar, reshaped array, or nested NamedVec).

Example:
    v = NamedVec(a=[1], b=[2, 3])
    v @ v                  # 14
    f = lambda a, b: 2 * a + b
    f(**v)                 # array([4, 5])

Attribute access (v.name) is a shortcut: a field whose name collides with a
NamedVec attribute (data, size, shape, dtype, fields, copy, keys, ...) is
reachable only as v["name"] / v.get_field("name").

Borrowing rules (not enforced):
- field views alias the owner's buffer; any number of readers may coexist
- a writer through a view must be exclusive over that region
- views taken before retag() keep pointing at the old buffer
"""
from __future__ import annotations

from numbers import Integral
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

import numpy as np
from numpy.lib.mixins import NDArrayOperatorsMixin

from namedvec.core.field_map import FieldMap
from namedvec.core.layout import FieldsLike, build_layout
from namedvec.core.regions import Region
from namedvec.core.views import read_view, write_view
from namedvec.utils.errors import (
    IndexOutOfRangeError,
    LengthMismatchError,
    UnknownFieldError,
)
from namedvec.utils.logger import logs


class NamedVec(NDArrayOperatorsMixin):
    __slots__ = ("_data", "_fields")

    def __init__(self, fields: Optional[FieldsLike] = None, /, **kwargs: Any):
        if fields is None:
            pairs = list(kwargs.items())
        else:
            pairs = list(fields.items()) if hasattr(fields, "items") else list(fields)
            pairs.extend(kwargs.items())

        data, field_map = build_layout(pairs)
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_fields", field_map)

    # ==================================================
    # Construction surface
    # ==================================================
    @classmethod
    def from_fields(cls, fields: FieldsLike) -> "NamedVec":
        """Copy ordered (name, value) pairs into a fresh buffer."""
        return cls(fields)

    @classmethod
    def raw(
        cls,
        buffer: Any,
        names: Iterable[str],
        regions: Iterable[Region],
    ) -> "NamedVec":
        """
        Unchecked low-level constructor.

        Regions are NOT validated against the buffer: misuse produces an
        instance whose fields overlap or fall outside it. Not for
        untrusted input.
        """
        return cls._wrap(np.asarray(buffer), FieldMap(names, regions))

    @classmethod
    def retag(cls, fields: FieldMap, flat: Any) -> "NamedVec":
        """
        Reuse flat as the buffer under fields (no copy for a 1-D ndarray).
        fields must satisfy the partition invariant (LayoutError otherwise).

        flat is handed over to the new instance: views taken from a
        previous owner of it keep aliasing the same memory.
        """
        fields.validate()
        data = np.asarray(flat)
        if data.ndim != 1 or data.shape[0] != fields.length:
            raise LengthMismatchError(
                f"retag: sequence of shape {data.shape} does not match "
                f"layout length {fields.length}"
            )
        logs.debug(f"[retag] length={fields.length} fields={list(fields.names)}")
        return cls._wrap(data, fields)

    @classmethod
    def _wrap(cls, data: np.ndarray, fields: FieldMap) -> "NamedVec":
        obj = cls.__new__(cls)
        object.__setattr__(obj, "_data", data)
        object.__setattr__(obj, "_fields", fields)
        return obj

    def similar(self, dtype: Any = None) -> "NamedVec":
        """Same FieldMap, new uninitialized buffer."""
        return self._wrap(np.empty_like(self._data, dtype=dtype), self._fields)

    def copy(self) -> "NamedVec":
        return self._wrap(self._data.copy(), self._fields)

    def __copy__(self) -> "NamedVec":
        return self.copy()

    def __deepcopy__(self, memo) -> "NamedVec":
        return self.copy()

    # ==================================================
    # Flat-sequence protocol
    # ==================================================
    @property
    def data(self) -> np.ndarray:
        return self._data

    def vec(self) -> np.ndarray:
        """The underlying buffer (not a copy)."""
        return self._data

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def shape(self) -> Tuple[int]:
        return (len(self),)

    @property
    def ndim(self) -> int:
        return 1

    @property
    def size(self) -> int:
        return len(self)

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        if dtype is not None and np.dtype(dtype) != self._data.dtype:
            return self._data.astype(dtype)
        return self._data

    def _position(self, i: Integral) -> int:
        i = int(i)
        if not 0 <= i < len(self):
            raise IndexOutOfRangeError(
                f"index {i} out of range for {len(self)}-element NamedVec"
            )
        return i

    @staticmethod
    def _is_position(key: Any) -> bool:
        return isinstance(key, (Integral, np.integer)) and not isinstance(key, (bool, np.bool_))

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.get_field(key)
        if self._is_position(key):
            return self._data[self._position(key)]
        return self._data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, str):
            self.set_field(key, value)
        elif self._is_position(key):
            self._data[self._position(key)] = value
        else:
            self._data[key] = value

    # ==================================================
    # Named-field protocol
    # ==================================================
    @property
    def fields(self) -> FieldMap:
        return self._fields

    @property
    def field_names(self) -> Tuple[str, ...]:
        return self._fields.names

    def keys(self) -> Tuple[str, ...]:
        return self._fields.names

    def _region(self, key: Union[str, Integral]) -> Region:
        if self._is_position(key):
            names = self._fields.names
            if not 0 <= int(key) < len(names):
                raise UnknownFieldError(
                    f"field position {key} out of range for {len(names)} fields"
                )
            key = names[int(key)]
        return self._fields[key]

    def get_field(self, key: Union[str, Integral]) -> Any:
        """Aliasing view of a field, by name or declaration position."""
        return read_view(self._data, self._region(key))

    def set_field(self, key: Union[str, Integral], value: Any) -> None:
        write_view(self._data, self._region(key), value)

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.get_field(name)
        except UnknownFieldError as e:
            raise AttributeError(
                f"{type(self).__name__!r} object has no field or attribute {name!r}"
            ) from e

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(type(self), name):
            raise AttributeError(
                f"cannot set {name!r}: it is a NamedVec attribute; "
                f"use v[{name!r}] = ... for a field of that name"
            )
        if name in self._fields:
            self.set_field(name, value)
            return
        raise AttributeError(
            f"cannot set {name!r}: fields of a NamedVec are fixed at construction"
        )

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._fields.names))

    # ==================================================
    # Conversion
    # ==================================================
    def to_view_sequence(self) -> Tuple[Any, ...]:
        return tuple(read_view(self._data, r) for r in self._fields.regions)

    def to_view_record(self) -> Dict[str, Any]:
        return {
            name: read_view(self._data, region)
            for name, region in self._fields.items()
        }

    # ==================================================
    # Equality / display
    # ==================================================
    def __eq__(self, other) -> bool:
        if isinstance(other, NamedVec):
            other = other._data
        try:
            other = np.asarray(other)
        except (TypeError, ValueError):
            return False
        return bool(np.array_equal(self._data, other))

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    __hash__ = None

    def __repr__(self) -> str:
        record = ", ".join(f"{k}={v!r}" for k, v in self.to_view_record().items())
        return f"{len(self)}-element NamedVec<{self.dtype}>:\n({record})"

    # ==================================================
    # numpy integration
    # ==================================================
    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        from namedvec.core.arithmetic import apply_ufunc

        return apply_ufunc(ufunc, method, inputs, kwargs)

    def __array_function__(self, func, types, args, kwargs):
        from namedvec.core.arithmetic import apply_function

        return apply_function(func, args, kwargs)
