"""
View materialization.

Turns (buffer, region) into the field's typed value and back.

Contract:
- read_view NEVER copies; array and nested results alias the buffer
- write_view ALWAYS mutates through the alias into the owning buffer
- dispatch is exhaustive over the region variant
"""
from __future__ import annotations

from typing import Any

import numpy as np

from namedvec.core.regions import ArrayRegion, NestedRegion, Region, ScalarRegion
from namedvec.utils.errors import ElementTypeError, ShapeMismatchError


# ==================================================
# Read
# ==================================================
def read_view(data: np.ndarray, region: Region) -> Any:
    if isinstance(region, ScalarRegion):
        return data[region.position]

    if isinstance(region, ArrayRegion):
        return data[region.span].reshape(region.shape)

    if isinstance(region, NestedRegion):
        from namedvec.core.vector import NamedVec

        return NamedVec._wrap(data[region.span], region.fields)

    raise TypeError(f"unknown region type: {type(region).__name__}")


# ==================================================
# Write
# ==================================================
def write_view(data: np.ndarray, region: Region, value: Any) -> None:
    if isinstance(region, ScalarRegion):
        src = _as_source(value, data.dtype)
        if src.ndim != 0:
            raise ShapeMismatchError(
                f"scalar field expects a single value, got shape {src.shape}"
            )
        data[region.position] = src
        return

    if isinstance(region, ArrayRegion):
        dst = data[region.span].reshape(region.shape)
        _assign(dst, _as_source(value, data.dtype))
        return

    if isinstance(region, NestedRegion):
        dst = data[region.span]
        src = _as_source(value, data.dtype)
        # nested values are written from their flat representation
        _assign(dst, src.reshape(-1) if src.ndim > 1 else src)
        return

    raise TypeError(f"unknown region type: {type(region).__name__}")


# ==================================================
# Helpers
# ==================================================
def _as_source(value: Any, dtype: np.dtype) -> np.ndarray:
    """Unwrap NamedVec / array-likes and check castability to dtype."""
    src = np.asarray(value)
    if src.dtype.kind not in "biufc":
        raise ElementTypeError(f"non-numeric value of dtype {src.dtype}")
    if not np.can_cast(src.dtype, dtype, casting="same_kind"):
        raise ElementTypeError(f"cannot store {src.dtype} values in a {dtype} buffer")
    return src


def _assign(dst: np.ndarray, src: np.ndarray) -> None:
    try:
        np.copyto(dst, src, casting="same_kind")
    except ValueError as e:
        raise ShapeMismatchError(
            f"cannot assign shape {src.shape} into field of shape {dst.shape}"
        ) from e
