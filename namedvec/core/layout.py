#!filepath: namedvec/core/layout.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Number
from typing import Any, Iterable, List, Tuple, Union

import numpy as np

from namedvec.core.field_map import FieldMap
from namedvec.core.regions import ArrayRegion, NestedRegion, Region, ScalarRegion
from namedvec.core.views import write_view
from namedvec.utils.errors import LayoutError
from namedvec.utils.logger import logs

NUMERIC_KINDS = "biufc"

FieldsLike = Union[Mapping, Iterable[Tuple[str, Any]]]


@dataclass(frozen=True)
class _Planned:
    name: str
    value: Any
    kind: str          # "scalar" / "array" / "nested"
    extent: int
    dtype: np.dtype
    shape: Tuple[int, ...] = ()


class LayoutBuilder:
    """
    LayoutBuilder (FROZEN)

    Input Contract
    --------------
    ordered (name, value) pairs, at least one; value is
      - a number                 -> scalar field (1 element)
      - an array-like / ndarray  -> array field (shape kept, size elements)
      - a NamedVec               -> nested field (its length, its FieldMap)

    Output Contract
    ---------------
    (buffer, FieldMap)
      - buffer dtype = numpy promotion over every field dtype
      - regions tile [0, total) in declaration order
      - buffer filled completely before it is returned

    Nothing is allocated until every field has been validated.
    """

    def build(self, fields: FieldsLike) -> Tuple[np.ndarray, FieldMap]:
        pairs = self._pairs(fields)
        if not pairs:
            raise LayoutError("a NamedVec must have at least one field")

        plan = [self._plan(name, value) for name, value in pairs]
        dtype = self._common_dtype(plan)

        names: List[str] = []
        regions: List[Region] = []
        cursor = 0
        for p in plan:
            names.append(p.name)
            regions.append(self._region(p, cursor))
            cursor += p.extent

        field_map = FieldMap(names, regions)

        buffer = np.empty(cursor, dtype=dtype)
        for p, region in zip(plan, regions):
            write_view(buffer, region, p.value)

        logs.debug(
            f"[layout] built {len(names)} fields, length={cursor}, dtype={dtype}"
        )
        return buffer, field_map

    # ==================================================
    # Input normalization
    # ==================================================
    @staticmethod
    def _pairs(fields: FieldsLike) -> List[Tuple[str, Any]]:
        if isinstance(fields, Mapping):
            items = list(fields.items())
        else:
            items = []
            for item in fields:
                try:
                    name, value = item
                except (TypeError, ValueError):
                    raise LayoutError(
                        f"expected (name, value) pairs, got {item!r}"
                    ) from None
                items.append((name, value))

        seen = set()
        for name, _ in items:
            if not isinstance(name, str):
                raise LayoutError(f"field names must be str, got {name!r}")
            if name in seen:
                raise LayoutError(f"duplicate field name: {name!r}")
            seen.add(name)
        return items

    # ==================================================
    # Per-field planning
    # ==================================================
    @staticmethod
    def _plan(name: str, value: Any) -> _Planned:
        from namedvec.core.vector import NamedVec

        if isinstance(value, NamedVec):
            return _Planned(name, value, "nested", len(value), value.dtype)

        if isinstance(value, (Number, np.generic)):
            dtype = np.asarray(value).dtype
            if dtype.kind not in NUMERIC_KINDS:
                raise LayoutError(f"field {name!r}: non-numeric scalar {value!r}")
            return _Planned(name, value, "scalar", 1, dtype)

        try:
            arr = np.asarray(value)
        except ValueError as e:
            # ragged nested lists
            raise LayoutError(f"field {name!r}: not a fixed-shape array: {e}") from e

        if arr.dtype.kind not in NUMERIC_KINDS:
            raise LayoutError(
                f"field {name!r}: no common numeric type for dtype {arr.dtype}"
            )
        return _Planned(name, arr, "array", int(arr.size), arr.dtype, tuple(arr.shape))

    @staticmethod
    def _common_dtype(plan: List[_Planned]) -> np.dtype:
        try:
            dtype = np.result_type(*(p.dtype for p in plan))
        except TypeError as e:
            raise LayoutError(f"no common numeric type: {e}") from e
        if dtype.kind not in NUMERIC_KINDS:
            raise LayoutError(f"no common numeric type, promoted to {dtype}")
        return dtype

    @staticmethod
    def _region(p: _Planned, start: int) -> Region:
        if p.kind == "scalar":
            return ScalarRegion(start)
        if p.kind == "array":
            return ArrayRegion(start, start + p.extent, p.shape)
        return NestedRegion(start, start + p.extent, p.value.fields)


def build_layout(fields: FieldsLike) -> Tuple[np.ndarray, FieldMap]:
    return LayoutBuilder().build(fields)
