"""
{#!filepath: namedvec/core/regions.py}

Region descriptors (FINAL / FROZEN)

Describe WHERE a field lives in the flat buffer and HOW its typed value is
rebuilt from the raw slice.

Variant (closed):
- ScalarRegion(position)            -> one element
- ArrayRegion(start, stop, shape)   -> contiguous range reshaped to shape
- NestedRegion(start, stop, fields) -> contiguous range wrapped as NamedVec

Invariants:
- Regions carry NO buffer state, only offsets / shapes / nested FieldMaps
- extent == stop - start for every variant
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple, Union

from namedvec.utils.errors import LayoutError

if TYPE_CHECKING:
    from namedvec.core.field_map import FieldMap


# -------------------------
# Scalar
# -------------------------
@dataclass(frozen=True)
class ScalarRegion:
    position: int

    def __post_init__(self) -> None:
        if self.position < 0:
            raise LayoutError(f"scalar position must be >= 0, got {self.position}")

    @property
    def start(self) -> int:
        return self.position

    @property
    def stop(self) -> int:
        return self.position + 1

    @property
    def extent(self) -> int:
        return 1

    @property
    def span(self) -> slice:
        return slice(self.start, self.stop)


# -------------------------
# Array
# -------------------------
@dataclass(frozen=True)
class ArrayRegion:
    start: int
    stop: int
    shape: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "shape", tuple(int(d) for d in self.shape))
        if not 0 <= self.start <= self.stop:
            raise LayoutError(f"invalid array range [{self.start}, {self.stop})")
        if math.prod(self.shape) != self.stop - self.start:
            raise LayoutError(
                f"shape {self.shape} does not cover range "
                f"[{self.start}, {self.stop})"
            )

    @property
    def extent(self) -> int:
        return self.stop - self.start

    @property
    def span(self) -> slice:
        return slice(self.start, self.stop)


# -------------------------
# Nested
# -------------------------
@dataclass(frozen=True)
class NestedRegion:
    start: int
    stop: int
    fields: "FieldMap"

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.stop:
            raise LayoutError(f"invalid nested range [{self.start}, {self.stop})")
        if self.fields.length != self.stop - self.start:
            raise LayoutError(
                f"nested FieldMap length {self.fields.length} does not cover "
                f"range [{self.start}, {self.stop})"
            )

    @property
    def extent(self) -> int:
        return self.stop - self.start

    @property
    def span(self) -> slice:
        return slice(self.start, self.stop)


Region = Union[ScalarRegion, ArrayRegion, NestedRegion]

REGION_TYPES = (ScalarRegion, ArrayRegion, NestedRegion)


