#!filepath: namedvec/core/field_map.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Iterator, Tuple

from namedvec.core.regions import REGION_TYPES, Region
from namedvec.utils.errors import LayoutError, UnknownFieldError


class FieldMap(Mapping):
    """
    FieldMap (FROZEN)

    Ordered, name-keyed collection of region descriptors.

    Contract:
    - names unique, declaration order preserved
    - immutable once built; shared by reference across derived NamedVecs
    - holds NO buffer, only structural metadata

    The partition invariant (regions tile [0, length) in order) is checked
    by validate(), not by the constructor, so NamedVec.raw() can bypass it.
    """

    __slots__ = ("_names", "_regions", "_index")

    def __init__(self, names: Iterable[str], regions: Iterable[Region]):
        names = tuple(names)
        regions = tuple(regions)

        if len(names) != len(regions):
            raise LayoutError(
                f"got {len(names)} names for {len(regions)} regions"
            )

        index = {}
        for i, (name, region) in enumerate(zip(names, regions)):
            if not isinstance(name, str):
                raise LayoutError(f"field names must be str, got {name!r}")
            if name in index:
                raise LayoutError(f"duplicate field name: {name!r}")
            if not isinstance(region, REGION_TYPES):
                raise LayoutError(
                    f"field {name!r}: not a region descriptor: {region!r}"
                )
            index[name] = i

        object.__setattr__(self, "_names", names)
        object.__setattr__(self, "_regions", regions)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Region]]) -> "FieldMap":
        pairs = list(pairs)
        return cls((n for n, _ in pairs), (r for _, r in pairs))

    def __setattr__(self, key, value):
        raise AttributeError("FieldMap is immutable")

    # --------------------------------------------------
    # Mapping protocol
    # --------------------------------------------------
    def __getitem__(self, name: str) -> Region:
        try:
            return self._regions[self._index[name]]
        except (KeyError, TypeError):
            raise UnknownFieldError(
                f"no field {name!r}; fields are {list(self._names)}"
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name in self._index

    # --------------------------------------------------
    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def regions(self) -> Tuple[Region, ...]:
        return self._regions

    @property
    def length(self) -> int:
        """Total flat length covered (end of the last region)."""
        if not self._regions:
            return 0
        return self._regions[-1].stop

    # --------------------------------------------------
    # Structural checks
    # --------------------------------------------------
    def validate(self) -> "FieldMap":
        """
        Check the partition invariant:
        regions are ordered, disjoint and tile [0, length) exactly.
        Nested FieldMaps are validated recursively.
        """
        cursor = 0
        for name, region in zip(self._names, self._regions):
            if region.start != cursor:
                raise LayoutError(
                    f"field {name!r} starts at {region.start}, expected {cursor}"
                )
            nested = getattr(region, "fields", None)
            if nested is not None:
                nested.validate()
            cursor = region.stop
        return self

    def same_layout(self, other: "FieldMap") -> bool:
        """Same field names in the same order."""
        return self is other or self._names == other._names

    # --------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, FieldMap):
            return NotImplemented
        return self is other or (
            self._names == other._names and self._regions == other._regions
        )

    def __ne__(self, other) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self) -> int:
        return hash((self._names, self._regions))

    def __repr__(self) -> str:
        body = ", ".join(f"{n}={r!r}" for n, r in zip(self._names, self._regions))
        return f"FieldMap({body})"
