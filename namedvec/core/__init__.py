from .regions import ArrayRegion, NestedRegion, Region, ScalarRegion
from .field_map import FieldMap
from .layout import LayoutBuilder, build_layout
from .vector import NamedVec
from .arithmetic import add, broadcast, scale

__all__ = [
    "ScalarRegion", "ArrayRegion", "NestedRegion", "Region",
    "FieldMap",
    "LayoutBuilder", "build_layout",
    "NamedVec",
    "add", "scale", "broadcast",
]
