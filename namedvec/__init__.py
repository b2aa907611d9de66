#!filepath: namedvec/__init__.py

from .utils.logger import Logging, logs
from .config.app_config import AppConfig, get_config, set_config
from .core import (
    ArrayRegion,
    FieldMap,
    NamedVec,
    NestedRegion,
    ScalarRegion,
    add,
    broadcast,
    scale,
)
from .utils.errors import (
    ElementTypeError,
    IncompatibleLayoutError,
    IndexOutOfRangeError,
    LayoutError,
    LengthMismatchError,
    NamedVecError,
    ShapeMismatchError,
    SizeMismatchError,
    UnknownFieldError,
)

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging",
    "AppConfig", "get_config", "set_config",
    "NamedVec", "FieldMap",
    "ScalarRegion", "ArrayRegion", "NestedRegion",
    "add", "scale", "broadcast",
    "NamedVecError", "LayoutError", "IndexOutOfRangeError", "UnknownFieldError",
    "ShapeMismatchError", "ElementTypeError", "IncompatibleLayoutError",
    "SizeMismatchError", "LengthMismatchError",
]
