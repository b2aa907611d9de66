# namedvec/utils/errors.py


class NamedVecError(Exception):
    """Base class for all namedvec contract violations."""


class LayoutError(NamedVecError, ValueError):
    """
    Raised when a field set cannot be laid out:
    empty input, duplicate / non-string names, or no common numeric dtype.
    """


class IndexOutOfRangeError(NamedVecError, IndexError):
    """Flat positional access outside [0, len)."""


class UnknownFieldError(NamedVecError, KeyError):
    """Named access to a field that is not in the FieldMap."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class ShapeMismatchError(NamedVecError, ValueError):
    """Assigned value does not fit the field's region."""


class ElementTypeError(ShapeMismatchError, TypeError):
    """Assigned value cannot be cast to the buffer element type."""


class IncompatibleLayoutError(NamedVecError, ValueError):
    """Two NamedVecs combined with differing field names / order."""


class SizeMismatchError(NamedVecError, ValueError):
    """Broadcast operands of unequal length."""


class LengthMismatchError(NamedVecError, ValueError):
    """retag() on a flat sequence whose length differs from the FieldMap."""
