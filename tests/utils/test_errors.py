# tests/utils/test_errors.py
import pytest

from namedvec.utils import errors


@pytest.mark.parametrize(
    "exc, builtin",
    [
        (errors.LayoutError, ValueError),
        (errors.IndexOutOfRangeError, IndexError),
        (errors.UnknownFieldError, KeyError),
        (errors.ShapeMismatchError, ValueError),
        (errors.ElementTypeError, TypeError),
        (errors.ElementTypeError, errors.ShapeMismatchError),
        (errors.IncompatibleLayoutError, ValueError),
        (errors.SizeMismatchError, ValueError),
        (errors.LengthMismatchError, ValueError),
    ],
)
def test_hierarchy(exc, builtin):
    assert issubclass(exc, errors.NamedVecError)
    assert issubclass(exc, builtin)


def test_unknown_field_message_not_quoted():
    e = errors.UnknownFieldError("no field 'x'")
    assert str(e) == "no field 'x'"
