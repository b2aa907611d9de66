"""
{#!filepath: namedvec/core/arithmetic.py}

Arithmetic & broadcast integration (FROZEN)

Elementwise ufunc calls
-----------------------
- every non-scalar operand must be 1-D with the NamedVec's length
- result gets a NEW buffer and the FieldMap of the first NamedVec operand
  (left-to-right over inputs, then out=), shared by reference
- np.add between NamedVecs requires identical field names / order
- other ufuncs follow config.vector.broadcast_layout:
    first  -> first-found FieldMap, mismatches only logged
    strict -> mismatching layouts raise IncompatibleLayoutError
- out= writes land in the existing buffers (v += w keeps identity)

Everything else (matmul / gufuncs, reduce, accumulate, outer, at, and the
non-ufunc numpy API via __array_function__) runs on the plain buffers and
returns plain numpy results: v @ v is a dot product, np.max(v) a scalar.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from namedvec.config.app_config import get_config
from namedvec.config.vector_config import BroadcastLayout
from namedvec.utils.errors import IncompatibleLayoutError, SizeMismatchError
from namedvec.utils.logger import logs


def _namedvec_type():
    from namedvec.core.vector import NamedVec

    return NamedVec


# ==================================================
# Public operations
# ==================================================
def scale(alpha: Any, v):
    """alpha * v with numpy promotion; result shares v.fields."""
    if np.ndim(alpha) != 0:
        raise TypeError(f"scale expects a scalar factor, got shape {np.shape(alpha)}")
    return np.multiply(alpha, v)


def add(a, b):
    """a + b; NamedVec operands must have identical field names / order."""
    return np.add(a, b)


def broadcast(func: Callable, *operands: Any):
    """
    Apply an arbitrary elementwise func across NamedVecs, 1-D sequences
    and scalars.

    - result dtype inferred from func applied to the first element of
      each operand
    - result is a NamedVec (first NamedVec operand's FieldMap) or, when
      no NamedVec participates, a plain ndarray
    """
    if isinstance(func, np.ufunc):
        return func(*operands)

    NamedVec = _namedvec_type()
    template = _first_namedvec(operands)
    arrays = [np.asarray(_unwrap(x)) for x in operands]

    n = _common_length(arrays)
    if n is None:
        # scalars only
        return func(*operands)

    _check_layouts(operands, template, strict_add=False, op_name=getattr(func, "__name__", "func"))

    if n > 0:
        sample = func(*(a[0] if a.ndim else a[()] for a in arrays))
        dtype = np.asarray(sample).dtype
    else:
        dtype = np.result_type(*arrays)

    result = np.vectorize(func, otypes=[dtype])(*arrays)

    if template is None:
        return result
    return NamedVec._wrap(result, template.fields)


# ==================================================
# __array_ufunc__ entry point
# ==================================================
def apply_ufunc(ufunc: np.ufunc, method: str, inputs: Sequence[Any], kwargs: dict):
    NamedVec = _namedvec_type()

    out = kwargs.get("out", ())
    args = [_unwrap(x) for x in inputs]
    if out:
        kwargs["out"] = tuple(_unwrap(o) for o in out)
    if "where" in kwargs:
        kwargs["where"] = _unwrap(kwargs["where"])

    if method != "__call__" or ufunc.signature is not None:
        result = getattr(ufunc, method)(*args, **kwargs)
        return _returned_out(out) if out else result

    # identity test: a zero-length NamedVec is falsy
    template = _first_namedvec(inputs)
    if template is None:
        template = _first_namedvec(out)
    n = len(template)

    _check_sizes(args, n, ufunc.__name__)
    if out:
        _check_sizes(kwargs["out"], n, ufunc.__name__)
    _check_layouts(
        list(inputs) + list(out),
        template,
        strict_add=ufunc is np.add,
        op_name=ufunc.__name__,
    )

    result = ufunc(*args, **kwargs)

    if out:
        return _returned_out(out)

    if ufunc.nout > 1:
        return tuple(NamedVec._wrap(r, template.fields) for r in result)
    return NamedVec._wrap(result, template.fields)


# ==================================================
# __array_function__ entry point
# ==================================================
def apply_function(func: Callable, args: Sequence[Any], kwargs: dict):
    """
    Non-ufunc numpy API (np.max, np.sum, np.dot, np.concatenate, ...) runs
    on the plain buffers and returns plain numpy results. numpy never looks
    up v.sum / v.max, so fields with those names cannot shadow a reduction.
    """
    args = [_unwrap_nested(a) for a in args]
    kwargs = {k: _unwrap_nested(v) for k, v in kwargs.items()}
    return func(*args, **kwargs)


# ==================================================
# Helpers
# ==================================================
def _unwrap(x: Any) -> Any:
    if isinstance(x, _namedvec_type()):
        return x.data
    if isinstance(x, (list, tuple)):
        return np.asarray(x)
    return x


def _unwrap_nested(x: Any) -> Any:
    if isinstance(x, _namedvec_type()):
        return x.data
    if isinstance(x, list):
        return [_unwrap_nested(i) for i in x]
    if isinstance(x, tuple):
        return tuple(_unwrap_nested(i) for i in x)
    return x


def _first_namedvec(operands: Sequence[Any]):
    NamedVec = _namedvec_type()
    for x in operands:
        if isinstance(x, NamedVec):
            return x
    return None


def _returned_out(out: tuple):
    return out[0] if len(out) == 1 else out


def _common_length(arrays: List[Any]) -> Optional[int]:
    n = None
    for a in arrays:
        if np.ndim(a) == 0:
            continue
        if np.ndim(a) != 1:
            raise SizeMismatchError(f"broadcast operands must be 1-D, got shape {np.shape(a)}")
        if n is None:
            n = len(a)
        elif len(a) != n:
            raise SizeMismatchError(f"broadcast operands have lengths {n} and {len(a)}")
    return n


def _check_sizes(arrays: Sequence[Any], n: int, op_name: str) -> None:
    for a in arrays:
        if np.ndim(a) == 0:
            continue
        if np.shape(a) != (n,):
            raise SizeMismatchError(
                f"{op_name}: operand of shape {np.shape(a)} does not match "
                f"NamedVec length {n}"
            )


def _check_layouts(operands: Sequence[Any], template, *, strict_add: bool, op_name: str) -> None:
    if template is None:
        return
    NamedVec = _namedvec_type()
    strict = get_config().vector.broadcast_layout is BroadcastLayout.STRICT

    for x in operands:
        if not isinstance(x, NamedVec) or x is template:
            continue
        if template.fields.same_layout(x.fields):
            continue

        msg = (
            f"{op_name}: field layouts differ "
            f"{list(template.field_names)} vs {list(x.field_names)}"
        )
        if strict_add or strict:
            raise IncompatibleLayoutError(msg)
        logs.warning(f"[broadcast] {msg}; result takes the first layout")
