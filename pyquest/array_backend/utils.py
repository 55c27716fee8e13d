# array_backend/utils.py
"""
Utility functions for array canonicalization used by pyquest.

Notes
-----
This module only imports numpy as `np`. Everything that reaches the estimator
passes through these helpers first, so the rest of the package can assume
plain float64 vectors of shape (n,).

All functions that return arrays accept `copy: bool = True`. When `copy=True`
the returned array is guaranteed to be a different object from the input, so
a caller's sample is never mutated by sorting or casting further down.
"""

from __future__ import annotations

import numpy as np
from typing import Any

from ..custom_types import Array, ArrayLike


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x)
    except Exception as e:
        raise TypeError(
            f"Could not convert input to array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _is_real_dtype(arr: Array) -> bool:
    """Return true for integer or floating dtypes (booleans excluded)."""
    return arr.dtype != np.bool_ and (
        np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)
    )


def _coerce_real(arr: Array) -> Array:
    """
    Cast an array to float64, accepting object arrays whose entries are all
    real numbers (e.g. mixed Python ints and floats, or ``None`` as missing).

    ``None`` entries become NaN so callers can report them as missing values.

    Raises:
      TypeError if any entry is not a real number.
    """
    if _is_real_dtype(arr):
        return arr.astype(float)
    if arr.dtype == object:
        out = np.empty(arr.shape, dtype=float)
        for idx, item in np.ndenumerate(arr):
            if item is None:
                out[idx] = np.nan
            elif isinstance(item, (bool, np.bool_)) or not isinstance(item, (int, float, np.integer, np.floating)):
                raise TypeError(f"_coerce_real: non-numeric entry {item!r} at index {idx}.")
            else:
                out[idx] = float(item)
        return out
    raise TypeError(f"_coerce_real: dtype {arr.dtype} is not a real numeric type.")


def _ensure_vector(x: ArrayLike, *, copy: bool = True) -> Array:
    """
    Ensure input is returned as a 1-D vector of canonical shape (n,).

    Accepts:
      - 1D arrays -> (n,)
      - 2D arrays shaped (n,1) or (1,n) -> flattened to (n,)
      - 0D scalar -> treated as length-1 vector (1,)

    Raises:
      ValueError for incompatible shapes (ndim > 2 or 2D with both dims >1)
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2:
        num_rows, num_cols = arr.shape
        if num_rows == 1 or num_cols == 1:
            out = np.ravel(arr)
        else:
            raise ValueError(f"_ensure_vector: 2D input has shape {arr.shape}, which is not a vector (expected (n,1) or (1,n)).")
    else:
        raise ValueError(f"_ensure_vector: input has too many dimensions (ndim={arr.ndim}).")

    return out.copy() if copy else out


def _ensure_real_vector(x: ArrayLike, *, copy: bool = True) -> Array:
    """Canonical float64 vector of shape (n,); see `_ensure_vector` and `_coerce_real`."""
    return _coerce_real(_ensure_vector(x, copy=copy))
