"""Argument checks run before any estimation work starts."""

from __future__ import annotations

import logging

import numpy as np

from ..array_backend.utils import _ensure_real_vector
from ..custom_types import Array, ArrayLike
from ..errors import InvalidLevelError, InvalidSampleError

__all__ = ["validate_sample", "validate_levels"]

logger = logging.getLogger(__name__)


def validate_sample(sample: ArrayLike) -> Array:
    """Returns the sample as a float vector of shape (n,).

    Args:
        sample: Numeric data values. Lists, tuples, numpy arrays of shape
            (n,), (n, 1) or (1, n), scalars and pandas Series are accepted.

    Returns:
        A fresh float64 copy of the sample.

    Raises:
        InvalidSampleError: If the sample is empty, not a vector, contains a
            non-numeric entry, or contains NaN / infinite values.
    """
    try:
        x = _ensure_real_vector(sample)
    except (TypeError, ValueError) as e:
        raise InvalidSampleError(f"Argument 'sample' must be a numeric vector: {e}") from e

    if x.size == 0:
        raise InvalidSampleError("Argument 'sample' must contain at least one value.")
    if not np.all(np.isfinite(x)):
        raise InvalidSampleError("Argument 'sample' must not contain missing or infinite values.")

    logger.debug("validated sample with n=%d", x.size)
    return x


def validate_levels(levels: ArrayLike) -> Array:
    """Returns the probability levels as a float vector of shape (J,).

    Raises:
        InvalidLevelError: If a level is missing or non-numeric, if any level
            lies outside the open interval (0, 1), or if no level is given.
    """
    message = (
        "Argument 'levels' must be a numeric vector of probability values "
        "between, but not including, 0 and 1."
    )
    try:
        u = _ensure_real_vector(levels)
    except (TypeError, ValueError) as e:
        raise InvalidLevelError(f"{message} {e}") from e

    if u.size == 0:
        raise InvalidLevelError(message + " Got an empty vector.")
    if np.any(np.isnan(u)):
        raise InvalidLevelError(message + " Missing values are not allowed.")
    bad = (u <= 0.0) | (u >= 1.0)
    if np.any(bad):
        raise InvalidLevelError(message + f" Offending values: {u[bad].tolist()}.")

    logger.debug("validated %d probability levels", u.size)
    return u
