"""Discretized Epanechnikov estimator of the quantile density.

For a level ``u`` with bandwidth ``h``, sample index ``j`` gets the weight::

    w_j = K((u - (j-1)/n) / h) / h - K((u - j/n) / h) / h

i.e. the kernel evaluated at the two edges of the j-th step of the empirical
distribution function. Applied to the order statistics, ``sum_j w_j x_(j)``
is a smoothed numerical derivative of the empirical quantile function, an
estimate of ``Q'(u) = 1 / f(Q(u))``.

Only indices ``j = 1..n`` carry weight. Kernel mass that would fall on index
0 or n+1 is dropped rather than folded back onto the end points.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..custom_types import ArrayLike

__all__ = ["epanechnikov", "kernel_weights", "pseudo_observations"]

logger = logging.getLogger(__name__)


def epanechnikov(t: ArrayLike) -> NDArray[np.floating]:
    """Epanechnikov kernel ``0.75 (1 - t**2)`` on ``|t| <= 1``, zero elsewhere."""
    t = np.asarray(t, dtype=float)
    return 0.75 * (1.0 - np.clip(t, -1.0, 1.0) ** 2)


def kernel_weights(
    levels: NDArray[np.floating],
    bandwidths: NDArray[np.floating],
    n: int,
) -> NDArray[np.floating]:
    """Builds the (J, n) matrix of discretized kernel weights.

    Args:
        levels: Probability levels, shape (J,).
        bandwidths: Positive bandwidth per level, shape (J,).
        n: Sample size (>= 1).

    Returns:
        NDArray[np.floating]: Weight matrix; row i belongs to ``levels[i]``.

    Raises:
        ValueError: On mismatched shapes, ``n < 1`` or a nonpositive bandwidth.
    """
    u = np.asarray(levels, dtype=float).reshape(-1)
    h = np.asarray(bandwidths, dtype=float).reshape(-1)
    if u.shape != h.shape:
        raise ValueError(f"levels and bandwidths must have the same shape, got {u.shape} and {h.shape}.")
    if n < 1:
        raise ValueError("n must be >= 1.")
    if not np.all(h > 0):
        raise ValueError("bandwidths must be > 0.")

    inv_h = (1.0 / h)[:, None]                   # (J, 1)
    u = u[:, None]                               # (J, 1)
    j = np.arange(1, n + 1, dtype=float)[None, :]  # (1, n)
    left = epanechnikov((u - (j - 1.0) / n) * inv_h) * inv_h
    right = epanechnikov((u - j / n) * inv_h) * inv_h
    return left - right


def pseudo_observations(
    order_stats: NDArray[np.floating],
    levels: NDArray[np.floating],
    bandwidths: NDArray[np.floating],
    *,
    block_size: Optional[int] = None,
) -> NDArray[np.floating]:
    """Reduces the kernel weights against the order statistics.

    Args:
        order_stats: Sorted sample, shape (n,).
        levels: Probability levels, shape (J,).
        bandwidths: Bandwidth per level, shape (J,).
        block_size: If given, at most this many weight rows are held in
            memory at once. Rows are independent, so blocking only changes
            peak memory.

    Returns:
        NDArray[np.floating]: Estimates of ``Q'(u_i)``, shape (J,).
    """
    x = np.asarray(order_stats, dtype=float)
    u = np.asarray(levels, dtype=float).reshape(-1)
    h = np.asarray(bandwidths, dtype=float).reshape(-1)
    n = x.shape[0]

    if block_size is None or block_size >= u.size:
        return kernel_weights(u, h, n) @ x

    if block_size < 1:
        raise ValueError("block_size must be >= 1.")
    logger.debug("building kernel weights in blocks of %d rows", block_size)
    out = np.empty(u.size, dtype=float)
    for start in range(0, u.size, block_size):
        stop = start + block_size
        out[start:stop] = kernel_weights(u[start:stop], h[start:stop], n) @ x
    return out
