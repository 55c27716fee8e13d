"""Quantile optimality ratios and the bandwidth rule built on them.

For a quantile function ``Q`` with quantile density ``q = Q'``, the
quantile optimality ratio is ``QOR(u) = q(u) / q''(u)``. Minimizing the
asymptotic MSE of the Epanechnikov kernel estimator of ``q(u)`` gives the
bandwidth::

    h(u) = 15**(1/5) * |QOR(u)|**(2/5) / n**(1/5)

The ratio is invariant to location and scale, so each family below only
depends on its shape parameter (if any).

References:
    Prendergast, L. A., & Staudte, R. G. (2016). Exploiting the quantile
    optimality ratio in finding confidence intervals for quantiles.
    Stat, 5(1), 70-81.
"""

from __future__ import annotations

import functools
import logging

import numpy as np
from numpy.typing import NDArray
from scipy.stats import norm

from ..custom_types import ArrayLike, LevelFunction

__all__ = [
    "qor_lognormal",
    "qor_normal",
    "qor_exponential",
    "lognormal_qor",
    "qor_bandwidth",
]

logger = logging.getLogger(__name__)

_TINY = np.finfo(float).tiny


def qor_lognormal(u: ArrayLike, sigma: float = 1.0) -> NDArray[np.floating]:
    """QOR of the log-normal family with log-scale ``sigma``.

    With ``z = Phi^-1(u)``::

        QOR(u) = phi(z)**2 / (1 + (sigma + z) * (sigma + 2 z))

    The denominator has no real root in ``z`` for ``sigma`` in (0, 2*sqrt(2)),
    which covers the usual range of skewness.

    Args:
        u: Probability levels in (0, 1).
        sigma: Log-scale shape parameter (> 0). Defaults to 1.

    Returns:
        NDArray[np.floating]: Ratio values with the shape of ``u``.
    """
    if sigma <= 0:
        raise ValueError("sigma must be > 0")
    z = norm.ppf(np.asarray(u, dtype=float))
    return norm.pdf(z) ** 2 / (1.0 + (sigma + z) * (sigma + 2.0 * z))


def qor_normal(u: ArrayLike) -> NDArray[np.floating]:
    """QOR of the normal family: ``phi(z)**2 / (1 + 2 z**2)``."""
    z = norm.ppf(np.asarray(u, dtype=float))
    return norm.pdf(z) ** 2 / (1.0 + 2.0 * z ** 2)


def qor_exponential(u: ArrayLike) -> NDArray[np.floating]:
    """QOR of the exponential family: ``(1 - u)**2 / 2``."""
    u = np.asarray(u, dtype=float)
    return 0.5 * (1.0 - u) ** 2


def lognormal_qor(sigma: float) -> LevelFunction:
    """Returns ``qor_lognormal`` with its shape parameter fixed to ``sigma``.

    The returned callable takes the levels only, so it can be passed wherever
    a QOR function is expected.
    """
    if sigma <= 0:
        raise ValueError("sigma must be > 0")
    return functools.partial(qor_lognormal, sigma=float(sigma))


def qor_bandwidth(
    levels: NDArray[np.floating],
    n: int,
    qor_function: LevelFunction = qor_lognormal,
    *,
    correct: bool = True,
) -> NDArray[np.floating]:
    """Computes one kernel bandwidth per probability level.

    Args:
        levels: Probability levels in (0, 1), shape (J,).
        n: Sample size (>= 1).
        qor_function: Vectorized map from levels to QOR values. Its output is
            broadcast to shape (J,).
        correct: If True, a bandwidth that reaches or exceeds its level is
            replaced by the level itself, so the kernel window never extends
            below probability 0.

    Bandwidths are never smaller than ``np.finfo(float).tiny``. Where the QOR
    underflows to 0 the kernel window is then narrower than the first step of
    the empirical quantile function and the estimate at that level is 0.

    Returns:
        NDArray[np.floating]: Bandwidths of shape (J,).

    Raises:
        ValueError: If ``n < 1`` or the QOR output cannot be broadcast to (J,).
    """
    if n < 1:
        raise ValueError("n must be >= 1.")
    u = np.asarray(levels, dtype=float)
    ratio = np.asarray(qor_function(u), dtype=float)
    try:
        ratio = np.broadcast_to(ratio, u.shape)
    except ValueError as e:
        raise ValueError(
            f"qor_function returned shape {ratio.shape}, expected {u.shape}."
        ) from e

    bw = 15.0 ** (1.0 / 5.0) * np.abs(ratio) ** (2.0 / 5.0) / float(n) ** (1.0 / 5.0)
    if correct:
        clipped = u <= bw
        bw = np.where(clipped, u, bw)
        if np.any(clipped):
            logger.debug("bandwidth clipped to the level at %d of %d levels", int(clipped.sum()), u.size)

    # an underflowed QOR (levels within ~1e-160 of 0 or 1) would give a zero
    # bandwidth; keep it at the smallest positive float instead
    floored = bw < _TINY
    if np.any(floored):
        bw = np.where(floored, _TINY, bw)
        logger.debug("bandwidth floored at %d of %d levels", int(floored.sum()), u.size)

    logger.debug("qor bandwidths: %s", bw)
    return bw
