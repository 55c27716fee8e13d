"""Sample quantiles for the nine Hyndman & Fan interpolation rules.

The rules are numbered 1..9 as in most statistical software; numpy exposes
each of them as a ``method`` of :func:`numpy.quantile`, so this module only
maps the integer selector onto the numpy name.
"""

from __future__ import annotations

from types import MappingProxyType

import numpy as np
from numpy.typing import NDArray

__all__ = ["QUANTILE_RULES", "DEFAULT_QUANTILE_RULE", "sample_quantiles"]

QUANTILE_RULES = MappingProxyType({
    1: "inverted_cdf",
    2: "averaged_inverted_cdf",
    3: "closest_observation",
    4: "interpolated_inverted_cdf",
    5: "hazen",
    6: "weibull",
    7: "linear",
    8: "median_unbiased",
    9: "normal_unbiased",
})

# Median-unbiased whatever the distribution; the recommended default.
DEFAULT_QUANTILE_RULE = 8


def _rule_method(rule: int) -> str:
    if isinstance(rule, bool) or not isinstance(rule, (int, np.integer)):
        raise TypeError(f"quantile rule must be an integer in 1..9, got {rule!r}.")
    try:
        return QUANTILE_RULES[int(rule)]
    except KeyError:
        raise ValueError(f"quantile rule must be an integer in 1..9, got {rule}.") from None


def sample_quantiles(
    sample: NDArray[np.floating],
    levels: NDArray[np.floating],
    rule: int = DEFAULT_QUANTILE_RULE,
) -> NDArray[np.floating]:
    """Computes one sample quantile per probability level.

    Args:
        sample: Data values, shape (n,).
        levels: Probability levels in (0, 1), shape (J,).
        rule: Interpolation rule selector 1..9. Defaults to 8.

    Returns:
        NDArray[np.floating]: Quantile estimates of shape (J,).

    Raises:
        TypeError: If ``rule`` is not an integer.
        ValueError: If ``rule`` is outside 1..9.
    """
    method = _rule_method(rule)
    x = np.asarray(sample, dtype=float)
    u = np.asarray(levels, dtype=float)
    return np.asarray(np.quantile(x, u, method=method), dtype=float).reshape(u.shape)
