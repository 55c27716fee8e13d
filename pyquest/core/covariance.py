"""Approximate covariance matrix of a vector of sample-quantile estimators.

For levels ``u_1..u_J`` the asymptotic covariance of the sample quantiles is::

    Cov(Q_i, Q_j) ~ min(u_i (1-u_j), u_j (1-u_i)) * v_i * v_j / n

where ``v_i = 1 / f(Q(u_i))`` is the reciprocal density at the quantile.
The strategies below differ only in how ``v`` is estimated:

* ``Strategy.QOR``: discretized Epanechnikov estimate of the quantile density
  with the quantile-optimality-ratio bandwidth (see :mod:`.qor`, :mod:`.kernels`).
* ``Strategy.DENSITY``: kernel density estimate of ``f`` interpolated at the
  sample quantiles (see :mod:`.density`).

References:
    Prendergast, L. A., & Staudte, R. G. (2016). Exploiting the quantile
    optimality ratio in finding confidence intervals for quantiles.
    Stat, 5(1), 70-81.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Optional, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..custom_types import ArrayLike, LevelFunction
from ._utils import _is_degenerate, _level_labels, pairwise_weights
from .density import DensityConfig, KernelDensityCurve
from .kernels import pseudo_observations
from .qor import qor_bandwidth, qor_lognormal
from .quantiles import DEFAULT_QUANTILE_RULE, _rule_method, sample_quantiles
from .validation import validate_levels, validate_sample

__all__ = [
    "Strategy",
    "QorConfig",
    "QCovConfig",
    "reciprocal_density",
    "assemble_covariance",
    "qcov",
]

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """How the reciprocal density at each quantile is estimated."""

    QOR = "qor"
    DENSITY = "density"


@dataclass(frozen=True)
class QorConfig:
    """Settings of the ``qor`` strategy.

    Attributes:
        qor_function: Vectorized map from levels to QOR values. Defaults to
            the log-normal ratio with unit log-scale.
        bandwidth_correction: Clip each bandwidth to its level. Defaults to True.
        block_size: Build at most this many kernel-weight rows at once.
            ``None`` builds all of them together.
    """

    qor_function: LevelFunction = qor_lognormal
    bandwidth_correction: bool = True
    block_size: Optional[int] = None

    def __post_init__(self):
        if not callable(self.qor_function):
            raise TypeError("qor_function must be callable.")
        if self.block_size is not None:
            if int(self.block_size) != self.block_size:
                raise ValueError(f"block_size must be an integer, got {self.block_size!r}.")
            if int(self.block_size) < 1:
                raise ValueError("block_size must be >= 1.")
            object.__setattr__(self, "block_size", int(self.block_size))


@dataclass(frozen=True)
class QCovConfig:
    """Full configuration of one :func:`qcov` call.

    Attributes:
        strategy: ``Strategy.QOR`` (default) or ``Strategy.DENSITY``; the
            plain strings ``"qor"`` / ``"density"`` are accepted.
        quantile_rule: Interpolation rule 1..9 for the sample quantiles.
        qor: Settings used when ``strategy`` is ``QOR``.
        density: Settings used when ``strategy`` is ``DENSITY``.
    """

    strategy: Strategy = Strategy.QOR
    quantile_rule: int = DEFAULT_QUANTILE_RULE
    qor: QorConfig = field(default_factory=QorConfig)
    density: DensityConfig = field(default_factory=DensityConfig)

    def __post_init__(self):
        strategy = self.strategy
        if isinstance(strategy, str) and not isinstance(strategy, Strategy):
            strategy = strategy.lower()
        try:
            strategy = Strategy(strategy)
        except ValueError:
            raise ValueError(
                f"strategy must be one of {[s.value for s in Strategy]}, got {self.strategy!r}."
            ) from None
        object.__setattr__(self, "strategy", strategy)
        _rule_method(self.quantile_rule)


# ------------------------------- strategies --------------------------------

def _qor_reciprocal_density(
    sample: NDArray[np.floating],
    levels: NDArray[np.floating],
    quantiles: NDArray[np.floating],
    config: QCovConfig,
) -> NDArray[np.floating]:
    order_stats = np.sort(sample)
    bw = qor_bandwidth(
        levels,
        order_stats.size,
        config.qor.qor_function,
        correct=config.qor.bandwidth_correction,
    )
    return pseudo_observations(order_stats, levels, bw, block_size=config.qor.block_size)


def _kde_reciprocal_density(
    sample: NDArray[np.floating],
    levels: NDArray[np.floating],
    quantiles: NDArray[np.floating],
    config: QCovConfig,
) -> NDArray[np.floating]:
    curve = KernelDensityCurve(sample, config.density)
    return curve.reciprocal(quantiles)


_ReciprocalDensity = Callable[
    [NDArray[np.floating], NDArray[np.floating], NDArray[np.floating], QCovConfig],
    NDArray[np.floating],
]

_STRATEGIES: "MappingProxyType[Strategy, _ReciprocalDensity]" = MappingProxyType({
    Strategy.QOR: _qor_reciprocal_density,
    Strategy.DENSITY: _kde_reciprocal_density,
})


def reciprocal_density(
    sample: NDArray[np.floating],
    levels: NDArray[np.floating],
    config: Optional[QCovConfig] = None,
) -> NDArray[np.floating]:
    """Estimates ``1 / f(Q(u))`` at each level with the configured strategy.

    Inputs are assumed validated. A sample whose values all coincide has a
    degenerate (point-mass) distribution; its reciprocal density is defined
    as 0 so that the resulting variances are exactly zero.

    Args:
        sample: Data values, shape (n,).
        levels: Probability levels in (0, 1), shape (J,).
        config: Estimation settings. Defaults to ``QCovConfig()``.

    Returns:
        NDArray[np.floating]: Reciprocal density per level, shape (J,).
    """
    config = config or QCovConfig()
    x = np.asarray(sample, dtype=float).reshape(-1)
    u = np.asarray(levels, dtype=float).reshape(-1)

    if _is_degenerate(x):
        logger.debug("all %d sample values are equal; reciprocal density set to 0", x.size)
        return np.zeros(u.shape, dtype=float)

    # repeated levels share one estimate, so their entries agree bit for bit
    unique, inverse = np.unique(u, return_inverse=True)
    quantiles = sample_quantiles(x, unique, config.quantile_rule)
    v = _STRATEGIES[config.strategy](x, unique, quantiles, config)
    return v[inverse.reshape(-1)]


def assemble_covariance(
    levels: NDArray[np.floating],
    reciprocal: NDArray[np.floating],
    n: int,
) -> pd.DataFrame:
    """Combines pairwise weights and reciprocal densities into a labelled matrix.

    Args:
        levels: Probability levels, shape (J,).
        reciprocal: Reciprocal density per level, shape (J,).
        n: Sample size.

    Returns:
        pd.DataFrame: (J, J) matrix with the levels as index and columns.
    """
    v = np.asarray(reciprocal, dtype=float)
    cov = pairwise_weights(levels) * np.outer(v, v) / n
    labels = _level_labels(levels)
    return pd.DataFrame(cov, index=labels, columns=labels)


# ------------------------------- entry point --------------------------------

def qcov(
    sample: ArrayLike,
    levels: ArrayLike,
    strategy: Optional[Union[Strategy, str]] = None,
    *,
    qor_function: Optional[LevelFunction] = None,
    quantile_rule: Optional[int] = None,
    bandwidth_correction: Optional[bool] = None,
    density: Optional[DensityConfig] = None,
    config: Optional[QCovConfig] = None,
) -> pd.DataFrame:
    """Approximate covariance matrix of the sample quantiles at ``levels``.

    The diagonal holds the variance of each quantile estimate, the
    off-diagonal entries the covariance between pairs of them. The matrix is
    symmetric by construction; positive semi-definiteness is not enforced.

    Args:
        sample: Numeric data values.
        levels: Probability levels strictly inside (0, 1); duplicates allowed.
        strategy: ``"qor"`` (default) or ``"density"``.
        qor_function: QOR function for the bandwidth (``qor`` strategy).
            Defaults to :func:`qor_lognormal`.
        quantile_rule: Sample quantile rule 1..9. Defaults to 8.
        bandwidth_correction: Clip each QOR bandwidth to its level. Defaults
            to True.
        density: KDE settings (``density`` strategy).
        config: A complete :class:`QCovConfig`; cannot be combined with the
            keyword settings above.

    Returns:
        pd.DataFrame: (J, J) matrix labelled by the levels on both axes.

    Raises:
        InvalidSampleError: If ``sample`` is not a non-empty numeric vector.
        InvalidLevelError: If a level is missing or outside (0, 1).
        ValueError: On an unknown strategy / quantile rule, or when ``config``
            is combined with keyword settings.

    Example:
        >>> import numpy as np
        >>> x = np.random.default_rng(1234).normal(size=100)
        >>> qcov(x, [0.25, 0.5, 0.75]).shape
        (3, 3)
    """
    overrides = {
        "strategy": strategy,
        "qor_function": qor_function,
        "quantile_rule": quantile_rule,
        "bandwidth_correction": bandwidth_correction,
        "density": density,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if config is not None and overrides:
        raise ValueError(f"pass either config or keyword settings, not both (got {sorted(overrides)}).")
    if config is None:
        config = _config_from_keywords(**overrides)

    x = validate_sample(sample)
    u = validate_levels(levels)

    v = reciprocal_density(x, u, config)
    logger.debug("qcov strategy=%s n=%d J=%d", config.strategy.value, x.size, u.size)
    return assemble_covariance(u, v, x.size)


def _config_from_keywords(
    strategy: Union[Strategy, str] = Strategy.QOR,
    qor_function: LevelFunction = qor_lognormal,
    quantile_rule: int = DEFAULT_QUANTILE_RULE,
    bandwidth_correction: bool = True,
    density: Optional[DensityConfig] = None,
) -> QCovConfig:
    return QCovConfig(
        strategy=strategy,
        quantile_rule=quantile_rule,
        qor=QorConfig(qor_function=qor_function, bandwidth_correction=bandwidth_correction),
        density=density or DensityConfig(),
    )
