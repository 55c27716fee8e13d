from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from statsmodels.nonparametric.bandwidths import bw_scott, bw_silverman
from statsmodels.nonparametric.kde import KDEUnivariate, kernel_switch

from ..custom_types import ArrayLike

__all__ = [
    "BANDWIDTH_RULES",
    "KERNELS",
    "DensityConfig",
    "KernelDensityCurve",
]

logger = logging.getLogger(__name__)

BANDWIDTH_RULES = ("nrd0", "nrd", "scott", "silverman")

# kernel name -> statsmodels kernel code
KERNELS = MappingProxyType({
    "gaussian": "gau",
    "epanechnikov": "epa",
    "rectangular": "uni",
    "triangular": "tri",
    "biweight": "biw",
    "triweight": "triw",
    "cosine": "cos",
})


@dataclass(frozen=True)
class DensityConfig:
    """Settings forwarded to the kernel density estimate.

    Attributes:
        bandwidth: Either a positive float, used as the standard deviation of
            the kernel, or one of ``BANDWIDTH_RULES``.
        kernel: Kernel shape, one of ``KERNELS``. Defaults to ``"gaussian"``.
            ``"cosine"`` is the ``pi/4 cos(pi t / 2)`` kernel on ``[-1, 1]``.
        adjust: Multiplier applied to the bandwidth. Defaults to 1.
        grid_size: Number of equally spaced grid points. Defaults to 512.
        cut: The grid extends ``cut`` bandwidths beyond the sample range.
            Defaults to 3.
        weights: Optional nonnegative sample weights; normalized to sum 1.
    """

    bandwidth: Union[float, str] = "nrd0"
    kernel: str = "gaussian"
    adjust: float = 1.0
    grid_size: int = 512
    cut: float = 3.0
    weights: Optional[Tuple[float, ...]] = None

    def __post_init__(self):
        if isinstance(self.bandwidth, str):
            if self.bandwidth.lower() not in BANDWIDTH_RULES:
                raise ValueError(f"bandwidth rule must be one of {BANDWIDTH_RULES}, got {self.bandwidth!r}.")
            object.__setattr__(self, "bandwidth", self.bandwidth.lower())
        else:
            if float(self.bandwidth) <= 0:
                raise ValueError("bandwidth must be > 0.")
            object.__setattr__(self, "bandwidth", float(self.bandwidth))
        if not isinstance(self.kernel, str) or self.kernel.lower() not in KERNELS:
            raise ValueError(f"kernel must be one of {tuple(KERNELS)}, got {self.kernel!r}.")
        object.__setattr__(self, "kernel", self.kernel.lower())
        if self.adjust <= 0:
            raise ValueError("adjust must be > 0.")
        if int(self.grid_size) < 2:
            raise ValueError("grid_size must be >= 2.")
        object.__setattr__(self, "grid_size", int(self.grid_size))
        if self.cut < 0:
            raise ValueError("cut must be >= 0.")
        if self.weights is not None:
            w = np.asarray(self.weights, dtype=float).reshape(-1)
            if np.any(w < 0) or not np.all(np.isfinite(w)):
                raise ValueError("weights must be nonnegative.")
            if w.sum() <= 0:
                raise ValueError("weights must sum to a positive value.")
            object.__setattr__(self, "weights", tuple((w / w.sum()).tolist()))


def _nrd0(x: NDArray[np.floating]) -> float:
    # Silverman's rule of thumb, falling back to sd, |x[0]| or 1 when the
    # IQR (and possibly the sd) vanishes.
    hi = float(np.std(x, ddof=1))
    iqr = float(np.subtract(*np.quantile(x, [0.75, 0.25])))
    lo = min(hi, iqr / 1.34)
    if not lo:
        lo = hi or abs(float(x[0])) or 1.0
    return 0.9 * lo * x.size ** (-0.2)


def _nrd(x: NDArray[np.floating]) -> float:
    hi = float(np.std(x, ddof=1))
    iqr = float(np.subtract(*np.quantile(x, [0.75, 0.25])))
    lo = min(hi, iqr / 1.34) if iqr > 0 else hi
    return 1.06 * lo * x.size ** (-0.2)


class KernelDensityCurve:
    """Kernel density estimate of a univariate sample on a grid.

    Evaluation is delegated to :class:`statsmodels.nonparametric.kde.KDEUnivariate`;
    this class resolves the bandwidth, lays out the grid and interpolates the
    gridded curve linearly.

    The bandwidth is the standard deviation of the kernel for every kernel
    shape, so switching kernels at a fixed bandwidth keeps the spread of each
    bump. Bandwidth rules are computed from the unweighted sample; weights only
    enter the density itself.

    Attributes:
        _x: Sample, shape (n,).
        _w: Normalized weights, shape (n,), or None for uniform weights.
        _kernel: Kernel name.
        _bw: Kernel standard deviation.
        _kde: Fitted statsmodels estimator.
        _grid: Grid points, shape (grid_size,).
        _density: Density on the grid, shape (grid_size,).
    """

    def __init__(self, sample: ArrayLike, config: Optional[DensityConfig] = None):
        """Fits the estimate and evaluates it on the grid.

        Args:
            sample: Data values, shape (n,).
            config: Density settings. Defaults to ``DensityConfig()``.

        Raises:
            ValueError: If fewer than two values are given, all values
                coincide, or the weights do not match the sample.
        """
        config = config or DensityConfig()
        x = np.asarray(sample, dtype=float).reshape(-1)
        n = x.size
        if n < 2:
            raise ValueError("KernelDensityCurve requires at least two samples.")
        if x.min() == x.max():
            raise ValueError("sample has no spread; a kernel density estimate is undefined.")

        if config.weights is None:
            w = None
        else:
            w = np.asarray(config.weights, dtype=float)
            if w.shape[0] != n:
                raise ValueError("weights must have shape (n,).")

        self._x = x
        self._w = w
        self._kernel = config.kernel
        self._bw = self._build_bandwidth(config.bandwidth) * config.adjust
        if not self._bw > 0:
            raise ValueError("bandwidth rule returned a nonpositive bandwidth.")

        # statsmodels scales the kernel on its native support; convert the
        # standard deviation into that scale
        code = KERNELS[config.kernel]
        kernel_sd = float(np.sqrt(kernel_switch[code]().kernel_var))
        self._kde = KDEUnivariate(x)
        self._kde.fit(
            kernel=code,
            bw=self._bw / kernel_sd,
            fft=False,
            weights=w,
            gridsize=config.grid_size,
            cut=config.cut * kernel_sd,
        )
        self._grid = np.asarray(self._kde.support, dtype=float)
        self._density = np.asarray(self._kde.density, dtype=float)
        logger.debug(
            "kde kernel=%s bandwidth=%.6g on %d grid points over [%.6g, %.6g]",
            self._kernel, self._bw, config.grid_size, self._grid[0], self._grid[-1],
        )

    # --------------------------- bandwidth helpers ---------------------------

    def _build_bandwidth(self, bandwidth: Union[float, str]) -> float:
        """Resolves the kernel standard deviation.

        Args:
            bandwidth: Positive float, or a rule name from ``BANDWIDTH_RULES``.

        Returns:
            Bandwidth before ``adjust`` is applied.
        """
        if not isinstance(bandwidth, str):
            return float(bandwidth)
        if bandwidth == "nrd0":
            return _nrd0(self._x)
        if bandwidth == "nrd":
            return _nrd(self._x)
        if bandwidth == "scott":
            return float(bw_scott(self._x))
        return float(bw_silverman(self._x))

    # ------------------------------- curve API -------------------------------

    @property
    def bandwidth(self) -> float:
        """float: Kernel standard deviation after ``adjust``."""
        return self._bw

    @property
    def kernel(self) -> str:
        """str: Kernel name."""
        return self._kernel

    def grid(self) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Returns copies of the grid points and the density values on them."""
        return self._grid.copy(), self._density.copy()

    def interpolate(self, points: ArrayLike) -> NDArray[np.floating]:
        """Evaluates the piecewise-linear interpolant of the gridded density.

        Points outside the grid get density 0.

        Args:
            points: Evaluation points of any shape.

        Returns:
            Density values with the shape of ``points``.
        """
        p = np.asarray(points, dtype=float)
        return np.interp(p, self._grid, self._density, left=0.0, right=0.0)

    def reciprocal(self, points: ArrayLike) -> NDArray[np.floating]:
        """Returns ``1 / f(points)`` from the interpolated curve."""
        return 1.0 / self.interpolate(points)
