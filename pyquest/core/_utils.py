from numpy.typing import NDArray

import numpy as np


def pairwise_weights(levels: NDArray[np.floating]) -> NDArray[np.floating]:
    """Builds the symmetric ``u(1-u)`` weighting shared by every covariance entry.

    Entry (i, j) is ``min(u_i (1 - u_j), u_j (1 - u_i))``. Taking the pairwise
    minimum of the matrix and its transpose makes the result symmetric bit for
    bit, whatever the rounding of the two products.

    Args:
        levels (NDArray[np.floating]): Probability levels of shape (J,).

    Returns:
        NDArray[np.floating]: Symmetric matrix of shape (J, J).
    """
    u = np.asarray(levels, dtype=float)
    A = np.outer(u, 1.0 - u)
    return np.minimum(A, A.T)


def _level_labels(levels: NDArray[np.floating]) -> list[str]:
    """Renders levels as row/column labels with up to 15 significant digits.

    Duplicates are kept, so two equal levels produce two equal labels.

    Args:
        levels (NDArray[np.floating]): Probability levels of shape (J,).

    Returns:
        list[str]: One label per level, e.g. ``0.25 -> "0.25"``.
    """
    return [format(float(v), ".15g") for v in np.asarray(levels, dtype=float)]


def _is_degenerate(sample: NDArray[np.floating]) -> bool:
    """True when all sample values coincide (this includes n == 1)."""
    return bool(np.min(sample) == np.max(sample))
