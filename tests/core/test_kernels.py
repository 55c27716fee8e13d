import numpy as np
import pytest

from pyquest.core.kernels import epanechnikov, kernel_weights, pseudo_observations


def test_epanechnikov_values_and_support():
    t = np.array([-2.0, -1.0, -0.5, 0.0, 0.5, 1.0, 2.0])
    np.testing.assert_allclose(
        epanechnikov(t), [0.0, 0.0, 0.5625, 0.75, 0.5625, 0.0, 0.0], atol=1e-15
    )


def test_epanechnikov_integrates_to_one():
    t = np.linspace(-1.0, 1.0, 20001)
    dt = t[1] - t[0]
    assert abs(epanechnikov(t).sum() * dt - 1.0) < 1e-3


def test_kernel_weights_shape():
    W = kernel_weights(np.array([0.25, 0.5, 0.75]), np.array([0.2, 0.2, 0.2]), 10)
    assert W.shape == (3, 10)


def test_kernel_weight_rows_telescope():
    # sum_j w_ij collapses to the two outermost kernel evaluations
    u = np.array([0.3, 0.5, 0.9])
    h = np.array([0.2, 0.35, 0.05])
    n = 25
    W = kernel_weights(u, h, n)
    expected = (epanechnikov(u / h) - epanechnikov((u - 1.0) / h)) / h
    np.testing.assert_allclose(W.sum(axis=1), expected, atol=1e-12)


def test_pseudo_observations_linear_sample_closed_form():
    # x_(j) = j: q_hat = sum_{k<n} K((u - k/n)/h)/h - n K((u - 1)/h)/h
    x = np.arange(1, 11, dtype=float)
    q = pseudo_observations(x, np.array([0.25]), np.array([0.25]))
    # kernel at t = 0.6, 0.2, -0.2, -0.6, scaled by 1/h = 4
    np.testing.assert_allclose(q, [4.0 * (0.48 + 0.72 + 0.72 + 0.48)], rtol=1e-12)


def test_pseudo_observations_shift_invariant_when_rows_sum_to_zero():
    # window fully inside (0, 1): weights sum to zero, so a constant shift cancels
    rng = np.random.default_rng(3)
    x = np.sort(rng.normal(size=50))
    u = np.array([0.5])
    h = np.array([0.2])
    np.testing.assert_allclose(
        pseudo_observations(x + 100.0, u, h), pseudo_observations(x, u, h), rtol=1e-9
    )


def test_block_size_does_not_change_result(rng):
    x = np.sort(rng.normal(size=120))
    u = np.linspace(0.05, 0.95, 11)
    h = np.full(u.shape, 0.04)
    full = pseudo_observations(x, u, h)
    blocked = pseudo_observations(x, u, h, block_size=3)
    np.testing.assert_allclose(blocked, full, rtol=1e-12, atol=1e-12)


def test_kernel_weights_rejects_bad_inputs():
    with pytest.raises(ValueError):
        kernel_weights(np.array([0.5, 0.6]), np.array([0.1]), 10)
    with pytest.raises(ValueError):
        kernel_weights(np.array([0.5]), np.array([0.0]), 10)
    with pytest.raises(ValueError):
        kernel_weights(np.array([0.5]), np.array([0.1]), 0)
    with pytest.raises(ValueError):
        pseudo_observations(np.arange(5.0), np.array([0.2, 0.4]), np.array([0.1, 0.1]), block_size=0)


def test_epanechnikov_is_zero_for_huge_arguments():
    with np.errstate(over="raise", invalid="raise"):
        out = epanechnikov([-1e300, 1e300, np.finfo(float).max])
    np.testing.assert_array_equal(out, [0.0, 0.0, 0.0])
