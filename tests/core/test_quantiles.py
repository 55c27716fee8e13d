import numpy as np
import pytest

from pyquest.core.quantiles import QUANTILE_RULES, sample_quantiles


def test_default_rule_is_median_unbiased(one_to_ten, quartiles):
    out = sample_quantiles(one_to_ten, quartiles)
    expected = np.quantile(one_to_ten, quartiles, method="median_unbiased")
    assert out.shape == (3,)
    np.testing.assert_allclose(out, expected, rtol=0, atol=1e-12)


def test_rule_8_closed_form(one_to_ten):
    # h = n p + (p + 1) / 3
    out = sample_quantiles(one_to_ten, np.array([0.25, 0.5]), rule=8)
    np.testing.assert_allclose(out, [2.5 + 5.0 / 12.0, 5.5], atol=1e-12)


def test_rule_7_is_linear(one_to_ten):
    out = sample_quantiles(one_to_ten, np.array([0.25]), rule=7)
    np.testing.assert_allclose(out, [3.25], atol=1e-12)


@pytest.mark.parametrize("rule", sorted(QUANTILE_RULES))
def test_every_rule_matches_numpy(rule, rng):
    x = rng.normal(size=37)
    u = np.array([0.1, 0.5, 0.9])
    np.testing.assert_allclose(
        sample_quantiles(x, u, rule=rule),
        np.quantile(x, u, method=QUANTILE_RULES[rule]),
        atol=1e-12,
    )


@pytest.mark.parametrize("rule", [0, 10, -1])
def test_unknown_rule_raises_value_error(rule, one_to_ten):
    with pytest.raises(ValueError):
        sample_quantiles(one_to_ten, np.array([0.5]), rule=rule)


@pytest.mark.parametrize("rule", [2.5, True, "8"])
def test_non_integer_rule_raises_type_error(rule, one_to_ten):
    with pytest.raises(TypeError):
        sample_quantiles(one_to_ten, np.array([0.5]), rule=rule)
