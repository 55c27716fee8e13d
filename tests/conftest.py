import pytest
import numpy as np


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def one_to_ten():
    return np.arange(1, 11, dtype=float)

@pytest.fixture
def quartiles():
    return np.array([0.25, 0.5, 0.75])

@pytest.fixture
def normal_sample(rng):
    return rng.normal(size=200)
