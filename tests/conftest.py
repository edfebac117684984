"""
Pytest configuration and shared fixtures for the Linear Covariance test suite.
"""

import pytest
import numpy as np
import sympy as sp
import sys
from pathlib import Path

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from linear_covariance.config import set_global_seed, Settings
from linear_covariance.config import settings as settings_module
from linear_covariance.core import LinearCovarianceModel


@pytest.fixture(scope="session")
def global_test_seed():
    """Set global random seed for all tests to ensure reproducibility."""
    seed = 42
    set_global_seed(seed)
    return seed


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests from sharing the global configuration."""
    monkeypatch.setattr(settings_module, '_GLOBAL_CONFIG', None)


@pytest.fixture
def rng():
    """Seeded generator for reproducible sampling."""
    return np.random.default_rng(1234)


@pytest.fixture
def test_settings():
    """Default settings with a generous attempt budget."""
    return Settings(max_start_pair_attempts=20)


@pytest.fixture
def xy_symbols():
    return sp.symbols('x y')


@pytest.fixture
def two_parameter_model():
    """2×2 model ``[[a, b], [b, a]]``."""
    a, b = sp.symbols('a b')
    return LinearCovarianceModel.from_matrix(sp.Matrix([[a, b], [b, a]]))


@pytest.fixture
def affine_model():
    """3×3 model with a constant offset and three parameters."""
    a, b, c = sp.symbols('a b c')
    sigma = sp.Matrix([
        [a + 2, b, 0],
        [b, a + c + 1, c],
        [0, c, 3 - b],
    ])
    return LinearCovarianceModel.from_matrix(sigma)


@pytest.fixture
def four_leaf_tree_matrix():
    """Expected covariance matrix of the tree ``{{1, 2}, {3, 4}}``."""
    t = sp.symbols('t1:8')
    return sp.Matrix([
        [t[0], t[4], t[6], t[6]],
        [t[4], t[1], t[6], t[6]],
        [t[6], t[6], t[2], t[5]],
        [t[6], t[6], t[5], t[3]],
    ])


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark slow and integration tests."""
    for item in items:
        if "large" in item.nodeid or "six_leaf" in item.nodeid:
            item.add_marker(pytest.mark.slow)

        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)
