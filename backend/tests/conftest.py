"""
Test configuration and fixtures for Irodori tests.
"""
import numpy as np
import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from irodori.utils.metrics import reset_metrics
    reset_metrics()


class FixedIndexRng:
    """Stand-in Generator that returns preset initial centroid indices."""

    def __init__(self, indices):
        self.indices = list(indices)

    def integers(self, low, high, size=None):
        return np.array(self.indices[:size])


@pytest.fixture
def fixed_rng():
    return FixedIndexRng


@pytest.fixture
def make_rgba():
    """Build a flat RGBA byte buffer from a list of (r, g, b) tuples."""
    def _make(colors, alpha=255):
        data = bytearray()
        for r, g, b in colors:
            data.extend((r, g, b, alpha))
        return bytes(data)
    return _make
