"""
Shared fixtures for the knn_search test suite.

matplotlib is switched to the non-interactive Agg backend before any module
that imports pyplot is loaded.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from knn_search.items import DataItem
from knn_search.load_data import shuffle_items


def make_clusters(n_per_class: int, seed: int = 0, spread: float = 0.5):
    rng = np.random.RandomState(seed)
    items = []
    for category, center in ((0, (-5.0, -5.0)), (1, (5.0, 5.0))):
        pts = rng.normal(loc=center, scale=spread, size=(n_per_class, 2))
        items.extend(DataItem.from_values(p, category) for p in pts)
    return items


@pytest.fixture
def four_points():
    """Two well-separated clusters of two points each."""
    return [
        DataItem((0.0, 0.0), 0),
        DataItem((0.5, 0.2), 0),
        DataItem((10.0, 10.0), 1),
        DataItem((10.3, 9.8), 1),
    ]


@pytest.fixture
def clusters():
    """60 shuffled points: 30 around (-5, -5) labelled 0, 30 around (5, 5) labelled 1."""
    return shuffle_items(make_clusters(30), seed=42)


@pytest.fixture
def small_clusters():
    return shuffle_items(make_clusters(20, seed=1), seed=7)
