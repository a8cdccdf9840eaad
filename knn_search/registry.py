"""
knn_search/registry.py
Named building blocks for the KNN search and their fixed catalogs.

- Metric: distance between two items (scipy.spatial.distance under the hood)
- Kernel: weight for a normalized distance, zero outside [-1, 1]
- SpaceTransform: feature mapping applied to raw coordinates

Every object carries the display name used in predictor names and for
narrowing a ConfigGroup. Kernels and transforms also work on numpy arrays so
that the predictor can weight and transform whole neighbourhoods at once.
"""

from typing import Callable, List, Sequence, TypeVar

import numpy as np
from scipy.spatial.distance import cdist

from .items import DataItem


class Metric:
    def __init__(self, name: str, scipy_metric: str, **kwargs):
        self.name = name
        self.scipy_metric = scipy_metric
        self.kwargs = kwargs

    def distances(self, query: np.ndarray, X: np.ndarray) -> np.ndarray:
        """Distances from one coordinate vector to every row of X."""
        q = np.asarray(query, dtype=float).reshape(1, -1)
        X = np.asarray(X, dtype=float)
        if X.shape[0] == 0:
            return np.zeros(0, dtype=float)
        return cdist(q, X, metric=self.scipy_metric, **self.kwargs)[0]

    def __call__(self, x: DataItem, y: DataItem) -> float:
        return float(self.distances(np.asarray(x.coords), np.atleast_2d(y.coords))[0])

    def __repr__(self):
        return f"Metric({self.name!r})"


class Kernel:
    def __init__(self, name: str, fn: Callable[[np.ndarray], np.ndarray]):
        self.name = name
        self.fn = fn

    def __call__(self, u):
        u = np.asarray(u, dtype=float)
        out = np.where(np.abs(u) > 1.0, 0.0, self.fn(u))
        if out.ndim == 0:
            return float(out)
        return out

    def __repr__(self):
        return f"Kernel({self.name!r})"


class SpaceTransform:
    def __init__(self, name: str, fn: Callable[[np.ndarray], np.ndarray]):
        self.name = name
        self.fn = fn

    def apply(self, X: np.ndarray) -> np.ndarray:
        """Transform every row of a coordinate matrix."""
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        return self.fn(X)

    def __call__(self, item: DataItem) -> DataItem:
        row = self.apply(np.asarray(item.coords, dtype=float))[0]
        return DataItem.from_values(row, item.category)

    def __repr__(self):
        return f"SpaceTransform({self.name!r})"


def _uniform(u):
    return np.ones_like(u)


def _triangular(u):
    return 1.0 - np.abs(u)


def _parabolic(u):
    return 0.75 * (1.0 - u * u)


def _biweight(u):
    return 0.9375 * (1.0 - u * u) ** 2


def _base(X):
    return X.copy()


def _circle(X):
    # radius of the first two coordinates becomes a third feature
    return np.column_stack([X[:, 0], X[:, 1], np.hypot(X[:, 0], X[:, 1])])


EUCLID = Metric("euclid", "euclidean")
MANHATTAN = Metric("manhattan", "cityblock")
THIRD_DEGREE = Metric("3rd-degree", "minkowski", p=3)

METRICS: List[Metric] = [EUCLID, MANHATTAN, THIRD_DEGREE]

UNIFORM = Kernel("uniform", _uniform)
TRIANGULAR = Kernel("triangular", _triangular)
PARABOLIC = Kernel("parabolic", _parabolic)
BIWEIGHT = Kernel("biweight", _biweight)

KERNELS: List[Kernel] = [UNIFORM, TRIANGULAR, PARABOLIC, BIWEIGHT]

BASE = SpaceTransform("base", _base)
CIRCLE = SpaceTransform("circle", _circle)

SPACE_TRANSFORMS: List[SpaceTransform] = [BASE, CIRCLE]


T = TypeVar("T")


def by_name(catalog: Sequence[T], name: str) -> T:
    for entry in catalog:
        if entry.name == name:
            return entry
    known = ", ".join(e.name for e in catalog)
    raise ValueError(f"Unknown name {name!r}; expected one of: {known}")

