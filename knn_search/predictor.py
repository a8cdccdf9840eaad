"""
knn_search/predictor.py
Distance-weighted k-nearest-neighbour voting for binary labels.

The space transform is applied to the training set once at construction and to
every query before voting, so distances and kernel weights are always computed
in the transformed space.
"""

from typing import List, Sequence

import numpy as np

from .items import DataItem, items_to_arrays
from .registry import Kernel, Metric, SpaceTransform


class Predictor:
    """
    KNN classifier bound to one (space, metric, kernel, k, training set).

    Instances are not modified after construction; predict() is a pure
    function of the query.
    """

    def __init__(self, train_items: Sequence[DataItem], metric: Metric, kernel: Kernel,
                 k: int, space: SpaceTransform):
        self.space = space
        self.metric = metric
        self.kernel = kernel
        self.k = int(k)
        self.train_items = tuple(train_items)
        X, y = items_to_arrays(self.train_items)
        self._X = space.apply(X) if len(self.train_items) else X
        self._y = y

    @property
    def name(self) -> str:
        return f"{self.space.name}-{self.metric.name}-{self.kernel.name}-{self.k}"

    def _weights(self, dists: np.ndarray) -> np.ndarray:
        max_dist = dists[-1]
        if max_dist == 0:
            # query coincides with all selected neighbours
            return np.ones_like(dists)
        return np.asarray(self.kernel(dists / max_dist), dtype=float)

    def predict(self, query: DataItem) -> int:
        q = self.space.apply(np.asarray(query.coords, dtype=float))[0]
        dists = self.metric.distances(q, self._X)

        # stable sort keeps training order among equal distances
        nn_idx = np.argsort(dists, kind="stable")[:self.k]
        weights = self._weights(dists[nn_idx])
        nn_labels = self._y[nn_idx]

        negative = float(weights[nn_labels == 0].sum())
        positive = float(weights[nn_labels == 1].sum())
        return 1 if positive > negative else 0

    def predict_many(self, items: Sequence[DataItem]) -> List[int]:
        return [self.predict(it) for it in items]

    def __repr__(self):
        return f"Predictor({self.name}, n_train={len(self.train_items)})"
