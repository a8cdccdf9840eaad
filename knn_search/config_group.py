"""
knn_search/config_group.py
Immutable description of the KNN search space.

A ConfigGroup holds the four catalogs (space transforms, metrics, kernels,
k values) and at most one fixed choice per axis. The fix_* methods return a
new group with one axis pinned; the receiver is never modified, so every level
of the recursive search can narrow its own copy.
"""

import math
from itertools import product
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import K_MIN
from .items import DataItem
from .predictor import Predictor
from .registry import KERNELS, METRICS, SPACE_TRANSFORMS, Kernel, Metric, SpaceTransform, by_name


def default_k_values(n_items: int, k_min: int = K_MIN) -> Tuple[int, ...]:
    """k candidates from k_min up to floor(sqrt(n_items)), inclusive."""
    k_max = math.isqrt(max(n_items, 0))
    return tuple(range(k_min, k_max + 1))


class ConfigGroup:
    def __init__(self,
                 spaces: Iterable[SpaceTransform] = SPACE_TRANSFORMS,
                 metrics: Iterable[Metric] = METRICS,
                 kernels: Iterable[Kernel] = KERNELS,
                 k_values: Iterable[int] = (),
                 fixed_space: Optional[SpaceTransform] = None,
                 fixed_metric: Optional[Metric] = None,
                 fixed_kernel: Optional[Kernel] = None,
                 fixed_k: Optional[int] = None):
        self._spaces = tuple(spaces)
        self._metrics = tuple(metrics)
        self._kernels = tuple(kernels)
        self._k_values = tuple(int(k) for k in k_values)
        self.fixed_space = fixed_space
        self.fixed_metric = fixed_metric
        self.fixed_kernel = fixed_kernel
        self.fixed_k = fixed_k

    @classmethod
    def for_items(cls, items: Sequence[DataItem], k_min: int = K_MIN) -> "ConfigGroup":
        """Full unfixed search space with the k catalog sized to the item count."""
        return cls(k_values=default_k_values(len(items), k_min=k_min))

    def _narrow(self, **fixed) -> "ConfigGroup":
        params = {
            "spaces": self._spaces,
            "metrics": self._metrics,
            "kernels": self._kernels,
            "k_values": self._k_values,
            "fixed_space": self.fixed_space,
            "fixed_metric": self.fixed_metric,
            "fixed_kernel": self.fixed_kernel,
            "fixed_k": self.fixed_k,
        }
        params.update(fixed)
        return ConfigGroup(**params)

    def fix_space(self, name: str) -> "ConfigGroup":
        return self._narrow(fixed_space=by_name(self._spaces, name))

    def fix_metric(self, name: str) -> "ConfigGroup":
        return self._narrow(fixed_metric=by_name(self._metrics, name))

    def fix_kernel(self, name: str) -> "ConfigGroup":
        return self._narrow(fixed_kernel=by_name(self._kernels, name))

    def fix_k(self, k: int) -> "ConfigGroup":
        if int(k) not in self._k_values:
            raise ValueError(f"Unknown k {k}; expected one of: {list(self._k_values)}")
        return self._narrow(fixed_k=int(k))

    @property
    def spaces(self) -> List[SpaceTransform]:
        return [self.fixed_space] if self.fixed_space is not None else list(self._spaces)

    @property
    def metrics(self) -> List[Metric]:
        return [self.fixed_metric] if self.fixed_metric is not None else list(self._metrics)

    @property
    def kernels(self) -> List[Kernel]:
        return [self.fixed_kernel] if self.fixed_kernel is not None else list(self._kernels)

    @property
    def k_values(self) -> List[int]:
        return [self.fixed_k] if self.fixed_k is not None else list(self._k_values)

    @property
    def resolved(self) -> bool:
        return all(len(axis) == 1 for axis in (self.spaces, self.metrics, self.kernels, self.k_values))

    def get_predictors(self, items: Sequence[DataItem]) -> List[Predictor]:
        """Predictors trained on items for the resolved configuration."""
        if not self.resolved:
            sizes = {
                "spaces": len(self.spaces),
                "metrics": len(self.metrics),
                "kernels": len(self.kernels),
                "k_values": len(self.k_values),
            }
            raise ValueError(f"ConfigGroup is not fully resolved: {sizes}")
        return [
            Predictor(items, metric, kernel, k, space)
            for space, metric, kernel, k in product(self.spaces, self.metrics, self.kernels, self.k_values)
        ]

    def __repr__(self):
        def show(axis):
            return [getattr(v, "name", v) for v in axis]
        return (f"ConfigGroup(spaces={show(self.spaces)}, metrics={show(self.metrics)}, "
                f"kernels={show(self.kernels)}, k_values={self.k_values})")
