from typing import NamedTuple, Sequence, Tuple

import numpy as np


class DataItem(NamedTuple):
    """A labelled point: coordinates plus a binary category (0 or 1)."""
    coords: Tuple[float, ...]
    category: int

    @classmethod
    def from_values(cls, coords: Sequence[float], category) -> "DataItem":
        return cls(tuple(float(c) for c in coords), int(category))

    @property
    def dim(self) -> int:
        return len(self.coords)


def items_to_arrays(items: Sequence[DataItem]) -> Tuple[np.ndarray, np.ndarray]:
    """Stack items into a coordinate matrix X (n, d) and a label vector y (n,)."""
    if len(items) == 0:
        return np.zeros((0, 0), dtype=float), np.zeros(0, dtype=int)
    X = np.array([it.coords for it in items], dtype=float)
    y = np.array([it.category for it in items], dtype=int)
    return X, y
