"""
knn_search/visualize.py
Decision-region plot for a trained Predictor.

The predictor is evaluated on a regular grid over the raw 2-D coordinates of
the items (the predictor applies its own space transform), the regions are
filled with contourf and the items are drawn on top, coloured by category.
"""

import os
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import seaborn as sns

from .config import FIGS_DIR, GRID_PADDING, GRID_STEPS
from .items import DataItem, items_to_arrays
from .predictor import Predictor

sns.set(style="whitegrid", context="talk")

PALETTE = {0: "#2b8cbe", 1: "#f03b20"}


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def _save_fig(fig, filepath: str):
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


class Visualizer:
    def __init__(self, items: Sequence[DataItem], steps: int = GRID_STEPS, padding: float = GRID_PADDING):
        self.items = list(items)
        self.steps = steps
        self.padding = padding

    def _grid(self) -> Tuple[np.ndarray, np.ndarray]:
        X, _ = items_to_arrays(self.items)
        lo = X[:, :2].min(axis=0)
        hi = X[:, :2].max(axis=0)
        pad = (hi - lo) * self.padding
        pad[pad == 0] = 1.0
        xs = np.linspace(lo[0] - pad[0], hi[0] + pad[0], self.steps)
        ys = np.linspace(lo[1] - pad[1], hi[1] + pad[1], self.steps)
        return np.meshgrid(xs, ys)

    def predict_grid(self, predictor: Predictor) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        xx, yy = self._grid()
        points = [DataItem((float(x), float(y)), 0) for x, y in zip(xx.ravel(), yy.ravel())]
        zz = np.array(predictor.predict_many(points), dtype=int).reshape(xx.shape)
        return xx, yy, zz

    def draw_plot(self, predictor: Predictor, output_name: str, outdir: str = FIGS_DIR) -> str:
        if not self.items:
            raise ValueError("Cannot plot decision regions without items")
        ensure_dir(outdir)
        xx, yy, zz = self.predict_grid(predictor)

        fig, ax = plt.subplots(figsize=(8, 7))
        cmap = ListedColormap([PALETTE[0], PALETTE[1]])
        ax.contourf(xx, yy, zz, levels=[-0.5, 0.5, 1.5], cmap=cmap, alpha=0.3)

        X, y = items_to_arrays(self.items)
        df = pd.DataFrame({"x": X[:, 0], "y": X[:, 1], "category": y})
        sns.scatterplot(data=df, x="x", y="y", hue="category", palette=PALETTE,
                        edgecolor="black", s=50, ax=ax)
        ax.set_xlim(xx.min(), xx.max())
        ax.set_ylim(yy.min(), yy.max())
        ax.set_title(f"Decision regions: {predictor.name}")
        ax.set_xlabel("x")
        ax.set_ylabel("y")

        path = os.path.join(outdir, f"{output_name}.png")
        return _save_fig(fig, path)


def render(predictor: Predictor, output_name: str, items: Sequence[DataItem], outdir: str = FIGS_DIR) -> str:
    return Visualizer(items).draw_plot(predictor, output_name, outdir=outdir)
