import os
from typing import List, Sequence

import numpy as np
import pandas as pd

from .config import SEED
from .items import DataItem

COLUMNS = ["x", "y", "category"]


def load_items(csv_path: str) -> List[DataItem]:
    """Read `x,y,label` rows (no header, blank lines skipped) into DataItems."""
    if not os.path.isfile(csv_path):
        raise FileNotFoundError(f"CSV not found at: {csv_path}")

    df = pd.read_csv(csv_path, header=None, names=COLUMNS, skip_blank_lines=True)
    df = df.dropna(how="all")

    if df.isna().any().any():
        bad = df[df.isna().any(axis=1)].index.tolist()
        raise ValueError(f"Rows with missing fields in {csv_path}: {bad}")
    try:
        coords = df[["x", "y"]].astype(float).values
        raw_labels = df["category"].astype(float)
    except ValueError as e:
        raise ValueError(f"Non-numeric values in {csv_path}: {e}") from e

    # categories are binary: whole numbers 0 or 1 only
    invalid = ~raw_labels.isin([0.0, 1.0])
    if invalid.any():
        bad = df[invalid].index.tolist()
        raise ValueError(f"Rows with labels other than 0 or 1 in {csv_path}: {bad}")
    labels = raw_labels.astype(int).values

    return [DataItem.from_values(row, lab) for row, lab in zip(coords, labels)]


def shuffle_items(items: Sequence[DataItem], seed: int = SEED) -> List[DataItem]:
    rng = np.random.RandomState(seed)
    order = rng.permutation(len(items))
    return [items[i] for i in order]
