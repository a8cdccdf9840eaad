from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from sklearn.model_selection import KFold

from .config import CV_FOLDS
from .items import DataItem


class CrossValidator:
    """
    Contiguous k-fold partitioning of an item list.

    The list is used in the order given; shuffling happens once upstream
    (see load_data.shuffle_items) so nested searches see stable folds. The
    first len(items) % n_folds folds hold one extra item.
    """

    def __init__(self, items: Sequence[DataItem], n_folds: Optional[int] = None):
        self.items = list(items)
        requested = CV_FOLDS if n_folds is None else int(n_folds)
        self.n_folds = max(2, min(requested, len(self.items)))

    def folds(self) -> Iterator[Tuple[List[DataItem], List[DataItem]]]:
        if len(self.items) < 2:
            # nothing to hold out
            return
        kf = KFold(n_splits=self.n_folds, shuffle=False)
        for train_idx, test_idx in kf.split(np.arange(len(self.items))):
            train = [self.items[i] for i in train_idx]
            test = [self.items[i] for i in test_idx]
            yield train, test

    def for_each_fold(self, callback: Callable[[List[DataItem], List[DataItem]], None]) -> None:
        for train, test in self.folds():
            callback(train, test)
