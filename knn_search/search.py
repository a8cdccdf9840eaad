"""
knn_search/search.py
Nested cross-validated grid search over space transform -> metric -> kernel -> k.

Each level loops over the candidates of its axis, cross-validates the current
working set, hands every training fold to the next level with the axis
pinned, and scores the predictor that comes back on the fold's test set. The
best (predictor, score) pair is kept with a strict ">" comparison starting
from (None, 0.0), so the first of equal scores wins and NaN never wins.

Outputs (run_search):
- per-fold results of the top level: reports/results/knn_search_results.csv
  columns: space, fold, predictor, f1
- The module exposes run_search(...) to be called from a runner.
"""

import os
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

import pandas as pd

from .config import CV_FOLDS, RESULTS_DIR
from .config_group import ConfigGroup
from .cross_validation import CrossValidator
from .items import DataItem
from .predictor import Predictor
from .registry import Kernel, Metric, SpaceTransform
from .scoring import is_improvement, score_predictor


class SearchResult(NamedTuple):
    predictor: Optional[Predictor]
    score: float


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


FoldHook = Callable[[Any, int, Predictor, float], None]


def _best_predictor(configs: ConfigGroup, items: Sequence[DataItem], variants: Sequence[Any],
                    next_fn: Callable[..., SearchResult], n_folds: int = CV_FOLDS,
                    on_fold: Optional[FoldHook] = None) -> SearchResult:
    best_predictor = None
    best_score = 0.0
    for variant in variants:
        folds = CrossValidator(items, n_folds).folds()
        for fold_idx, (train, test) in enumerate(folds, start=1):
            found = next_fn(configs, variant, train, n_folds=n_folds)
            if found.predictor is None:
                continue
            score = score_predictor(test, found.predictor)
            if on_fold is not None:
                on_fold(variant, fold_idx, found.predictor, score)
            if is_improvement(score, best_score):
                best_predictor = found.predictor
                best_score = score
    return SearchResult(best_predictor, best_score)


def best_predictor_with_k(configs: ConfigGroup, k: int, items: Sequence[DataItem],
                          n_folds: int = CV_FOLDS) -> SearchResult:
    # scored one level up against the fold's test set
    return SearchResult(configs.fix_k(k).get_predictors(items)[0], 0.0)


def best_predictor_with_kernel(configs: ConfigGroup, kernel: Kernel, items: Sequence[DataItem],
                               n_folds: int = CV_FOLDS) -> SearchResult:
    narrowed = configs.fix_kernel(kernel.name)
    return _best_predictor(narrowed, items, narrowed.k_values, best_predictor_with_k, n_folds)


def best_predictor_with_metric(configs: ConfigGroup, metric: Metric, items: Sequence[DataItem],
                               n_folds: int = CV_FOLDS) -> SearchResult:
    narrowed = configs.fix_metric(metric.name)
    return _best_predictor(narrowed, items, narrowed.kernels, best_predictor_with_kernel, n_folds)


def best_predictor_in_space(configs: ConfigGroup, space: SpaceTransform, items: Sequence[DataItem],
                            n_folds: int = CV_FOLDS) -> SearchResult:
    narrowed = configs.fix_space(space.name)
    result = _best_predictor(narrowed, items, narrowed.metrics, best_predictor_with_metric, n_folds)
    if result.predictor is None:
        print(f"No predictor found in space {space.name}")
    else:
        print(f"Best predictor in space {space.name} is {result.predictor.name}")
    return result


def best_predictor(configs: ConfigGroup, items: Sequence[DataItem], n_folds: int = CV_FOLDS,
                   history: Optional[List[Dict[str, Any]]] = None) -> SearchResult:
    """
    Run the full search and return the overall best predictor and its F1.

    If history is given, one row per (space, fold) of the top level is
    appended to it.
    """
    def record(space, fold_idx, predictor, score):
        if history is not None:
            history.append({
                "space": space.name,
                "fold": int(fold_idx),
                "predictor": predictor.name,
                "f1": float(score),
            })

    return _best_predictor(configs, items, configs.spaces, best_predictor_in_space, n_folds, on_fold=record)


def run_search(items: Sequence[DataItem], configs: Optional[ConfigGroup] = None,
               n_folds: int = CV_FOLDS, results_dir: Optional[str] = RESULTS_DIR) -> Dict[str, Any]:
    """
    Search the full configuration space over already shuffled items.

    Returns a dictionary with the best SearchResult, the per-fold DataFrame of
    the top level and, when results_dir is set, the path of the saved CSV.
    """
    if configs is None:
        configs = ConfigGroup.for_items(items)
    print(f"Searching {configs} over {len(items)} items with {n_folds}-fold CV")

    history: List[Dict[str, Any]] = []
    best = best_predictor(configs, items, n_folds=n_folds, history=history)
    detailed = pd.DataFrame(history, columns=["space", "fold", "predictor", "f1"])

    paths = {}
    if results_dir is not None:
        ensure_dir(results_dir)
        results_csv = os.path.join(results_dir, "knn_search_results.csv")
        detailed.to_csv(results_csv, index=False)
        print(f"Saved per-fold search results to: {results_csv}")
        paths["results_csv"] = results_csv

    return {"best": best, "detailed": detailed, "paths": paths}
