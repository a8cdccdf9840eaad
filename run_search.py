"""
run_search.py
Load the labelled points, run the nested KNN grid search, report the best
predictor and plot its decision regions.
Run from project root (where knn_search/ is importable).

Produces:
- reports/results/knn_search_results.csv
- reports/figs/out.png
"""

import sys

from knn_search.config import RAW_CSV, FIGS_DIR, RESULTS_DIR, OUTPUT_NAME, SEED
from knn_search.config_group import ConfigGroup
from knn_search.load_data import load_items, shuffle_items
from knn_search.search import run_search
from knn_search.visualize import render


def main():
    items = shuffle_items(load_items(RAW_CSV), seed=SEED)
    configs = ConfigGroup.for_items(items)

    res = run_search(items, configs, results_dir=RESULTS_DIR)
    best = res["best"]
    if best.predictor is None:
        raise RuntimeError(f"No predictor found for {configs}")

    print("Best F1-score is " + str(best.score) + " with predictor: " + best.predictor.name)
    plot = render(best.predictor, OUTPUT_NAME, items, outdir=FIGS_DIR)
    print("Saved decision regions plot to:", plot)


def run():
    try:
        main()
    except Exception as e:
        print("Search failed:", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
