import os

# Reproducibility
SEED = 42

# File locations
RAW_CSV = os.path.join("data", "raw", "chips.txt")
REPORTS_DIR = "reports"
FIGS_DIR = os.path.join(REPORTS_DIR, "figs")
RESULTS_DIR = os.path.join(REPORTS_DIR, "results")

# Search and evaluation settings
CV_FOLDS = 5                          # folds per cross-validation level; clamped to the working-set size
K_MIN = 2                             # smallest neighbourhood size; the largest is floor(sqrt(n))

# Decision-region rendering
GRID_STEPS = 80                       # grid points per axis
GRID_PADDING = 0.1                    # fraction of the data range added on each side
OUTPUT_NAME = "out"
