"""
Example 2 – CSV Dataset with a Redundancy Penalty
==================================================
Demonstrates:
  * Loading a labeled CSV file (label column ``Class``)
  * Penalising correlated features with Spearman's rank correlation
  * Building the reduced dataset and re-evaluating it with 10-fold CV

Usage::

    python example2_csv_with_correlation.py path/to/data.csv

Without an argument, the Wine dataset is written to ``wine.csv`` first.
"""

import sys
import time

import pandas as pd
from sklearn.datasets import load_wine
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from cuckoo_feature_select import CrossValidationEvaluator, CuckooSearchFeatureSelector, Dataset

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
if len(sys.argv) > 1:
    data_path = sys.argv[1]
else:
    wine = load_wine(as_frame=True)
    frame = wine.data.assign(Class=wine.target)
    data_path = "wine.csv"
    frame.to_csv(data_path, index=False)

dataset = Dataset.from_csv(data_path, label_column="Class")
print(dataset)

# ---------------------------------------------------------------------------
# 2. Search with a Spearman redundancy term
# ---------------------------------------------------------------------------
model = make_pipeline(StandardScaler(), LogisticRegression(max_iter=1000))

selector = CuckooSearchFeatureSelector(
    estimator=model,
    transfer_function="v2",
    population_size=4,
    step_size_scaling=2.0,
    levy_lambda=2.0,
    worst_nest_probability=0.1,
    delta=1.5,
    max_iteration=20,
    cv=5,
    correlation="spearman",
    data_path=data_path,
    random_state=12345,
    verbose=1,
)

start = time.perf_counter()
selected = selector.select(dataset)
fs_seconds = time.perf_counter() - start

# ---------------------------------------------------------------------------
# 3. Re-evaluate the reduced dataset
# ---------------------------------------------------------------------------
reduced = dataset.select_features(selected)

start = time.perf_counter()
report = CrossValidationEvaluator(model, cv=10).report(reduced)
cv_seconds = time.perf_counter() - start

print(f"\nFeature selection time      : {fs_seconds:.2f} s")
print(f"Number of selected features : {len(selected)}")
print(f"Selected features           : {list(selected.feature_names)}")
print(f"Training/testing time       : {cv_seconds:.2f} s")
print(pd.Series(report, name="10-fold CV").to_string(float_format="{:.4f}".format))
