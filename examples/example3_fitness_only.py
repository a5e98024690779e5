"""
Example 3 – Scoring Subsets Directly
=====================================
Sometimes you just want the fitness of a few hand-picked subsets, without
running the search.

This example shows the low-level API: ``FitnessEvaluator`` and its
``to_selected_feature_set`` projection.
"""

import numpy as np
from sklearn.naive_bayes import GaussianNB

from cuckoo_feature_select import CrossValidationEvaluator, Dataset, FitnessEvaluator

# ---------------------------------------------------------------------------
# Synthetic dataset: 2 informative features, 1 copy of one of them, 2 noise
# ---------------------------------------------------------------------------
rng = np.random.default_rng(0)
n   = 200

informative = np.vstack([rng.normal([0, 0], 0.8, (n//2, 2)),
                         rng.normal([2, 2], 0.8, (n//2, 2))])
X = np.hstack([
    informative,
    informative[:, :1] + rng.normal(0, 0.05, (n, 1)),   # near duplicate of f0
    rng.normal(0, 1, (n, 2)),                           # noise
])
y = np.array([0]*(n//2) + [1]*(n//2))

dataset = Dataset(X, y, feature_names=["f0", "f1", "f0_copy", "noise1", "noise2"])
fitness = FitnessEvaluator(
    CrossValidationEvaluator(GaussianNB(), cv=5),
    matrix=X,
    correlation="pearson",
)

# ---------------------------------------------------------------------------
# Score specific subsets
# ---------------------------------------------------------------------------
for subset in ([1, 1, 0, 0, 0],
               [1, 0, 1, 0, 0],
               [1, 1, 1, 0, 0],
               [0, 0, 0, 1, 1],
               [1, 1, 1, 1, 1],
               [0, 0, 0, 0, 0]):
    names = fitness.to_selected_feature_set(dataset, dataset.feature_map, subset).feature_names
    score = fitness.evaluate(dataset, dataset.feature_map, subset)
    print(f"  {subset}  features={list(names)}  fitness={score:.5f}  "
          f"redundancy={fitness.redundancy(subset):.3f}")
