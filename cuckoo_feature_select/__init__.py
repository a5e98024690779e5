"""
cuckoo_feature_select
=====================
A scikit-learn compatible Python package for wrapper feature selection with
binary Cuckoo Search.

Core idea
---------
Each candidate feature subset ("nest") is a binary inclusion vector.  A
population of nests is evolved with two moves:

**Lévy flight**
    Nest ``p`` takes a step of size ``α · (p + 1)^-λ``, is binarized through
    a transfer function and challenges a randomly chosen cuckoo nest.

**Nest abandonment**
    With probability ``pa`` a nest is rebuilt from the difference of two
    random nests, ``transfer(x + δ · (x_r1 − x_r2))``.

A challenger replaces a nest only if it is strictly fitter.  Fitness is the
cross-validated accuracy of a classifier trained on the selected features,
plus a small bonus for short, weakly correlated subsets::

    fitness(s) = acc(s) + 0.001 · (1 − |s| / F − R(s))

The fittest subset seen over all iterations is returned.

Public API
----------
CuckooSearchFeatureSelector – main sklearn-compatible estimator
FitnessEvaluator            – fitness of a single binary subset
SelectedFeatureSet          – named selection result
CrossValidationEvaluator    – K-fold model evaluation collaborator
Dataset                     – labeled dataset with named features
v1, v2                      – transfer functions
"""

from .dataset    import Dataset, load_numeric_matrix
from .evaluation import CrossValidationEvaluator
from .fitness    import EMPTY_SUBSET_FITNESS, FitnessEvaluator, SelectedFeatureSet
from .selector   import CandidateScore, CuckooSearchFeatureSelector, replace_if_better
from .transfer   import get_transfer_function, v1, v2

__all__ = [
    "CandidateScore",
    "CrossValidationEvaluator",
    "CuckooSearchFeatureSelector",
    "Dataset",
    "EMPTY_SUBSET_FITNESS",
    "FitnessEvaluator",
    "SelectedFeatureSet",
    "get_transfer_function",
    "load_numeric_matrix",
    "replace_if_better",
    "v1",
    "v2",
]

__version__ = "0.1.0"
