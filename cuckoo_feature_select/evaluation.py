"""
cuckoo_feature_select.evaluation
================================
K-fold cross-validated scoring of a classifier on a (reduced) dataset.

:class:`CrossValidationEvaluator` is the model-evaluation collaborator used
by :class:`~cuckoo_feature_select.fitness.FitnessEvaluator`.  Any object
with an ``evaluate(dataset)`` method returning per-fold scores, or any plain
callable with that signature, can take its place.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from sklearn.base import clone
from sklearn.model_selection import cross_val_score, cross_validate

from .dataset import Dataset


__all__ = ["CrossValidationEvaluator"]


class CrossValidationEvaluator:
    """Score an estimator with K-fold cross-validation.

    Parameters
    ----------
    estimator : sklearn classifier
        Cloned before every evaluation, so the instance passed in is never
        fitted.
    cv : int, default=10
        Number of folds.  Stratified folds are used for classifiers, so ``cv``
        may not exceed the number of members of the smallest class.
    scoring : str, default='accuracy'
        Metric averaged by the fitness function.
    n_jobs : int, optional
        Parallel jobs for the folds.
    """

    def __init__(
        self,
        estimator: Any,
        cv: int = 10,
        scoring: str = "accuracy",
        n_jobs: int | None = None,
    ):
        self.estimator = estimator
        self.cv        = cv
        self.scoring   = scoring
        self.n_jobs    = n_jobs

    def evaluate(self, dataset: Dataset) -> np.ndarray:
        """Return the ``cv`` per-fold scores of the estimator on ``dataset``."""
        return cross_val_score(
            clone(self.estimator), dataset.X, dataset.y,
            cv=self.cv, scoring=self.scoring, n_jobs=self.n_jobs,
        )

    __call__ = evaluate

    def report(self, dataset: Dataset) -> dict[str, float]:
        """Cross-validate and return mean accuracy, macro sensitivity and
        macro F1 over the folds."""
        results = cross_validate(
            clone(self.estimator), dataset.X, dataset.y,
            cv=self.cv, n_jobs=self.n_jobs,
            scoring={
                "accuracy":    "accuracy",
                "sensitivity": "recall_macro",
                "f1_macro":    "f1_macro",
            },
        )
        return {
            name: float(results[f"test_{name}"].mean())
            for name in ("accuracy", "sensitivity", "f1_macro")
        }

    def __repr__(self) -> str:
        return (
            f"CrossValidationEvaluator(estimator={self.estimator!r}, "
            f"cv={self.cv}, scoring={self.scoring!r})"
        )
