"""
cuckoo_feature_select.fitness
=============================
Fitness of a candidate feature subset.

The fitness of a binary inclusion vector ``s`` over ``F`` features is::

    fitness(s) = acc(s) + 0.001 * (1 - |s| / F - R(s))

where ``acc(s)`` is the mean K-fold cross-validated accuracy of the model on
the dataset restricted to the selected features, ``|s|`` the number of
selected features and ``R(s)`` an optional redundancy term.  The 0.001
coefficient keeps accuracy dominant; the remaining terms only break ties in
favour of smaller and less correlated subsets.

Redundancy
----------
When a numeric matrix and a correlation method are configured, ``R(s)`` is
the maximum absolute column sum of the correlation matrix of the selected
columns, divided by the number of columns.  The last selected column is left
out of the matrix, so subsets with fewer than two features have ``R = 0``.
Undefined coefficients (constant columns) count as zero correlation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

import numpy as np
from scipy.stats import kendalltau, rankdata

from .dataset import Dataset, load_numeric_matrix


__all__ = [
    "EMPTY_SUBSET_FITNESS",
    "CORRELATION_METHODS",
    "FitnessEvaluator",
    "SelectedFeatureSet",
    "correlation_matrix",
]


#: Fitness assigned to a subset without any selected feature: the lowest
#: finite float, so any scored subset ranks above it whatever the scoring.
EMPTY_SUBSET_FITNESS = float(np.finfo(float).min)

SIZE_PENALTY = 0.001

CORRELATION_METHODS = ("pearson", "spearman", "kendall")


@dataclass(frozen=True)
class SelectedFeatureSet:
    """Named result of a feature selection run.

    Attributes
    ----------
    feature_names : tuple of str
        Selected features, in feature-map order.
    feature_scores : tuple of float
        Relevance weight of each selected feature (always 1.0 here).
    is_ordered : bool
        Whether ``feature_names`` is reported in relevance order.
    provenance : mapping
        Where the selection came from (dataset and selector configuration).
    """

    feature_names: tuple[str, ...]
    feature_scores: tuple[float, ...]
    is_ordered: bool = True
    provenance: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if len(self.feature_names) != len(self.feature_scores):
            raise ValueError("feature_names and feature_scores differ in length.")
        object.__setattr__(self, "feature_names", tuple(self.feature_names))
        object.__setattr__(self, "feature_scores", tuple(float(s) for s in self.feature_scores))
        object.__setattr__(self, "provenance", MappingProxyType(dict(self.provenance)))

    def __len__(self) -> int:
        return len(self.feature_names)

    def __iter__(self):
        return iter(zip(self.feature_names, self.feature_scores))

    def to_dict(self) -> dict[str, Any]:
        """Plain-``dict`` form, suitable for JSON persistence."""
        return {
            "feature_names":  list(self.feature_names),
            "feature_scores": list(self.feature_scores),
            "is_ordered":     self.is_ordered,
            "provenance":     dict(self.provenance),
        }


def correlation_matrix(matrix: np.ndarray, method: str) -> np.ndarray:
    """Column-wise correlation matrix of ``matrix`` (shape ``(k, k)``).

    Parameters
    ----------
    matrix : np.ndarray, shape (n_samples, k)
    method : {'pearson', 'spearman', 'kendall'}
    """
    mat = np.asarray(matrix, dtype=float)
    k = mat.shape[1]

    if method == "pearson":
        with np.errstate(divide="ignore", invalid="ignore"):
            corr = np.atleast_2d(np.corrcoef(mat, rowvar=False))
    elif method == "spearman":
        ranks = rankdata(mat, axis=0)
        with np.errstate(divide="ignore", invalid="ignore"):
            corr = np.atleast_2d(np.corrcoef(ranks, rowvar=False))
    elif method == "kendall":
        corr = np.eye(k)
        for i in range(k):
            for j in range(i + 1, k):
                tau = kendalltau(mat[:, i], mat[:, j]).statistic
                corr[i, j] = corr[j, i] = tau
    else:
        raise ValueError(
            f"Unknown correlation method {method!r}; "
            f"expected one of {CORRELATION_METHODS}."
        )

    corr = np.nan_to_num(corr, nan=0.0)
    np.fill_diagonal(corr, 1.0)
    return corr


class FitnessEvaluator:
    """Score binary feature subsets.

    Parameters
    ----------
    evaluator : object or callable
        Model-evaluation collaborator.  Either an object with an
        ``evaluate(dataset)`` method or a callable ``evaluator(dataset)``;
        both must return the per-fold accuracies on ``dataset``.
    data_path : str, optional
        CSV file (header row, trailing label column) from which the numeric
        matrix used for the redundancy term is loaded once, here.
    correlation : {'pearson', 'spearman', 'kendall'}, optional
        Correlation measure of the redundancy term.  Required together with
        ``data_path`` or ``matrix``.
    matrix : array-like, shape (n_samples, n_features), optional
        In-memory alternative to ``data_path``.
    """

    def __init__(
        self,
        evaluator: Any,
        *,
        data_path: str | None = None,
        correlation: str | None = None,
        matrix: Any = None,
    ):
        if not (hasattr(evaluator, "evaluate") or callable(evaluator)):
            raise TypeError(
                "evaluator must be callable or provide an evaluate(dataset) method."
            )
        if data_path is not None and matrix is not None:
            raise ValueError("Pass either data_path or matrix, not both.")
        has_source = data_path is not None or matrix is not None
        if correlation is not None:
            correlation = str(correlation).lower()
            if correlation not in CORRELATION_METHODS:
                raise ValueError(
                    f"Unknown correlation method {correlation!r}; "
                    f"expected one of {CORRELATION_METHODS}."
                )
            if not has_source:
                raise ValueError(
                    "A correlation method needs a numeric matrix "
                    "(data_path or matrix)."
                )
        elif has_source:
            raise ValueError("A numeric matrix was given without a correlation method.")

        self.evaluator   = evaluator
        self.correlation = correlation
        self.data_path   = data_path
        if data_path is not None:
            self.matrix = load_numeric_matrix(data_path)
        elif matrix is not None:
            self.matrix = np.asarray(matrix, dtype=float)
        else:
            self.matrix = None

        if self.matrix is not None and self.matrix.ndim != 2:
            raise ValueError(f"matrix must be 2-dimensional, got shape {self.matrix.shape}.")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(
        self,
        dataset: Dataset,
        feature_map: Mapping[str, int] | None,
        subset: Sequence[int],
    ) -> float:
        """Fitness of ``subset`` on ``dataset``.

        Parameters
        ----------
        dataset : Dataset
            Full dataset (all features).
        feature_map : mapping of str → int, optional
            Feature name → index map; defaults to ``dataset.feature_map``.
        subset : sequence of {0, 1}
            Inclusion bit per feature.

        Returns
        -------
        float
            ``EMPTY_SUBSET_FITNESS`` if no feature is selected.
        """
        if feature_map is None:
            feature_map = dataset.feature_map
        bits = self._check_subset(feature_map, subset)
        n_selected = int(bits.sum())
        if n_selected == 0:
            return EMPTY_SUBSET_FITNESS

        selected = self.to_selected_feature_set(dataset, feature_map, bits)
        reduced  = dataset.select_features(selected)
        accuracy = float(np.mean(self._fold_scores(reduced)))
        redundancy = self.redundancy(bits)
        return accuracy + SIZE_PENALTY * (1 - n_selected / len(feature_map) - redundancy)

    def to_selected_feature_set(
        self,
        dataset: Dataset | None,
        feature_map: Mapping[str, int],
        subset: Sequence[int],
        provenance: Mapping[str, Any] | None = None,
    ) -> SelectedFeatureSet:
        """Project a bit vector onto the named features it selects.

        Every feature whose bit is 1 is returned with weight 1.0, in
        feature-map order.  ``provenance`` (typically the selector
        configuration) is recorded alongside the dataset provenance.
        """
        bits = self._check_subset(feature_map, subset)
        names_by_index = {i: name for name, i in feature_map.items()}
        names = [names_by_index[i] for i in np.flatnonzero(bits)]
        return SelectedFeatureSet(
            feature_names=tuple(names),
            feature_scores=tuple(1.0 for _ in names),
            is_ordered=True,
            provenance={
                "class":    SelectedFeatureSet.__name__,
                "dataset":  dataset.provenance if dataset is not None else None,
                "selector": dict(provenance) if provenance is not None else None,
            },
        )

    def redundancy(self, subset: Sequence[int]) -> float:
        """Normalized correlation norm of the selected columns (0 when no
        correlation is configured)."""
        if self.matrix is None:
            return 0.0
        bits = np.asarray(subset)
        if len(bits) != self.matrix.shape[1]:
            raise ValueError(
                f"Numeric matrix has {self.matrix.shape[1]} columns but the "
                f"subset covers {len(bits)} features."
            )
        columns = np.flatnonzero(bits)[:-1]
        if len(columns) == 0:
            return 0.0
        corr = correlation_matrix(self.matrix[:, columns], self.correlation)
        return float(np.linalg.norm(corr, ord=1) / len(columns))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fold_scores(self, dataset: Dataset) -> np.ndarray:
        evaluate: Callable = getattr(self.evaluator, "evaluate", self.evaluator)
        return np.asarray(evaluate(dataset), dtype=float)

    @staticmethod
    def _check_subset(feature_map: Mapping[str, int], subset: Sequence[int]) -> np.ndarray:
        bits = np.asarray(subset)
        if bits.ndim != 1 or len(bits) != len(feature_map):
            raise ValueError(
                f"Subset of shape {bits.shape} does not match the "
                f"{len(feature_map)} features of the feature map."
            )
        return bits

    def __repr__(self) -> str:
        return (
            f"FitnessEvaluator(evaluator={self.evaluator!r}, "
            f"correlation={self.correlation!r})"
        )
