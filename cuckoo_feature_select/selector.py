"""
cuckoo_feature_select.selector
==============================
Scikit-learn compatible estimator implementing binary Cuckoo Search
wrapper feature selection.

The estimator follows the standard sklearn API:

    selector = CuckooSearchFeatureSelector(
        estimator=RandomForestClassifier(),
        population_size=20,
        max_iteration=10,
        cv=5,
    )
    selector.fit(X_train, y_train)
    X_reduced = selector.transform(X_train)

or works directly on a :class:`~cuckoo_feature_select.dataset.Dataset`:

    selected = selector.select(Dataset.from_csv("data.csv", "Class"))
    reduced  = dataset.select_features(selected)

Search
------
A population of ``population_size`` random binary nests is evolved for
``max_iteration`` sweeps.  In every sweep, each nest ``p`` (0-based) takes a
Lévy-flight-like step of size ``step_size_scaling * (p + 1) ** -levy_lambda``,
is binarized through the transfer function and challenges a randomly chosen
cuckoo nest.  With probability ``worst_nest_probability`` the nest is also
rebuilt from two random nests ``r1``, ``r2`` as
``transfer(nest + delta * (r1 - r2))`` and challenges itself.  A challenger
replaces a nest only if its fitness is strictly greater.

Nests are updated one after another, so a nest sees the replacements made
earlier in the same sweep.  All random draws come from a single generator
seeded with ``random_state``, which makes a run reproducible whenever the
model evaluation is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .dataset import Dataset
from .evaluation import CrossValidationEvaluator
from .fitness import CORRELATION_METHODS, FitnessEvaluator, SelectedFeatureSet
from .transfer import get_transfer_function


__all__ = ["CandidateScore", "CuckooSearchFeatureSelector", "replace_if_better"]


@dataclass(frozen=True, eq=False)
class CandidateScore:
    """A feature subset together with its fitness.

    ``subset`` is a read-only copy of the vector it was built from.
    """

    subset: np.ndarray
    fitness: float
    iteration: int = field(default=-1)

    def __post_init__(self):
        snapshot = np.array(self.subset, dtype=np.int8, copy=True)
        snapshot.setflags(write=False)
        object.__setattr__(self, "subset", snapshot)
        object.__setattr__(self, "fitness", float(self.fitness))


def replace_if_better(
    incumbent: np.ndarray,
    incumbent_fitness: float,
    challenger: np.ndarray,
    challenger_fitness: float,
) -> tuple[np.ndarray, float]:
    """Greedy elitist replacement.

    Returns a copy of ``challenger`` and its fitness if it is strictly
    better, otherwise ``incumbent`` (the same object) and its fitness.
    """
    if challenger_fitness > incumbent_fitness:
        return np.array(challenger, dtype=np.int8, copy=True), challenger_fitness
    return incumbent, incumbent_fitness


class CuckooSearchFeatureSelector(TransformerMixin, BaseEstimator):
    """Wrapper feature selector driven by binary Cuckoo Search.

    Parameters
    ----------
    estimator : sklearn classifier, optional
        Classifier scored by K-fold cross-validation on every candidate
        subset.  Ignored when ``evaluator`` is given.
    evaluator : object or callable, optional
        Custom model evaluation: an object with ``evaluate(dataset)`` or a
        callable ``evaluator(dataset)`` returning per-fold accuracies, or a
        ready-made :class:`~cuckoo_feature_select.fitness.FitnessEvaluator`.
    transfer_function : {'v1', 'v2'} or callable, default='v2'
        Maps real-valued updates to bits.  A callable must accept numpy
        arrays.
    population_size : int, default=50
        Number of nests.
    step_size_scaling : float, default=2.0
        Scale of the Lévy-flight step.
    levy_lambda : float, default=2.0
        Decay exponent of the step with the nest index.
    worst_nest_probability : float, default=0.1
        Probability that a nest is rebuilt by the abandonment move.
    delta : float, default=1.5
        Scale of the difference vector used by the abandonment move.
    max_iteration : int, default=30
        Number of sweeps over the population.
    cv : int, default=10
        Cross-validation folds (used with ``estimator``).
    scoring : str, default='accuracy'
        Scoring metric passed to ``cross_val_score`` (used with ``estimator``).
    correlation : {'pearson', 'spearman', 'kendall'}, optional
        Enables the redundancy term of the fitness.
    data_path : str, optional
        CSV file holding the numeric matrix for the redundancy term.  If
        ``None`` while ``correlation`` is set, the feature matrix of the
        dataset being searched is used.
    random_state : int, default=12345
        Seed of the search's random generator.
    n_jobs : int, optional
        Parallel jobs for cross-validation.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = progress, 2 = per iteration).

    Attributes
    ----------
    selected_features_ : tuple of int
        Indices of the selected features after fitting.
    selected_feature_set_ : SelectedFeatureSet
        Named result of the search.
    best_fitness_ : float
        Fitness of the selected subset.
    history_ : list of CandidateScore
        Every nest after every sweep, in order.
    best_fitness_curve_ : np.ndarray, shape (max_iteration,)
        Best fitness in the population after each sweep.
    population_ : np.ndarray, shape (population_size, n_features_in_)
        Final population.
    n_evaluations_ : int
        Number of distinct non-empty subsets passed to the model evaluation.
    n_features_in_ : int
        Total number of features seen during fit.
    feature_names_in_ : np.ndarray of str
        Names of the features seen during fit.
    fitness_correlation_ : str or None
        Correlation measure of the redundancy term actually used.

    Examples
    --------
    >>> from sklearn.datasets import load_breast_cancer
    >>> from sklearn.neighbors import KNeighborsClassifier
    >>> from cuckoo_feature_select import CuckooSearchFeatureSelector
    >>>
    >>> X, y = load_breast_cancer(return_X_y=True)
    >>> selector = CuckooSearchFeatureSelector(
    ...     estimator=KNeighborsClassifier(),
    ...     population_size=10,
    ...     max_iteration=5,
    ...     cv=5,
    ... )
    >>> selector.fit(X, y)
    CuckooSearchFeatureSelector(...)
    >>> X_reduced = selector.transform(X)
    """

    def __init__(
        self,
        estimator: Any = None,
        *,
        evaluator: Any = None,
        transfer_function: Any = "v2",
        population_size: int = 50,
        step_size_scaling: float = 2.0,
        levy_lambda: float = 2.0,
        worst_nest_probability: float = 0.1,
        delta: float = 1.5,
        max_iteration: int = 30,
        cv: int = 10,
        scoring: str = "accuracy",
        correlation: str | None = None,
        data_path: str | None = None,
        random_state: int | None = 12345,
        n_jobs: int | None = None,
        verbose: int = 0,
    ):
        self.estimator              = estimator
        self.evaluator              = evaluator
        self.transfer_function      = transfer_function
        self.population_size        = population_size
        self.step_size_scaling      = step_size_scaling
        self.levy_lambda            = levy_lambda
        self.worst_nest_probability = worst_nest_probability
        self.delta                  = delta
        self.max_iteration          = max_iteration
        self.cv                     = cv
        self.scoring                = scoring
        self.correlation            = correlation
        self.data_path              = data_path
        self.random_state           = random_state
        self.n_jobs                 = n_jobs
        self.verbose                = verbose

        self._check_params()

    # ------------------------------------------------------------------
    # Feature selection
    # ------------------------------------------------------------------

    def is_ordered(self) -> bool:
        """Selected features are always reported as an ordered set."""
        return True

    def get_provenance(self) -> dict[str, Any]:
        """Configuration of this selector, recorded in its results."""
        params = self.get_params(deep=False)
        for key in ("estimator", "evaluator", "transfer_function"):
            if params[key] is not None and not isinstance(params[key], str):
                params[key] = repr(params[key])
        return {"class": type(self).__name__, **params}

    def select(self, dataset: Dataset) -> SelectedFeatureSet:
        """Run the search on ``dataset`` and return the selected features.

        Any exception raised while evaluating a candidate aborts the search.

        Parameters
        ----------
        dataset : Dataset

        Returns
        -------
        SelectedFeatureSet
        """
        self._check_params()
        n_features = dataset.n_features
        if n_features == 0:
            raise ValueError("The dataset has no features to select from.")

        fitness     = self._make_fitness_evaluator(dataset)
        transfer    = get_transfer_function(self.transfer_function)
        feature_map = dataset.feature_map
        rng         = np.random.default_rng(self.random_state)
        n_pop       = self.population_size

        cache: dict[bytes, float] = {}

        def score(candidate: np.ndarray) -> float:
            key = candidate.tobytes()
            if key not in cache:
                cache[key] = fitness.evaluate(dataset, feature_map, candidate)
            return cache[key]

        def binarize(values: np.ndarray) -> np.ndarray:
            return np.asarray(transfer(values), dtype=np.int8)

        if self.verbose >= 1:
            print(
                f"[CuckooSearchFeatureSelector] Searching {n_features} features "
                f"with {n_pop} nests for {self.max_iteration} iterations ..."
            )

        population = rng.integers(0, 2, size=(n_pop, n_features), dtype=np.int8)
        scores     = np.array([score(nest) for nest in population], dtype=float)
        history: list[CandidateScore] = []
        curve = []

        for it in range(self.max_iteration):
            for p in range(n_pop):
                # ---- Lévy flight against a random cuckoo -----------------
                step    = self.step_size_scaling * (p + 1) ** -self.levy_lambda
                evolved = binarize(population[p] + step)
                j = int(rng.integers(n_pop))
                population[j], scores[j] = replace_if_better(
                    population[j], scores[j], evolved, score(evolved),
                )

                # ---- Nest abandonment ------------------------------------
                if rng.random() < self.worst_nest_probability:
                    r1, r2  = rng.integers(n_pop, size=2)
                    evolved = binarize(
                        population[p] + self.delta * (population[r1] - population[r2])
                    )
                    population[p], scores[p] = replace_if_better(
                        population[p], scores[p], evolved, score(evolved),
                    )

            history.extend(
                CandidateScore(population[k], scores[k], iteration=it)
                for k in range(n_pop)
            )
            curve.append(scores.max())

            if self.verbose >= 2:
                print(
                    f"  [{it + 1}/{self.max_iteration}]  "
                    f"best fitness={scores.max():.4f}  "
                    f"features={int(population[scores.argmax()].sum())}"
                )

        best = max(history, key=attrgetter("fitness"))
        selected = fitness.to_selected_feature_set(
            dataset, feature_map, best.subset, provenance=self.get_provenance(),
        )

        self.history_            = history
        self.best_fitness_       = best.fitness
        self.best_fitness_curve_ = np.asarray(curve)
        self.population_         = population
        self.n_evaluations_      = sum(1 for key in cache if any(key))
        self.n_features_in_      = n_features
        self.fitness_correlation_ = fitness.correlation
        self.feature_names_in_   = np.asarray(dataset.feature_names, dtype=object)
        self.selected_feature_set_ = selected
        self.selected_features_  = tuple(int(i) for i in np.flatnonzero(best.subset))

        if self.verbose >= 1:
            print(
                f"[CuckooSearchFeatureSelector] Done.  "
                f"Selected {len(selected)} features  "
                f"fitness = {self.best_fitness_:.4f}  "
                f"({self.n_evaluations_} subsets evaluated)"
            )
        return selected

    # ------------------------------------------------------------------
    # sklearn API
    # ------------------------------------------------------------------

    def fit(self, X: Any, y: Any, feature_names=None) -> "CuckooSearchFeatureSelector":
        """Fit the selector by running the search on ``(X, y)``.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data.  DataFrame column names are used as feature
            names.
        y : array-like, shape (n_samples,)
            Class labels.
        feature_names : sequence of str, optional
            Overrides the feature names.

        Returns
        -------
        self
        """
        if feature_names is None and hasattr(X, "columns"):
            feature_names = [str(c) for c in X.columns]
        self.select(Dataset(X, y, feature_names=feature_names))
        return self

    def transform(self, X: Any) -> np.ndarray:
        """Project X onto the selected feature subset.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)

        Returns
        -------
        X_reduced : np.ndarray, shape (n_samples, n_selected)
        """
        check_is_fitted(self, "selected_features_")
        X_arr = np.asarray(X, dtype=float)
        return X_arr[:, list(self.selected_features_)]

    def get_support(self, indices: bool = False):
        """Return a mask or indices of the selected features.

        Parameters
        ----------
        indices : bool, default=False
            If ``True``, return indices; otherwise return a boolean mask.
        """
        check_is_fitted(self, "selected_features_")
        mask = np.zeros(self.n_features_in_, dtype=bool)
        mask[list(self.selected_features_)] = True
        if indices:
            return np.where(mask)[0]
        return mask

    def get_feature_names_out(self, input_features=None):
        """Get feature names for the selected features.

        Parameters
        ----------
        input_features : array-like of str, optional
            Input feature names.  If ``None``, the names seen during fit.

        Returns
        -------
        feature_names_out : np.ndarray of str
        """
        check_is_fitted(self, "selected_features_")
        if input_features is None:
            input_features = self.feature_names_in_
        return np.array([input_features[i] for i in self.selected_features_], dtype=object)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make_fitness_evaluator(self, dataset: Dataset) -> FitnessEvaluator:
        if isinstance(self.evaluator, FitnessEvaluator):
            fitness = self.evaluator
        else:
            if self.evaluator is not None:
                collaborator = self.evaluator
            elif self.estimator is not None:
                collaborator = CrossValidationEvaluator(
                    self.estimator, cv=self.cv, scoring=self.scoring, n_jobs=self.n_jobs,
                )
            else:
                raise ValueError("Either estimator or evaluator must be given.")

            if self.correlation is None:
                fitness = FitnessEvaluator(collaborator)
            elif self.data_path is not None:
                fitness = FitnessEvaluator(
                    collaborator, data_path=self.data_path, correlation=self.correlation,
                )
            else:
                fitness = FitnessEvaluator(
                    collaborator, matrix=dataset.X, correlation=self.correlation,
                )

        if fitness.matrix is not None and fitness.matrix.shape[1] != dataset.n_features:
            raise ValueError(
                f"The correlation matrix has {fitness.matrix.shape[1]} feature "
                f"columns but the dataset has {dataset.n_features} features."
            )
        return fitness

    def _check_params(self):
        if not isinstance(self.population_size, (int, np.integer)) or self.population_size < 1:
            raise ValueError("population_size must be an integer >= 1.")
        if not isinstance(self.max_iteration, (int, np.integer)) or self.max_iteration < 1:
            raise ValueError("max_iteration must be an integer >= 1.")
        if not 0.0 <= self.worst_nest_probability <= 1.0:
            raise ValueError("worst_nest_probability must be in [0, 1].")
        if self.cv < 2:
            raise ValueError("cv must be >= 2.")
        if isinstance(self.evaluator, FitnessEvaluator) and (
            self.correlation is not None or self.data_path is not None
        ):
            raise ValueError(
                "correlation and data_path cannot be combined with a ready-made "
                "FitnessEvaluator; configure the redundancy term on the evaluator."
            )
        if self.correlation is not None and str(self.correlation).lower() not in CORRELATION_METHODS:
            raise ValueError(
                f"correlation must be None or one of {CORRELATION_METHODS}, "
                f"got {self.correlation!r}."
            )
        get_transfer_function(self.transfer_function)

    def summary(self) -> str:
        """Return a human-readable summary of the fitted selector."""
        check_is_fitted(self, "selected_features_")
        lines = [
            "CuckooSearchFeatureSelector – fit summary",
            f"  n_features_in          : {self.population_.shape[1]}",
            f"  population_size        : {self.population_size}",
            f"  iterations             : {self.max_iteration}",
            f"  subsets evaluated      : {self.n_evaluations_}",
            f"  selected features      : {len(self.selected_features_)}",
            f"  feature names          : {list(self.selected_feature_set_.feature_names)}",
            f"  fitness                : {self.best_fitness_:.4f}",
        ]
        if self.fitness_correlation_ is not None:
            lines.append(f"  redundancy measure     : {self.fitness_correlation_}")
        return "\n".join(lines)
