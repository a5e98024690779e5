"""
cuckoo_feature_select.dataset
=============================
Labeled tabular datasets and the CSV sources the selector reads from.

A :class:`Dataset` couples a feature matrix, its labels and an ordered list
of feature names.  The selector only needs three things from it: the number
of features, the name → index feature map and the ability to build a reduced
view restricted to a subset of named features.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd


__all__ = ["Dataset", "load_numeric_matrix"]


class Dataset:
    """In-memory labeled dataset.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
        Feature values.
    y : array-like, shape (n_samples,)
        Class labels.
    feature_names : sequence of str, optional
        Names of the columns of ``X``.  Defaults to ``x0``, ``x1``, ...
    name : str, optional
        Human-readable identifier recorded in the provenance of results.
    """

    def __init__(
        self,
        X: Any,
        y: Any,
        feature_names: Sequence[str] | None = None,
        name: str | None = None,
    ):
        X_arr = np.asarray(X, dtype=float)
        if X_arr.ndim != 2:
            raise ValueError(f"X must be 2-dimensional, got shape {X_arr.shape}.")
        y_arr = np.asarray(y)
        if len(y_arr) != len(X_arr):
            raise ValueError(
                f"X has {len(X_arr)} samples but y has {len(y_arr)} labels."
            )
        if feature_names is None:
            feature_names = [f"x{i}" for i in range(X_arr.shape[1])]
        feature_names = [str(n) for n in feature_names]
        if len(feature_names) != X_arr.shape[1]:
            raise ValueError(
                f"Got {len(feature_names)} feature names for "
                f"{X_arr.shape[1]} columns."
            )
        if len(set(feature_names)) != len(feature_names):
            raise ValueError("Feature names must be unique.")

        self.X = X_arr
        self.y = y_arr
        self.feature_names = tuple(feature_names)
        self.name = name
        self._parent: Dataset | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_csv(
        cls,
        path: str,
        label_column: str | None = "Class",
        name: str | None = None,
    ) -> "Dataset":
        """Load a labeled dataset from a CSV file with a header row.

        Parameters
        ----------
        path : str
            Path of the CSV file.
        label_column : str or None, default='Class'
            Column holding the class labels.  ``None`` uses the last column.
        name : str, optional
            Dataset name; defaults to ``path``.
        """
        frame = pd.read_csv(path)
        if label_column is None:
            label_column = frame.columns[-1]
        if label_column not in frame.columns:
            raise ValueError(
                f"Label column {label_column!r} not found in {path!r}; "
                f"available columns: {list(frame.columns)}"
            )
        features = frame.drop(columns=[label_column])
        return cls(
            features.to_numpy(dtype=float),
            frame[label_column].to_numpy(),
            feature_names=list(features.columns),
            name=name if name is not None else str(path),
        )

    # ------------------------------------------------------------------
    # Feature map
    # ------------------------------------------------------------------

    @property
    def n_samples(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]

    @property
    def feature_map(self) -> dict[str, int]:
        """Ordered mapping of feature name → column index."""
        return {name: i for i, name in enumerate(self.feature_names)}

    def select_features(self, features: Iterable[str]) -> "Dataset":
        """Return a reduced view containing only the named features.

        ``features`` may be any iterable of names, including a
        :class:`~cuckoo_feature_select.fitness.SelectedFeatureSet`.  Columns
        keep the order they have in this dataset.
        """
        if hasattr(features, "feature_names"):
            features = features.feature_names
        wanted = set(features)
        unknown = wanted.difference(self.feature_names)
        if unknown:
            raise ValueError(f"Unknown feature names: {sorted(unknown)}")
        columns = [i for i, n in enumerate(self.feature_names) if n in wanted]
        reduced = Dataset(
            self.X[:, columns],
            self.y,
            feature_names=[self.feature_names[i] for i in columns],
            name=self.name,
        )
        reduced._parent = self
        return reduced

    @property
    def provenance(self) -> dict[str, Any]:
        prov = {
            "class": type(self).__name__,
            "name": self.name,
            "n_samples": self.n_samples,
            "n_features": self.n_features,
        }
        if self._parent is not None:
            prov["selected_from"] = self._parent.provenance
        return prov

    def __repr__(self) -> str:
        return (
            f"Dataset(name={self.name!r}, n_samples={self.n_samples}, "
            f"n_features={self.n_features})"
        )


def load_numeric_matrix(path: str) -> np.ndarray:
    """Read a CSV file into a float matrix, dropping the trailing label column.

    The first row is treated as a header.  Any non-numeric feature value
    raises ``ValueError``; a missing file raises ``FileNotFoundError``.

    Returns
    -------
    matrix : np.ndarray, shape (n_samples, n_columns - 1)
    """
    frame = pd.read_csv(path)
    if frame.shape[1] < 2:
        raise ValueError(
            f"{path!r} must contain at least one feature column and a label column."
        )
    return frame.iloc[:, :-1].to_numpy(dtype=float)
