"""
cuckoo_feature_select.transfer
==============================
Transfer functions mapping a real-valued position update to a binary
feature-inclusion bit.

Two variants are provided:

* **V2** (default) – logistic curve ``1 / (1 + exp(-2x))`` thresholded at 0.5.
* **V1** – the steeper ``tanh(x)`` curve thresholded at -0.5.  V1 keeps a
  feature for slightly negative updates that V2 rejects, so it biases the
  search toward inclusion.

Both accept scalars or numpy arrays.  Saturating primitives (``scipy.special.
expit`` and ``numpy.tanh``) are used, so no input magnitude overflows.
"""

from __future__ import annotations

from typing import Callable, Union

import numpy as np
from scipy.special import expit


__all__ = ["v1", "v2", "TRANSFER_FUNCTIONS", "get_transfer_function"]


TransferFunction = Callable[[Union[float, np.ndarray]], Union[int, np.ndarray]]


def _to_bits(mask):
    if np.ndim(mask) == 0:
        return int(mask)
    return np.asarray(mask, dtype=np.int8)


def v1(x):
    """Binarize ``x`` through ``tanh``: 1 if ``tanh(x) >= -0.5`` else 0."""
    return _to_bits(np.tanh(np.asarray(x, dtype=float)) >= -0.5)


def v2(x):
    """Binarize ``x`` through ``1 / (1 + exp(-2x))``: 1 if the value is >= 0.5.

    Examples
    --------
    >>> v2(0.25), v2(-3.0)
    (1, 0)
    >>> v2(np.array([-1e9, 0.0, 1e9]))
    array([0, 1, 1], dtype=int8)
    """
    return _to_bits(expit(2.0 * np.asarray(x, dtype=float)) >= 0.5)


TRANSFER_FUNCTIONS: dict[str, TransferFunction] = {
    "v1": v1,
    "v2": v2,
}


def get_transfer_function(transfer: Union[str, TransferFunction]) -> TransferFunction:
    """Resolve a transfer function by name (``"v1"``, ``"v2"``) or pass a
    callable through unchanged."""
    if callable(transfer):
        return transfer
    try:
        return TRANSFER_FUNCTIONS[str(transfer).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown transfer function {transfer!r}; "
            f"expected one of {sorted(TRANSFER_FUNCTIONS)} or a callable."
        ) from None
