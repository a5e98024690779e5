"""
cuckoo_feature_select.plot
==========================
Visualization helpers for a Cuckoo Search run.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from .selector import CandidateScore


__all__ = ["plot_convergence", "plot_selection_frequency", "selection_frequency"]


def selection_frequency(history: Sequence[CandidateScore]) -> np.ndarray:
    """Fraction of recorded nests that include each feature.

    Parameters
    ----------
    history : sequence of CandidateScore
        Typically ``selector.history_``.

    Returns
    -------
    freq : np.ndarray, shape (n_features,)
    """
    if len(history) == 0:
        raise ValueError("history is empty.")
    subsets = np.vstack([c.subset for c in history])
    return subsets.mean(axis=0)


def plot_convergence(
    history: Sequence[CandidateScore],
    *,
    title: str = "Cuckoo Search convergence",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Best and mean fitness of the population after each iteration.

    Parameters
    ----------
    history : sequence of CandidateScore
        ``selector.history_``; entries are grouped by their ``iteration``.
    title : str
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    iterations = sorted({c.iteration for c in history})
    best = [max(c.fitness for c in history if c.iteration == it) for it in iterations]
    mean = [np.mean([c.fitness for c in history if c.iteration == it]) for it in iterations]
    xs = [it + 1 for it in iterations]

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 4))
    else:
        fig = ax.get_figure()

    ax.plot(xs, best, color="#C44E52", marker="o", markersize=4, label="Best")
    ax.plot(xs, mean, color="#4C72B0", linestyle="--", label="Population mean")
    ax.set_xlabel("Iteration", fontsize=12)
    ax.set_ylabel("Fitness", fontsize=12)
    ax.set_title(title, fontsize=13)
    ax.legend(fontsize=9)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig


def plot_selection_frequency(
    history: Sequence[CandidateScore],
    *,
    feature_names: Sequence[str] | None = None,
    highlight: Sequence[int] | None = None,
    title: str = "Feature selection frequency",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Bar chart of how often each feature appears in the recorded nests.

    Parameters
    ----------
    history : sequence of CandidateScore
    feature_names : sequence of str, optional
        Names for the x-axis; defaults to feature indices.
    highlight : sequence of int, optional
        Indices drawn in red, e.g. ``selector.selected_features_``.
    title : str
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    freq = selection_frequency(history)
    n = len(freq)
    labels = list(feature_names) if feature_names is not None else [str(i) for i in range(n)]
    chosen = set(highlight) if highlight is not None else set()
    colors = ["#C44E52" if i in chosen else "#4C72B0" for i in range(n)]

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(8, n * 0.35), 4))
    else:
        fig = ax.get_figure()

    ax.bar(range(n), freq, color=colors, edgecolor="white", linewidth=0.5)
    ax.set_xticks(range(n))
    ax.set_xticklabels(labels, rotation=60, ha="right", fontsize=8)
    ax.set_ylabel("Selection frequency", fontsize=12)
    ax.set_title(title, fontsize=13)
    ax.set_ylim(0, 1.05)

    if chosen:
        patch = mpatches.Patch(color="#C44E52", label="Selected")
        ax.legend(handles=[patch], fontsize=9)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
