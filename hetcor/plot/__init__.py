"""Plotting API for hetcor.

Import convenience: ``from hetcor.plot import plot_concordance_per_region``.
"""

from .concordance_plots import plot_concordance_per_region  # noqa: F401

__all__ = ["plot_concordance_per_region"]
