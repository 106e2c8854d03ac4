"""Base plotting utilities shared across hetcor plot modules.

Centralises style configuration and figure saving so plot functions stay
short. Each plot returns a matplotlib Figure when ``output_path`` is not
provided; otherwise the figure is saved and closed and ``None`` is returned.
"""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
import seaborn as sns

__all__ = [
	"set_plot_style",
	"save_figure",
]


def set_plot_style() -> None:
	"""Apply a unified visual style."""
	sns.set_theme(style="whitegrid")
	plt.rcParams.update({
		"axes.titlesize": 13,
		"axes.labelsize": 11,
		"font.size": 10,
		"figure.dpi": 100,
	})


def save_figure(fig: plt.Figure, output_path: Optional[str]) -> Optional[plt.Figure]:
	"""Save figure if ``output_path`` provided else return it.

	Parameters
	----------
	fig : matplotlib.figure.Figure
		Figure to save or return.
	output_path : str | None
		Path to save. If None the figure is returned and *not* closed.
	"""
	if output_path:
		fig.savefig(output_path, bbox_inches="tight")
		plt.close(fig)
		return None
	return fig
