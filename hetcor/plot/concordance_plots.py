"""Per-region concordance plots.

Contains:
 - concordant het rate per region / contig (bar), annotated with the
   number of variants visited in each region

Follows the package convention of returning a ``matplotlib.figure.Figure``
when ``output_path`` is not provided; otherwise it saves and returns ``None``.
"""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .base import set_plot_style, save_figure

__all__ = ["plot_concordance_per_region"]


def plot_concordance_per_region(
	data: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Concordant heterozygous rate per region",
	max_regions: int = 100,
	color: str = "#4477AA",
	rotation: int = 45,
) -> Optional[plt.Figure]:
	"""Bar plot of ``ConcordanceRate`` for each row of a per-region table.

	Parameters
	----------
	data : pd.DataFrame
		Output of ``ConcordanceTally.to_frame()``.
	max_regions : int
		Only the first ``max_regions`` rows are drawn; the title notes the cut.
	"""
	required = {"Region", "TotalVariants", "ConcordanceRate"}
	if not required.issubset(data.columns):
		raise ValueError(f"DataFrame must contain columns: {', '.join(sorted(required))}")
	set_plot_style()
	df = data.reset_index(drop=True)
	shown = df.iloc[:max_regions].copy()
	# Repeated intervals share a label; keep bars distinct
	shown["_x"] = [f"{label} #{i + 1}" if dup else label
		for i, (label, dup) in enumerate(zip(shown["Region"], shown["Region"].duplicated(keep=False)))]
	fig_width = max(8, min(18, len(shown) * 0.35 + 4))
	fig, ax = plt.subplots(figsize=(fig_width, 5))
	if shown.empty:
		ax.text(0.5, 0.5, "No variants visited", ha="center", va="center", transform=ax.transAxes)
	else:
		sns.barplot(data=shown, x="_x", y="ConcordanceRate", color=color, ax=ax)
	for patch, total in zip(ax.patches, shown["TotalVariants"]):
		ax.annotate(
			f"n={int(total):,}",
			(patch.get_x() + patch.get_width() / 2, patch.get_height()),
			ha="center", va="bottom", fontsize=7,
		)
	ax.set_ylim(0, 1.05)
	ax.set_xlabel("Region")
	ax.set_ylabel("Concordant het / total variants")
	ax.tick_params(axis="x", labelrotation=rotation)
	if len(df) > max_regions:
		ax.set_title(f"{title}\n(first {max_regions:,} of {len(df):,} regions)")
	else:
		ax.set_title(title)
	fig.tight_layout()
	return save_figure(fig, output_path)
