"""Metric computation subpackage."""

from .genotype_metrics import render_genotype, is_heterozygous, is_concordant_het  # noqa: F401
from .concordance import ConcordanceTally, RegionTally, compute_concordance, run_concordance  # noqa: F401

__all__ = [
	"render_genotype",
	"is_heterozygous",
	"is_concordant_het",
	"ConcordanceTally",
	"RegionTally",
	"compute_concordance",
	"run_concordance",
]
