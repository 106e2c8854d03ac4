"""Configuration constants and run settings."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, FrozenSet, Tuple

# Closed set of heterozygous renderings. Multi-allelic calls such as 1/2
# are deliberately absent.
HET_GENOTYPES: FrozenSet[str] = frozenset({"1|0", "0|1", "1/0", "0/1"})

MISSING_ALLELE = "."
PHASED_SEP = "|"
UNPHASED_SEP = "/"

# Result columns printed on stdout
RESULT_COLUMNS: Tuple[str, str] = ("total_variants", "concordant_hets")

# Per-region table columns
REGION_TABLE_COLUMNS = ["Region", "TotalVariants", "ConcordantHets", "ConcordanceRate"]

INDEX_SUFFIXES: Tuple[str, ...] = (".tbi", ".csi")

# Interval bounds are unsigned 64-bit offsets
MAX_OFFSET = 2**64 - 1

# BED lines starting with any of these carry no interval
BED_HEADER_PREFIXES: Tuple[str, ...] = ("#", "track", "browser")

# (upper bound on records processed, logging interval)
PROGRESS_SCHEDULE: Tuple[Tuple[int, int], ...] = (
	(10_000, 1_000),
	(100_000, 10_000),
)
PROGRESS_INTERVAL_MAX = 50_000


@dataclass
class RunConfig:
	"""Settings for a single concordance run.

	Attributes
	----------
	vcf : str
		Indexed VCF / BCF path.
	first, second : str
		Sample names forming the pair.
	regions : str | None
		Optional BED file restricting the run to its intervals.
	per_region_out, plot_out : str | None
		Optional per-region TSV and bar plot outputs.
	quiet, verbose : bool
		Logging switches.
	"""

	vcf: str
	first: str
	second: str
	regions: Optional[str] = None
	per_region_out: Optional[str] = None
	plot_out: Optional[str] = None
	quiet: bool = False
	verbose: bool = False

	@property
	def require_index(self) -> bool:
		# Only random access needs the index; a full scan streams the file.
		return self.regions is not None

	@classmethod
	def from_args(cls, args: argparse.Namespace) -> "RunConfig":
		return cls(
			vcf=args.vcf,
			first=args.first,
			second=args.second,
			regions=args.regions or None,
			per_region_out=getattr(args, "per_region", None),
			plot_out=getattr(args, "plot", None),
			quiet=getattr(args, "quiet", False),
			verbose=getattr(args, "verbose", False),
		)
