"""Command line interface for hetcor.

Calculates heterozygote concordance between two samples of a VCF/BCF,
optionally restricted to the intervals of a BED file.

Example:
	hetcor -r targets.bed NA12878 NA12878_rep input.vcf.gz

stdout receives exactly one result::

	total_variants	concordant_hets
	1234	567
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import RESULT_COLUMNS, RunConfig
from .exceptions import HetcorError, OutputWriteError
from .metrics import ConcordanceTally, run_concordance
from .utils import configure_logging, log_error, log_info


def _report_error(err: BaseException) -> None:
	log_error(f"Error while executing: {err}")
	cause = err.__cause__
	while cause is not None:
		log_error(f"because: {cause}")
		cause = cause.__cause__


def _write_outputs(tally: ConcordanceTally, config: RunConfig) -> None:
	if not (config.per_region_out or config.plot_out):
		return
	region_df = tally.to_frame()
	if config.per_region_out:
		out = Path(config.per_region_out)
		try:
			out.parent.mkdir(parents=True, exist_ok=True)
			region_df.to_csv(out, sep="\t", index=False)
		except OSError as err:
			raise OutputWriteError(str(out), err.strerror or str(err)) from err
		log_info(f"Per-region table written to {out}")
	if config.plot_out:
		from .plot import plot_concordance_per_region  # local import, pulls in matplotlib
		out = Path(config.plot_out)
		try:
			out.parent.mkdir(parents=True, exist_ok=True)
			plot_concordance_per_region(region_df, output_path=str(out))
		except OSError as err:
			raise OutputWriteError(str(out), err.strerror or str(err)) from err
		log_info(f"Per-region plot written to {out}")


def cmd_concordance(args: argparse.Namespace) -> int:
	config = RunConfig.from_args(args)
	configure_logging(quiet=config.quiet, verbose=config.verbose)
	tally = run_concordance(config)
	print("\t".join(RESULT_COLUMNS))
	print(f"{tally.total_variants}\t{tally.concordant_hets}")
	_write_outputs(tally, config)
	return 0


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="hetcor", description="Calculates heterozygote concordance between two samples")
	p.add_argument("first", help="first sample in sample pair")
	p.add_argument("second", help="second sample in sample pair")
	p.add_argument("vcf", help="vcf file to process (VCF, VCF.GZ or BCF; indexed when --regions is used)")
	p.add_argument("-r", "--regions", default=None, help="Specify the regions to process (.bed file)")
	p.add_argument("--per-region", default=None, dest="per_region", help="Write per-region (or per-contig) counts to this TSV")
	p.add_argument("--plot", default=None, help="Write a per-region concordance bar plot to this path (.png/.pdf)")
	p.add_argument("-q", "--quiet", action="store_true", help="Suppress progress messages on stderr")
	p.add_argument("-v", "--verbose", action="store_true", help="Log counts for every interval")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	p.set_defaults(func=cmd_concordance)
	return p


def main(argv=None):
	parser = build_parser()
	args = parser.parse_args(argv)
	try:
		return args.func(args)
	except HetcorError as err:
		_report_error(err)
		return 1


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
