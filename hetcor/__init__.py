"""hetcor – heterozygote concordance between two samples of a VCF.

Subpackages:
	io        – pysam-backed indexed reader and BED interval parsing
	metrics   – genotype classification and the concordance aggregator
	plot      – per-region concordance figures

Typical use::

	from hetcor.metrics import run_concordance
	from hetcor.config import RunConfig

	tally = run_concordance(RunConfig(vcf="calls.vcf.gz", first="A", second="B"))
	print(tally.as_pair())

``plot`` is not imported here so the counting path never loads matplotlib.
"""

from importlib import import_module as _imp

__version__ = "0.1.0"

# Re-export selected namespaces for convenience.
io = _imp("hetcor.io")  # noqa: E305
metrics = _imp("hetcor.metrics")

__all__ = ["io", "metrics", "__version__"]
