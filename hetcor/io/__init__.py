"""I/O subpackage.

Exposes the pysam-backed indexed reader and the BED interval parser.
"""

from .regions import Region, parse_region, iter_regions  # noqa: F401
from .vcf_reader import IndexedVCFReader, resolve_samples, find_index  # noqa: F401

__all__ = ["Region", "parse_region", "iter_regions", "IndexedVCFReader", "resolve_samples", "find_index"]
