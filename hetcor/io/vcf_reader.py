"""Indexed VCF/BCF access for concordance runs.

Thin wrapper over ``pysam.VariantFile`` exposing exactly what the
aggregator needs: sample and contig lookups on the header, a full scan,
region fetches and per-sample genotype rendering. All pysam failures are
translated into :mod:`hetcor.exceptions` types with the pysam error kept
as ``__cause__``.

The wrapped handle is a single cursor. A fetch repositions it, so record
iterators must be consumed one at a time and never interleaved.
"""

from __future__ import annotations

import os
from typing import Iterator, List, Optional, Tuple

import pysam

from ..config import INDEX_SUFFIXES
from ..exceptions import (
	DatasetOpenError,
	FetchError,
	RecordDecodeError,
	UnknownContig,
	UnknownSample,
)
from ..metrics.genotype_metrics import render_genotype
from .regions import Region

__all__ = ["IndexedVCFReader", "resolve_samples", "find_index"]


def find_index(path: str) -> Optional[str]:
	"""Return the path of a ``.tbi`` / ``.csi`` index next to ``path``, if any."""
	for suffix in INDEX_SUFFIXES:
		candidate = path + suffix
		if os.path.exists(candidate):
			return candidate
	return None


class IndexedVCFReader:
	"""Owned, single-cursor handle on a variant file.

	Parameters
	----------
	path : str
		VCF, bgzipped VCF or BCF path.
	require_index : bool
		When True, opening fails unless a ``.tbi`` or ``.csi`` index sits
		next to the file. Region fetches need it; a full scan does not.
	"""

	def __init__(self, path: str, require_index: bool = True):
		self.path = path
		if not os.path.exists(path):
			raise DatasetOpenError(path, "file does not exist")
		if require_index and find_index(path) is None:
			raise DatasetOpenError(path, f"index not found. Run: tabix -p vcf {path}")
		try:
			self._vf = pysam.VariantFile(path)
		except (OSError, ValueError) as err:
			raise DatasetOpenError(path, str(err)) from err
		self.samples: List[str] = list(self._vf.header.samples)

	# -- lifecycle --------------------------------------------------------
	def close(self) -> None:
		self._vf.close()

	def __enter__(self) -> "IndexedVCFReader":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	# -- header lookups ---------------------------------------------------
	def sample_index(self, name: str) -> int:
		"""Column index of ``name`` in the per-record genotype arrays."""
		try:
			return self.samples.index(name)
		except ValueError:
			raise UnknownSample(name) from None

	def contig_id(self, name: str) -> int:
		contigs = self._vf.header.contigs
		if name not in contigs:
			raise UnknownContig(name)
		return contigs[name].id

	def contig_length(self, name: str) -> Optional[int]:
		contigs = self._vf.header.contigs
		if name not in contigs:
			raise UnknownContig(name)
		return contigs[name].length

	# -- iteration --------------------------------------------------------
	def _guarded(self, it: Iterator[pysam.VariantRecord]) -> Iterator[pysam.VariantRecord]:
		last: Optional[Tuple[str, int]] = None
		while True:
			try:
				rec = next(it)
			except StopIteration:
				return
			except (OSError, ValueError) as err:
				if last is None:
					raise RecordDecodeError(str(err)) from err
				raise RecordDecodeError(str(err), last[0], last[1], after=True) from err
			last = (rec.chrom, rec.pos)
			yield rec

	def records(self) -> Iterator[pysam.VariantRecord]:
		"""Stream every record once in storage order."""
		return self._guarded(iter(self._vf))

	def fetch(self, region: Region) -> Iterator[pysam.VariantRecord]:
		"""Reposition the cursor on ``region`` and stream overlapping records.

		Raises
		------
		UnknownContig
			``region.contig`` is not declared in the header.
		FetchError
			The interval starts past the declared contig length, there is no
			usable index, or pysam rejects the bounds.
		"""
		self.contig_id(region.contig)
		length = self.contig_length(region.contig)
		if length is not None and region.start >= length:
			raise FetchError(region, f"interval starts beyond the end of {region.contig} (length {length})")
		try:
			it = self._vf.fetch(region.contig, region.start, region.end)
		except (OSError, ValueError) as err:
			raise FetchError(region, str(err)) from err
		return self._guarded(it)

	# -- genotypes --------------------------------------------------------
	def genotype(self, record: pysam.VariantRecord, sample_index: int) -> str:
		"""Rendered GT of one sample, e.g. ``'0/1'`` or ``'1|0'``."""
		try:
			sample = record.samples[sample_index]
			alleles = sample.get("GT")
			phased = sample.phased
		except (KeyError, IndexError, ValueError, OSError) as err:
			raise RecordDecodeError(f"genotype block unreadable ({err})", record.chrom, record.pos) from err
		return render_genotype(alleles, phased)


def resolve_samples(reader: IndexedVCFReader, first: str, second: str) -> Tuple[int, int]:
	"""Resolve both sample names up front; fails before any record is read."""
	return reader.sample_index(first), reader.sample_index(second)
