"""Error types raised by hetcor.

Every failure is fatal for a run. Nothing below is recovered inside the
package; the CLI reports the message and its cause chain and exits.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
	"HetcorError",
	"DatasetOpenError",
	"UnknownSample",
	"MalformedInterval",
	"RegionFileError",
	"UnknownContig",
	"FetchError",
	"RecordDecodeError",
	"OutputWriteError",
]


class HetcorError(Exception):
	"""Base class for all hetcor failures."""


class DatasetOpenError(HetcorError):
	"""The variant file (or its index) is missing or unreadable."""

	def __init__(self, path: str, reason: str):
		self.path = path
		super().__init__(f"Unable to open vcf file {path}: {reason}")


class UnknownSample(HetcorError):
	def __init__(self, sample: str):
		self.sample = sample
		super().__init__(f"Sample {sample} not present in the vcf file header")


class MalformedInterval(HetcorError):
	"""A BED line could not be turned into a region."""

	def __init__(self, line: str, reason: str, line_no: Optional[int] = None):
		self.line = line
		self.line_no = line_no
		where = f" (line {line_no})" if line_no is not None else ""
		super().__init__(f"Malformed interval{where} {line!r}: {reason}")


class RegionFileError(HetcorError):
	def __init__(self, path: str, reason: str):
		self.path = path
		super().__init__(f"Unable to read regions file {path}: {reason}")


class UnknownContig(HetcorError):
	def __init__(self, contig: str):
		self.contig = contig
		super().__init__(f"Contig {contig} not present in the vcf file header")


class FetchError(HetcorError):
	"""Repositioning the indexed reader on a region failed."""

	def __init__(self, region: object, reason: str):
		self.region = region
		super().__init__(f"Unable to fetch region {region}: {reason}")


class RecordDecodeError(HetcorError):
	"""A record or its genotype block could not be decoded.

	With ``after=True`` the contig and position name the last record read
	successfully, the failing one being the next in the stream.
	"""

	def __init__(self, reason: str, contig: Optional[str] = None, position: Optional[int] = None,
			after: bool = False):
		self.contig = contig
		self.position = position
		self.after = after
		where = ""
		if contig is not None:
			where = f" {'after' if after else 'at'} {contig}:{position}"
		super().__init__(f"Unable to decode record{where}: {reason}")


class OutputWriteError(HetcorError):
	"""A requested side output (table or plot) could not be written."""

	def __init__(self, path: str, reason: str):
		self.path = path
		super().__init__(f"Unable to write {path}: {reason}")
