"""BED interval parsing.

Only the first three tab-separated columns (contig, start, end) are read;
anything after them is ignored. Coordinates are kept exactly as written,
0-based half-open as in BED, which is also what ``pysam`` expects for
``VariantFile.fetch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from ..config import BED_HEADER_PREFIXES, MAX_OFFSET
from ..exceptions import MalformedInterval, RegionFileError

__all__ = ["Region", "parse_region", "iter_regions"]


@dataclass(frozen=True)
class Region:
	"""A genomic interval ``[start, end)`` on ``contig``.

	``start <= end`` is not checked here; reversed bounds are handed to the
	fetch call as is.
	"""

	contig: str
	start: int
	end: int
	line_no: Optional[int] = None

	@property
	def label(self) -> str:
		return f"{self.contig}:{self.start}-{self.end}"

	def __str__(self) -> str:
		return self.label


def _parse_offset(value: str, name: str, line: str, line_no: Optional[int]) -> int:
	# int() would also take "+5", " 5" or "1_000"
	if not value.isascii() or not value.isdigit():
		raise MalformedInterval(line, f"{name} {value!r} is not a non-negative integer", line_no)
	offset = int(value)
	if offset > MAX_OFFSET:
		raise MalformedInterval(line, f"{name} {value} exceeds the 64-bit offset range", line_no)
	return offset


def parse_region(line: str, line_no: Optional[int] = None) -> Region:
	"""Parse one tab-separated BED line into a :class:`Region`.

	Parameters
	----------
	line : str
		Raw line; a trailing newline is tolerated.
	line_no : int | None
		1-based line number, used only in error messages.

	Raises
	------
	MalformedInterval
		Fewer than three fields, an empty contig, or bounds that are not
		unsigned 64-bit integers.
	"""
	stripped = line.rstrip("\r\n")
	parts = stripped.split("\t")
	if len(parts) < 3:
		raise MalformedInterval(stripped, f"expected 3 tab-separated fields, found {len(parts)}", line_no)
	contig, start, end = parts[:3]
	if not contig:
		raise MalformedInterval(stripped, "empty contig name", line_no)
	return Region(
		contig=contig,
		start=_parse_offset(start, "start", stripped, line_no),
		end=_parse_offset(end, "end", stripped, line_no),
		line_no=line_no,
	)


def _is_skippable(line: str) -> bool:
	if not line.strip():
		return True
	return line.startswith(BED_HEADER_PREFIXES)


def iter_regions(path: str) -> Iterator[Region]:
	"""Yield regions from a BED file in file order.

	Lines are parsed lazily, one at a time, so a malformed line stops the
	run right where it is met. Blank, ``#``, ``track`` and ``browser`` lines
	are skipped. A file that is not valid UTF-8 text raises
	:class:`RegionFileError`.
	"""
	try:
		fh = open(path, "rt", encoding="utf-8")
	except OSError as err:
		raise RegionFileError(path, err.strerror or str(err)) from err
	line_no = 0
	with fh:
		try:
			for line_no, line in enumerate(fh, start=1):
				if _is_skippable(line):
					continue
				yield parse_region(line, line_no)
		except UnicodeDecodeError as err:
			raise RegionFileError(path, f"not valid UTF-8 text ({line_no} lines read)") from err
