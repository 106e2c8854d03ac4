"""Shared fixtures: an in-memory reader double and small indexed VCFs."""

from dataclasses import dataclass
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")

import pysam
import pytest

from hetcor.exceptions import RecordDecodeError, UnknownContig, UnknownSample


@dataclass
class FakeRecord:
    chrom: str
    pos: int  # 1-based, like pysam
    gts: List[Optional[str]]
    broken: bool = False


class FakeReader:
    """Reader double that counts how many records were pulled."""

    def __init__(self, samples, records, contigs=None):
        self.samples = list(samples)
        self._records = list(records)
        self.contigs = contigs or sorted({r.chrom for r in self._records})
        self.pulled = 0
        self.fetched = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True

    def sample_index(self, name):
        if name not in self.samples:
            raise UnknownSample(name)
        return self.samples.index(name)

    def _stream(self, records):
        for rec in records:
            self.pulled += 1
            yield rec

    def records(self):
        return self._stream(self._records)

    def fetch(self, region):
        if region.contig not in self.contigs:
            raise UnknownContig(region.contig)
        self.fetched.append(region)
        return self._stream(
            r for r in self._records
            if r.chrom == region.contig and region.start <= r.pos - 1 < region.end
        )

    def genotype(self, record, sample_index):
        if record.broken:
            raise RecordDecodeError("genotype block unreadable", record.chrom, record.pos)
        return record.gts[sample_index]


@pytest.fixture
def scenario_records():
    # A: 0/1 1/1 0/1, B: 0/1 0/0 1/0 -> 3 variants, 1 concordant het
    return [
        FakeRecord("chr1", 10, ["0/1", "0/1"]),
        FakeRecord("chr1", 20, ["1/1", "0/0"]),
        FakeRecord("chr1", 30, ["0/1", "1/0"]),
    ]


@pytest.fixture
def fake_reader(scenario_records):
    return FakeReader(["A", "B"], scenario_records)


VCF_HEADER = """##fileformat=VCFv4.2
##contig=<ID=chr1,length=50>
##contig=<ID=chr2,length=1000>
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\t{samples}
"""

# chrom, pos, ref, alt, GT per sample
DEFAULT_ROWS = [
    ("chr1", 10, "A", "G", ["0/1", "0/1", "0/0"]),
    ("chr1", 20, "C", "T", ["1/1", "0/0", "0/1"]),
    ("chr1", 30, "G", "A", ["0/1", "1/0", "0/1"]),
    ("chr2", 100, "T", "C", ["1|0", "1|0", "./."]),
    ("chr2", 200, "A", "T,C", ["1/2", "1/2", "0/1"]),
    ("chr2", 300, "G", "C", ["0|1", "0/1", "1/1"]),
]


def write_vcf(directory, rows=DEFAULT_ROWS, samples=("A", "B", "C"), index=True, name="calls.vcf"):
    """Write a plain VCF and, by default, bgzip + tabix it with pysam."""
    path = directory / name
    lines = [VCF_HEADER.format(samples="\t".join(samples))]
    for chrom, pos, ref, alt, gts in rows:
        lines.append("\t".join([chrom, str(pos), ".", ref, alt, ".", "PASS", ".", "GT"] + list(gts)) + "\n")
    path.write_text("".join(lines))
    if not index:
        return str(path)
    return pysam.tabix_index(str(path), preset="vcf", force=True)


@pytest.fixture
def indexed_vcf(tmp_path):
    return write_vcf(tmp_path)


@pytest.fixture
def write_bed(tmp_path):
    def _write(lines, name="regions.bed"):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines))
        return str(path)
    return _write
