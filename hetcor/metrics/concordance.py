"""Heterozygote concordance between two samples.

Streams records either from the whole file or from a sequence of regions,
compares the rendered genotypes of the two samples per record and keeps a
running :class:`ConcordanceTally`. Any error aborts the run; a partially
filled tally is never returned.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from ..config import REGION_TABLE_COLUMNS, RunConfig
from ..utils import log_debug, log_info, should_report
from .genotype_metrics import is_concordant_het

if TYPE_CHECKING:  # pragma: no cover
    from ..io.regions import Region
    from ..io.vcf_reader import IndexedVCFReader

__all__ = ["RegionTally", "ConcordanceTally", "compute_concordance", "run_concordance"]


@dataclass
class RegionTally:
    """Counts for one region (interval mode) or one contig (whole-file mode)."""

    label: str
    total_variants: int = 0
    concordant_hets: int = 0


@dataclass
class ConcordanceTally:
    """Run totals plus an ordered per-region breakdown.

    Counters only ever go up and ``concordant_hets <= total_variants`` holds
    after every update. Once :meth:`finalize` is called the tally is read-only.
    """

    total_variants: int = 0
    concordant_hets: int = 0
    regions: List[RegionTally] = field(default_factory=list)
    finalized: bool = False

    def open_region(self, label: str) -> RegionTally:
        bucket = RegionTally(label)
        self.regions.append(bucket)
        return bucket

    def record(self, bucket: RegionTally, concordant: bool) -> None:
        if self.finalized:
            raise RuntimeError("tally is finalized")
        self.total_variants += 1
        bucket.total_variants += 1
        if concordant:
            self.concordant_hets += 1
            bucket.concordant_hets += 1

    def finalize(self) -> "ConcordanceTally":
        self.finalized = True
        return self

    def as_pair(self) -> Tuple[int, int]:
        return self.total_variants, self.concordant_hets

    @property
    def concordance_rate(self) -> float:
        return self.concordant_hets / self.total_variants if self.total_variants else 0.0

    def to_frame(self) -> pd.DataFrame:
        """Per-region table: Region, TotalVariants, ConcordantHets, ConcordanceRate."""
        rows = [
            {
                "Region": r.label,
                "TotalVariants": r.total_variants,
                "ConcordantHets": r.concordant_hets,
                "ConcordanceRate": r.concordant_hets / r.total_variants if r.total_variants else 0.0,
            }
            for r in self.regions
        ]
        return pd.DataFrame(rows, columns=REGION_TABLE_COLUMNS)


def _visit(reader: "IndexedVCFReader", records, fidx: int, sidx: int,
           tally: ConcordanceTally, bucket_for) -> None:
    for rec in records:
        fgt = reader.genotype(rec, fidx)
        sgt = reader.genotype(rec, sidx)
        tally.record(bucket_for(rec), is_concordant_het(fgt, sgt))
        if should_report(tally.total_variants):
            log_info(f"Processed {tally.total_variants:,} variants, {tally.concordant_hets:,} concordant hets so far...")


def compute_concordance(
    reader: "IndexedVCFReader",
    fidx: int,
    sidx: int,
    regions: Optional[Iterable["Region"]] = None,
) -> ConcordanceTally:
    """Count visited records and concordant heterozygous calls.

    Parameters
    ----------
    reader : IndexedVCFReader
        Anything offering ``records()``, ``fetch(region)`` and
        ``genotype(record, index)``. The aggregator owns its cursor for the
        whole call.
    fidx, sidx : int
        Sample indices already resolved against the header.
    regions : iterable of Region | None
        ``None`` scans the whole file in storage order. Otherwise each region
        is fetched and streamed in turn; a record covered by several regions
        is counted once per region.

    Returns
    -------
    ConcordanceTally
        Finalized tally. In whole-file mode the breakdown is per contig.
    """
    tally = ConcordanceTally()
    if regions is None:
        by_contig: Dict[str, RegionTally] = {}

        def contig_bucket(rec) -> RegionTally:
            bucket = by_contig.get(rec.chrom)
            if bucket is None:
                bucket = by_contig[rec.chrom] = tally.open_region(rec.chrom)
            return bucket

        _visit(reader, reader.records(), fidx, sidx, tally, contig_bucket)
    else:
        for region in regions:
            bucket = tally.open_region(region.label)
            _visit(reader, reader.fetch(region), fidx, sidx, tally, lambda _rec: bucket)
            log_debug(f"{region.label}: {bucket.total_variants:,} variants, {bucket.concordant_hets:,} concordant hets")
    return tally.finalize()


def run_concordance(config: RunConfig) -> ConcordanceTally:
    """Open the dataset, resolve both samples, then run the aggregator."""
    from ..io import IndexedVCFReader, iter_regions, resolve_samples  # local import

    with IndexedVCFReader(config.vcf, require_index=config.require_index) as reader:
        log_info(f"Opened {config.vcf} ({len(reader.samples):,} samples)")
        fidx, sidx = resolve_samples(reader, config.first, config.second)
        log_info(f"Sample pair: {config.first} (#{fidx}) vs {config.second} (#{sidx})")
        regions = None
        if config.regions is not None:
            log_info(f"Restricting to intervals in {config.regions}")
            regions = iter_regions(config.regions)
        tally = compute_concordance(reader, fidx, sidx, regions)
    log_info(
        f"Done: {tally.total_variants:,} variants, {tally.concordant_hets:,} concordant hets "
        f"({tally.concordance_rate:.2%})"
    )
    return tally
