"""Genotype-level helpers: rendering and heterozygosity classification.

Genotypes are compared as rendered text, never as allele sets, so ``0/1``
and ``1/0`` are different calls even though both are heterozygous.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..config import HET_GENOTYPES, MISSING_ALLELE, PHASED_SEP, UNPHASED_SEP

__all__ = ["render_genotype", "is_heterozygous", "is_concordant_het"]


def render_genotype(alleles: Optional[Sequence[Optional[int]]], phased: bool = False) -> str:
    """Render decoded GT alleles as VCF text.

    Parameters
    ----------
    alleles : sequence of int | None, or None
        Allele indices as decoded by pysam, e.g. ``(0, 1)``; ``None`` marks a
        missing allele.
    phased : bool
        Joins alleles with ``|`` when True, ``/`` otherwise.

    Examples: ``(0, 1), False -> '0/1'``; ``(1, 0), True -> '1|0'``;
    ``(None, None) -> './.'``; ``None -> '.'``
    """
    if not alleles:
        return MISSING_ALLELE
    sep = PHASED_SEP if phased else UNPHASED_SEP
    return sep.join(MISSING_ALLELE if a is None else str(a) for a in alleles)


def is_heterozygous(genotype: Optional[str]) -> bool:
    """Return True only for the four biallelic het renderings.

    ``1/2`` and other multi-allelic heterozygous calls are never counted.
    """
    return genotype in HET_GENOTYPES


def is_concordant_het(first: Optional[str], second: Optional[str]) -> bool:
    return first == second and is_heterozygous(first)
