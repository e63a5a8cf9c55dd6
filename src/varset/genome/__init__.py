"""
Genome coordinate model for varset.

Provides the chromosome registry and the locus ordering shared by every
variant container.
"""

from .info import GenomeInfo
from .locus import UNRESOLVED, HasLocus, Locus, compare_loci, genome_order_key, parse_interval

__all__ = [
    "UNRESOLVED",
    "GenomeInfo",
    "HasLocus",
    "Locus",
    "compare_loci",
    "genome_order_key",
    "parse_interval",
]
