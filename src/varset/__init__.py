"""
varset - genome-ordered variant sets with fast locus search.

This package stores VCF-like variant records sorted in a caller-defined
chromosome order and answers point and interval queries on them, with a
locality-aware search for scans and a pass that splits adjacent multi-base
substitutions into single-base variants.

Example usage:
    $ varset query -v variants.vcf.gz -g genome.fa.fai chr1:10177
"""

__version__ = "1.0.0"

from .genome import GenomeInfo, Locus, compare_loci
from .models.core import LoadMode, LoadReport, VarsetConfig
from .pipeline import Pipeline
from .variants import (
    Found,
    LocalityAwareIndex,
    NotFound,
    SortedVariantStore,
    VariantRecord,
)

__all__ = [
    "__version__",
    "Found",
    "GenomeInfo",
    "LoadMode",
    "LoadReport",
    "LocalityAwareIndex",
    "Locus",
    "NotFound",
    "Pipeline",
    "SortedVariantStore",
    "VariantRecord",
    "VarsetConfig",
    "compare_loci",
]
