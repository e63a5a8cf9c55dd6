"""
Variant records and the genome-ordered containers that search them.
"""

from .decompose import DecompositionResult, decompose, split_record
from .record import VariantRecord, is_multi_base
from .store import Found, NotFound, SearchResult, SortedVariantStore
from .tracker import LocalityAwareIndex

__all__ = [
    "DecompositionResult",
    "Found",
    "LocalityAwareIndex",
    "NotFound",
    "SearchResult",
    "SortedVariantStore",
    "VariantRecord",
    "decompose",
    "is_multi_base",
    "split_record",
]
