"""Genome region masks."""

from .bitset import GenomeBitSet

__all__ = ["GenomeBitSet"]
