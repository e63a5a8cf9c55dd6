"""Per-chromosome position masks, stored as packed bits."""

import logging

import numpy as np

from ..genome.info import GenomeInfo

logger = logging.getLogger(__name__)

__all__ = ["GenomeBitSet"]

# Bit i of a chromosome lives in byte i // 8 at bit i % 8 (little bit order).
BIT_ORDER = "little"

# Set-bit count of every byte value.
_POPCOUNT = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)


class GenomeBitSet:
    """
    One packed bit vector per chromosome, indexed by the genome's dense
    chromosome index. Slots are 0-based; ranges are half-open [start, end).

    Each chromosome of length n takes ceil(n / 8) bytes. Operations on
    chromosomes the genome does not know are ignored (setters) or report
    nothing (getters).
    """

    def __init__(self, genome: GenomeInfo):
        self.genome = genome
        self._lengths: list[int] = [max(length, 0) for _, length in genome]
        self._bits: list[np.ndarray] = [
            np.zeros((length + 7) // 8, dtype=np.uint8) for length in self._lengths
        ]

    @classmethod
    def from_store(cls, store) -> "GenomeBitSet":
        """Mark the 1-based position of every record in a variant store."""
        bitset = cls(store.genome)
        for record in store:
            bitset.set(record.chr_index, record.position - 1, record.position)
        return bitset

    def _resolve(self, chrom: int | str) -> int | None:
        index = self.genome.index_of(chrom) if isinstance(chrom, str) else chrom
        if 0 <= index < len(self._bits):
            return index
        return None

    def set(self, chrom: int | str, start: int, end: int, value: bool = True) -> None:
        """Set slots [start, end) on a chromosome; the range is clipped to its length."""
        index = self._resolve(chrom)
        if index is None:
            return
        start = max(start, 0)
        end = min(end, self._lengths[index])
        if start >= end:
            return

        bits = self._bits[index]
        first, last = start // 8, (end + 7) // 8
        chunk = np.unpackbits(bits[first:last], bitorder=BIT_ORDER)
        chunk[start - first * 8:end - first * 8] = 1 if value else 0
        bits[first:last] = np.packbits(chunk, bitorder=BIT_ORDER)

    def clear(self, chrom: int | str) -> None:
        index = self._resolve(chrom)
        if index is not None:
            self._bits[index][:] = 0

    def get(self, chrom: int | str, position: int) -> bool:
        index = self._resolve(chrom)
        if index is None or not 0 <= position < self._lengths[index]:
            return False
        return bool((self._bits[index][position >> 3] >> (position & 7)) & 1)

    def get_range(self, chrom: int | str, start: int, end: int) -> np.ndarray | None:
        """Slots [start, end) unpacked to a new bool array, or None for an unknown chromosome."""
        index = self._resolve(chrom)
        if index is None:
            return None
        start = max(start, 0)
        end = min(max(end, 0), self._lengths[index])
        if start >= end:
            return np.zeros(0, dtype=bool)
        first, last = start // 8, (end + 7) // 8
        chunk = np.unpackbits(self._bits[index][first:last], bitorder=BIT_ORDER)
        return chunk[start - first * 8:end - first * 8].astype(bool)

    def count(self, chrom: int | str) -> int:
        index = self._resolve(chrom)
        if index is None:
            return 0
        return int(_POPCOUNT[self._bits[index]].sum(dtype=np.int64))

    def nbytes(self) -> int:
        """Memory held by the bit vectors."""
        return sum(bits.nbytes for bits in self._bits)
