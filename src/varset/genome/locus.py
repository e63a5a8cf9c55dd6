"""
Loci and the genome-order comparator.

Every record type exposes a resolved chromosome index and a position, so a
single comparator and a single search algorithm serve all of them.

Ordering rules:
- chromosome index ascending, then position ascending;
- the UNRESOLVED index (-1) sorts before every known chromosome;
- two unresolved loci compare equal whatever their positions.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..exceptions import LocusFormatError
from .info import GenomeInfo

__all__ = [
    "UNRESOLVED",
    "HasLocus",
    "Locus",
    "compare_loci",
    "genome_order_key",
    "parse_interval",
]

UNRESOLVED = -1


@runtime_checkable
class HasLocus(Protocol):
    """Anything placed on the genome by (chromosome index, position)."""

    @property
    def chr_index(self) -> int: ...

    @property
    def position(self) -> int: ...


@dataclass(frozen=True, slots=True)
class Locus:
    """
    A (chromosome index, position) pair.

    Positions of variant records are 1-based. chr_index is UNRESOLVED when
    the chromosome name was not found in the genome.
    """

    chr_index: int
    position: int

    @classmethod
    def from_name(cls, chrom: str, position: int, genome: GenomeInfo) -> "Locus":
        return cls(genome.index_of(chrom), position)

    @classmethod
    def parse(cls, text: str, genome: GenomeInfo) -> "Locus":
        """
        Parse a locus written as 'chromosome:position', e.g. 'chr5:2039'.

        Raises:
            LocusFormatError: If the text does not have exactly one colon or
                the position is not an integer.
        """
        tokens = text.strip().split(":")
        if len(tokens) != 2 or not tokens[0]:
            raise LocusFormatError(f"Expected 'chromosome:position', got '{text}'")
        try:
            position = int(tokens[1])
        except ValueError as e:
            raise LocusFormatError(f"Invalid position in locus '{text}'") from e
        return cls.from_name(tokens[0], position, genome)

    @property
    def resolved(self) -> bool:
        return self.chr_index != UNRESOLVED

    def to_string(self, genome: GenomeInfo) -> str:
        return f"{genome.name_at(self.chr_index)}:{self.position}"

    def __str__(self) -> str:
        return f"[{self.chr_index}]:{self.position}"


def genome_order_key(item: HasLocus) -> tuple[int, int]:
    """
    Sort key equivalent to compare_loci.

    Unresolved loci all collapse onto one key below every real chromosome,
    so they tie with each other and precede everything else.
    """
    if item.chr_index == UNRESOLVED:
        return (UNRESOLVED, 0)
    return (item.chr_index, item.position)


def compare_loci(a: HasLocus, b: HasLocus) -> int:
    """
    Compare two loci in genome order.

    Returns:
        -1 if a is before b, 0 if they are equal, 1 if a is after b.
    """
    ka = genome_order_key(a)
    kb = genome_order_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def parse_interval(text: str) -> tuple[str, int, int]:
    """
    Parse a closed interval written as 'chromosome:start-end', or a single
    position 'chromosome:position' (start == end).

    Raises:
        LocusFormatError: If the text cannot be read as an interval.
    """
    chrom, sep, span = text.strip().rpartition(":")
    if not sep or not chrom or not span:
        raise LocusFormatError(f"Expected 'chromosome:start-end', got '{text}'")
    first, dash, last = span.partition("-")
    try:
        start = int(first.replace(",", ""))
        end = int(last.replace(",", "")) if dash else start
    except ValueError as e:
        raise LocusFormatError(f"Invalid coordinates in interval '{text}'") from e
    return chrom, start, end
