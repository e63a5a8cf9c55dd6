"""
Genome Info: chromosome names, lengths and their dense indexes.

The order in which chromosomes are supplied (explicitly, or by order of
appearance in a .fai index or FASTA file) defines the global sort order
used for all loci downstream. A GenomeInfo is read-only after construction.
"""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

import pysam

from ..exceptions import GenomeDefinitionError
from ..io.input import open_text

logger = logging.getLogger(__name__)

__all__ = ["GenomeInfo"]


class GenomeInfo:
    """
    Registry mapping chromosome names to dense indexes 0..N-1 and lengths.
    """

    def __init__(self, names: Sequence[str], lengths: Sequence[int]):
        """
        Define a genome from chromosome names and matching lengths.

        Args:
            names: Chromosome names, in the order that defines sorting.
            lengths: Chromosome lengths, matching the order of names.

        Raises:
            GenomeDefinitionError: If the sequences differ in length or a
                name appears twice.
        """
        if len(names) != len(lengths):
            raise GenomeDefinitionError(
                f"Got {len(names)} chromosome names but {len(lengths)} lengths"
            )

        self._names: tuple[str, ...] = tuple(names)
        self._lengths: tuple[int, ...] = tuple(int(x) for x in lengths)
        self._indexes: dict[str, int] = {}
        for index, name in enumerate(self._names):
            if name in self._indexes:
                raise GenomeDefinitionError(f"Duplicate chromosome name: {name}")
            self._indexes[name] = index

    @classmethod
    def from_fai(cls, fai_path: Path | str) -> "GenomeInfo":
        """Build from a samtools faidx index (name and length in columns 1-2)."""
        names: list[str] = []
        lengths: list[int] = []
        with open_text(fai_path) as f:
            for line_number, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if not line:
                    continue
                fields = line.split("\t")
                try:
                    names.append(fields[0])
                    lengths.append(int(fields[1]))
                except (IndexError, ValueError) as e:
                    raise GenomeDefinitionError(
                        f"Invalid fai entry at {fai_path}:{line_number}: {line}"
                    ) from e

        logger.debug("Read %d chromosomes from index %s", len(names), fai_path)
        return cls(names, lengths)

    @classmethod
    def from_fasta(cls, fasta_path: Path | str) -> "GenomeInfo":
        """
        Build from a FASTA file.

        If an index file with extension .fai exists next to the FASTA, all
        information is read from it. Otherwise the whole sequence file is
        scanned to measure each chromosome.
        """
        fasta_path = Path(fasta_path)
        fai_path = Path(f"{fasta_path}.fai")
        if fai_path.is_file():
            return cls.from_fai(fai_path)

        logger.info("No index found for %s, scanning sequences", fasta_path)
        names: list[str] = []
        lengths: list[int] = []
        with pysam.FastxFile(str(fasta_path)) as fasta:
            for entry in fasta:
                names.append(entry.name)
                lengths.append(len(entry.sequence or ""))

        return cls(names, lengths)

    def index_of(self, name: str) -> int:
        """Index associated with a chromosome, or -1 if the name is not defined."""
        return self._indexes.get(name, -1)

    def name_at(self, index: int) -> str | None:
        """Name of the chromosome at index, or None if out of range."""
        if 0 <= index < len(self._names):
            return self._names[index]
        return None

    def length_at(self, index: int) -> int:
        """Length of the chromosome at index, or -1 if out of range."""
        if 0 <= index < len(self._lengths):
            return self._lengths[index]
        return -1

    def length_of(self, name: str) -> int:
        return self.length_at(self.index_of(name))

    def contains(self, name: str) -> bool:
        return name in self._indexes

    def count(self) -> int:
        return len(self._names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._indexes

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(zip(self._names, self._lengths))

    def __repr__(self) -> str:
        return f"GenomeInfo({len(self._names)} chromosomes)"
