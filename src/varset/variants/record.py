"""Variant records: one row of a VCF-like table placed on the genome."""

import logging
from dataclasses import dataclass, replace

from ..exceptions import MalformedLineError
from ..genome.info import GenomeInfo
from ..genome.locus import UNRESOLVED, Locus

logger = logging.getLogger(__name__)

__all__ = ["MISSING", "VariantRecord", "is_multi_base"]

MISSING = "."

# Accepted column counts: the fixed eight, or the fixed eight plus FORMAT and one sample.
SITE_COLUMNS = 8
SAMPLE_COLUMNS = 10


def is_multi_base(ref: str, alt: str) -> bool:
    """
    True when the reference or any comma-separated alternate allele is longer
    than one base. Such records are loosely called indels.
    """
    return any(len(allele) > 1 for allele in ref.split(",")) or any(
        len(allele) > 1 for allele in alt.split(",")
    )


@dataclass(slots=True)
class VariantRecord:
    """
    A variant at a 1-based genomic position with its VCF fields.

    Records are mutable, but chr_index and position must not change once a
    record sits in a sorted store; doing so silently breaks the ordering that
    searches rely on.
    """

    chr_index: int
    position: int
    ref: str
    alt: str
    id: str = MISSING
    quality: str = MISSING
    filter: str = MISSING
    info: str = MISSING
    format: str = ""
    genotype: str = ""
    # Name as written in the source; kept for chromosomes the genome does not know.
    chrom_name: str = ""

    @classmethod
    def from_line(cls, line: str, genome: GenomeInfo) -> "VariantRecord":
        """
        Parse one tab-separated row with 8 or 10 columns.

        Raises:
            MalformedLineError: On a wrong column count or a non-integer position.
        """
        line = line.rstrip("\r\n")
        fields = line.split("\t")
        if len(fields) not in (SITE_COLUMNS, SAMPLE_COLUMNS):
            raise MalformedLineError(
                f"expected {SITE_COLUMNS} or {SAMPLE_COLUMNS} columns, found {len(fields)}",
                line=line,
            )

        try:
            position = int(fields[1])
        except ValueError:
            raise MalformedLineError(f"invalid position '{fields[1]}'", line=line) from None

        if not fields[0]:
            raise MalformedLineError("empty chromosome name", line=line)

        record = cls(
            chr_index=genome.index_of(fields[0]),
            position=position,
            id=fields[2],
            ref=fields[3],
            alt=fields[4],
            quality=fields[5],
            filter=fields[6],
            info=fields[7],
            chrom_name=fields[0],
        )
        if len(fields) == SAMPLE_COLUMNS:
            record.format = fields[8]
            record.genotype = fields[9]
        return record

    @property
    def locus(self) -> Locus:
        return Locus(self.chr_index, self.position)

    @property
    def alt_alleles(self) -> list[str]:
        return self.alt.split(",")

    @property
    def is_multi_base(self) -> bool:
        return is_multi_base(self.ref, self.alt)

    def chrom(self, genome: GenomeInfo) -> str:
        """Chromosome name, resolved through the genome when possible."""
        if self.chr_index != UNRESOLVED:
            name = genome.name_at(self.chr_index)
            if name is not None:
                return name
        return self.chrom_name

    def add_filter(self, tag: str) -> None:
        """
        Append a tag to the FILTER column.

        An empty or missing ('.') filter is replaced; a tag already present is
        not added twice.
        """
        if self.filter in ("", MISSING):
            self.filter = tag
        elif tag not in self.filter.split(";"):
            self.filter = f"{self.filter};{tag}"

    def copy(self) -> "VariantRecord":
        return replace(self)

    def to_line(self, genome: GenomeInfo) -> str:
        """Render as a newline-terminated row of 8 or 10 columns."""
        fields = [
            self.chrom(genome),
            str(self.position),
            self.id,
            self.ref,
            self.alt,
            self.quality,
            self.filter,
            self.info,
        ]
        if self.format and self.genotype:
            fields.extend([self.format, self.genotype])
        return "\t".join(fields) + "\n"

    def __str__(self) -> str:
        name = self.chrom_name or f"[{self.chr_index}]"
        return f"{name}:{self.position} {self.ref}>{self.alt}"
