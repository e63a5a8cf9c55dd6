"""
Sorted Variant Store: an immutable, genome-ordered array of variant records.

A store is built once, either from records already in memory or from a
VCF-like text source, and is then only searched. The single exception is
decomposition of multi-base substitutions, which replaces the whole array,
re-sorts it and bumps the store's generation so that cached search state
held elsewhere (see LocalityAwareIndex) knows to reset.

Searches use binary search over precomputed genome-order keys:
- point lookups return a tagged Found / NotFound result;
- interval counts walk linearly for short intervals and bisect for long ones.
"""

import logging
from abc import ABC, abstractmethod
from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..exceptions import MalformedLineError
from ..genome.info import GenomeInfo
from ..genome.locus import HasLocus, Locus, genome_order_key
from ..io.input import read_lines
from ..io.output import VariantSetWriter
from ..models.core import LoadMode, LoadReport, SkippedLine
from ..utils.logging import timed
from .record import VariantRecord

if TYPE_CHECKING:
    from .decompose import DecompositionResult

logger = logging.getLogger(__name__)

__all__ = [
    "COLUMN_DEFINITION_PREFIX",
    "LINEAR_COUNT_WIDTH",
    "Found",
    "NotFound",
    "SearchResult",
    "SortedVariantStore",
]

HEADER_PREFIX = "#"
META_PREFIX = "##"
COLUMN_DEFINITION_PREFIX = "#CHROM"

# Intervals narrower than this are counted by walking forward from the lower bound.
LINEAR_COUNT_WIDTH = 256

# Malformed lines reported individually in lenient mode before summarizing.
MAX_SKIP_WARNINGS = 3


class SearchResult(ABC):
    """Outcome of a point search: either Found or NotFound."""

    __slots__ = ()

    @property
    @abstractmethod
    def found(self) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class Found(SearchResult):
    """The locus is stored at index."""

    index: int

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NotFound(SearchResult):
    """The locus is absent; inserting it at insertion_index keeps the order."""

    insertion_index: int

    @property
    def found(self) -> bool:
        return False


LocusQuery = HasLocus | str


class SortedVariantStore:
    """
    Variants sorted by genome order, with header text and search operations.

    The record array is fixed in length and order after construction. get()
    returns the stored object itself, so changing its chromosome or position
    will leave the store unsorted and break searches.
    """

    def __init__(
        self,
        genome: GenomeInfo,
        records: Iterable[VariantRecord] = (),
        header_lines: Iterable[str] = (),
        column_definitions: str = "",
        load_report: LoadReport | None = None,
    ):
        self.genome = genome
        self.column_definitions = column_definitions
        self.load_report = load_report
        self.generation = 0
        self._header: list[str] = []
        for line in header_lines:
            if line not in self._header:
                self._header.append(line)
        self._records: list[VariantRecord] = []
        self._keys: list[tuple[int, int]] = []
        self._install(records)

    # -- construction --

    @classmethod
    def from_records(
        cls,
        records: Iterable[VariantRecord],
        genome: GenomeInfo,
        keep_multi_base: bool = False,
    ) -> "SortedVariantStore":
        """
        Build a store from records in memory.

        Records are copied, so later changes to the inputs do not affect the
        store. Multi-base records are dropped unless keep_multi_base is set.
        """
        kept = [r.copy() for r in records if keep_multi_base or not r.is_multi_base]
        return cls(genome, kept)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        genome: GenomeInfo,
        keep_multi_base: bool = False,
        lenient: bool = False,
    ) -> "SortedVariantStore":
        """
        Build a store from the lines of a VCF-like table.

        Lines starting with '#' before the '#CHROM' line are kept as header
        text; the '#CHROM' line itself is kept as the column definitions. The
        first line that does not start with '#' also ends the header section.

        Args:
            lines: Text lines, with or without line terminators.
            genome: Genome used to resolve chromosome names.
            keep_multi_base: Keep records with multi-base alleles.
            lenient: Skip malformed lines (recorded in load_report) instead
                of failing.

        Raises:
            MalformedLineError: In strict mode, on the first malformed line.
        """
        report = LoadReport(mode=LoadMode.LENIENT if lenient else LoadMode.STRICT)
        header: list[str] = []
        seen_header: set[str] = set()
        column_definitions = ""
        records: list[VariantRecord] = []
        in_header = True

        for line_number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            report.lines_read += 1

            if not line.strip():
                continue

            if in_header:
                if line.startswith(COLUMN_DEFINITION_PREFIX):
                    column_definitions = line
                    in_header = False
                    continue
                if line.startswith(HEADER_PREFIX):
                    if line not in seen_header:
                        seen_header.add(line)
                        header.append(line)
                    continue
                in_header = False

            try:
                record = VariantRecord.from_line(line, genome)
            except MalformedLineError as e:
                e.line_number = line_number
                if not lenient:
                    logger.error("Malformed variant line: %s", e)
                    raise
                report.skipped.append(
                    SkippedLine(line_number=line_number, reason=e.reason, text=e.line)
                )
                if report.skipped_count <= MAX_SKIP_WARNINGS:
                    logger.warning("Skipping malformed variant line: %s", e)
                continue

            if record.is_multi_base and not keep_multi_base:
                report.multi_base_filtered += 1
                continue
            records.append(record)

        report.header_lines = len(header)
        report.records_loaded = len(records)
        if report.skipped_count > MAX_SKIP_WARNINGS:
            logger.warning(
                "... and %d more malformed lines skipped",
                report.skipped_count - MAX_SKIP_WARNINGS,
            )
        logger.info("Loaded %s", report.summary())

        return cls(genome, records, header, column_definitions, load_report=report)

    @classmethod
    def from_path(
        cls,
        path: Path | str | None,
        genome: GenomeInfo,
        keep_multi_base: bool = False,
        lenient: bool = False,
    ) -> "SortedVariantStore":
        """Build a store from a plain, gzip or bzip2 file, or stdin for '-'."""
        with timed(f"Loading variants from {path}", logger):
            return cls.from_lines(
                read_lines(path), genome, keep_multi_base=keep_multi_base, lenient=lenient
            )

    def _install(self, records: Iterable[VariantRecord]) -> None:
        self._records = sorted(records, key=genome_order_key)
        self._keys = [genome_order_key(r) for r in self._records]

    def replace_records(self, records: Iterable[VariantRecord]) -> None:
        """
        Swap in a new set of records, re-sort and advance the generation.

        Only the decomposition workflow should need this; any search state
        cached against the previous generation becomes stale.
        """
        self._install(records)
        self.generation += 1
        logger.debug("Store rebuilt: %d records, generation %d", len(self._records), self.generation)

    # -- basic access --

    def size(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, index: int) -> VariantRecord:
        """
        Record at index (the stored object, not a copy).

        Raises:
            IndexError: If index is outside 0..size()-1.
        """
        if not 0 <= index < len(self._records):
            raise IndexError(f"Variant index {index} out of range for store of size {len(self)}")
        return self._records[index]

    def __getitem__(self, index: int) -> VariantRecord:
        return self.get(index)

    def __iter__(self) -> Iterator[VariantRecord]:
        return iter(self._records)

    # -- header --

    @property
    def header_lines(self) -> list[str]:
        return list(self._header)

    @property
    def header(self) -> str:
        return "".join(f"{line}\n" for line in self._header)

    def add_header_line(self, line: str) -> bool:
        """
        Add a line to the header unless an identical line is already there.

        The line is given a '##' prefix if it lacks one and trailing line
        terminators are removed before comparing.

        Returns:
            True if the line was added.
        """
        if not line.startswith(META_PREFIX):
            line = ("#" if line.startswith(HEADER_PREFIX) else META_PREFIX) + line
        line = line.rstrip("\r\n")
        if line in self._header:
            return False
        self._header.append(line)
        return True

    # -- search --

    def _as_locus(self, query: LocusQuery) -> HasLocus:
        if isinstance(query, str):
            return Locus.parse(query, self.genome)
        return query

    def index_of(self, query: LocusQuery) -> SearchResult:
        """
        Binary search for a locus.

        Accepts any object with chr_index/position, or a 'chromosome:position'
        string. With duplicate loci the leftmost match is reported.
        """
        target = genome_order_key(self._as_locus(query))
        index = bisect_left(self._keys, target)
        if index < len(self._keys) and self._keys[index] == target:
            return Found(index)
        return NotFound(index)

    def contains_locus(self, query: LocusQuery) -> bool:
        return self.index_of(query).found

    def get_at_locus(self, query: LocusQuery) -> VariantRecord | None:
        """Copy of the record at the locus, or None when there is none."""
        result = self.index_of(query)
        if isinstance(result, Found):
            return self._records[result.index].copy()
        return None

    def count_in_interval(self, chrom: int | str, start: int, end: int) -> int:
        """
        Number of records on a chromosome with start <= position <= end.

        Args:
            chrom: Chromosome index or name.
            start: First position included.
            end: Last position included. If end < start the count is 0.
        """
        if end < start:
            return 0
        chr_index = self.genome.index_of(chrom) if isinstance(chrom, str) else chrom
        if chr_index < 0:
            return 0

        lower = bisect_left(self._keys, (chr_index, start))
        if end - start < LINEAR_COUNT_WIDTH:
            upper = lower
            limit = (chr_index, end)
            n = len(self._keys)
            while upper < n and self._keys[upper] <= limit:
                upper += 1
        else:
            upper = bisect_left(self._keys, (chr_index, end + 1))
        return upper - lower

    # -- decomposition and output --

    def separate_multi_snvs(self) -> "DecompositionResult":
        """Split adjacent-substitution records into single-base records."""
        from .decompose import decompose

        return decompose(self)

    def iter_lines(self) -> Iterator[str]:
        """Header, column definitions and records as newline-terminated text."""
        for line in self._header:
            yield f"{line}\n"
        if self.column_definitions:
            yield f"{self.column_definitions}\n"
        for record in self._records:
            yield record.to_line(self.genome)

    def write(self, path: Path | str) -> int:
        """Write header, column definitions and records; returns the record count."""
        with VariantSetWriter(path) as writer:
            return writer.write_store(self)

    def __repr__(self) -> str:
        return f"SortedVariantStore({len(self)} records, generation {self.generation})"
