"""
Pipeline Orchestrator: Manages the execution flow of varset.

This module handles:
1. Loading the genome (FASTA or .fai index) that defines chromosome order.
2. Reading variants into a sorted store (strict or lenient).
3. Optionally separating multi-base substitutions into single bases.
4. Writing the resulting table.

Locus lookups and interval counts run against the loaded store with the
step budget and thread count taken from the same configuration.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .genome.info import GenomeInfo
from .models.core import LoadReport, VarsetConfig
from .parallel import Interval, count_intervals
from .utils.logging import console
from .variants.decompose import DecompositionResult
from .variants.record import VariantRecord
from .variants.store import LocusQuery, SortedVariantStore
from .variants.tracker import LocalityAwareIndex

logger = logging.getLogger(__name__)

__all__ = ["Pipeline", "PipelineResult", "load_genome"]


def load_genome(path: Path) -> GenomeInfo:
    """Load chromosome names and lengths from a .fai index or a FASTA file."""
    if path.suffix.lower() == ".fai":
        return GenomeInfo.from_fai(path)
    return GenomeInfo.from_fasta(path)


@dataclass
class PipelineResult:
    store: SortedVariantStore
    load_report: LoadReport
    decomposition: DecompositionResult | None = None
    records_written: int = 0


class Pipeline:
    def __init__(self, config: VarsetConfig):
        self.config = config
        self._store: SortedVariantStore | None = None

    def load(self) -> SortedVariantStore:
        """Load genome and variants once; later calls reuse the store."""
        if self._store is not None:
            return self._store

        genome = load_genome(self.config.genome_file)
        logger.info("Genome defines %d chromosomes", genome.count())

        with console.status("[bold green]Loading variants...[/bold green]"):
            store = SortedVariantStore.from_path(
                self.config.variant_file,
                genome,
                keep_multi_base=self.config.keep_multi_base,
                lenient=self.config.lenient,
            )
        report = store.load_report or LoadReport()

        if not report.clean:
            logger.warning(
                "%d malformed lines were skipped (lenient mode)", report.skipped_count
            )

        unresolved = sum(1 for record in store if record.chr_index < 0)
        if unresolved:
            logger.warning(
                "%d variants are on chromosomes missing from the genome; they sort first",
                unresolved,
            )

        self._store = store
        return store

    def run(self) -> PipelineResult:
        """Execute the pipeline."""
        logger.info("Starting varset pipeline")

        # 1-2. Genome and variants
        store = self.load()
        result = PipelineResult(store=store, load_report=store.load_report or LoadReport())

        # 3. Decomposition
        if self.config.separate:
            result.decomposition = store.separate_multi_snvs()

        # 4. Output
        if self.config.output_file is not None:
            result.records_written = store.write(self.config.output_file)
            logger.info("Wrote %d variants to %s", result.records_written, self.config.output_file)

        logger.info("Pipeline completed successfully")
        return result

    def query(self, loci: Sequence[LocusQuery]) -> list[VariantRecord | None]:
        """Look up each locus in turn through one tracker; misses are None."""
        store = self.load()
        tracker = LocalityAwareIndex(store, max_linear_steps=self.config.max_linear_steps)
        return [tracker.get_at_locus(locus) for locus in loci]

    def count(self, intervals: Sequence[Interval]) -> list[int]:
        """Count stored variants in closed intervals on config.threads threads."""
        return count_intervals(self.load(), intervals, n_jobs=self.config.threads)
