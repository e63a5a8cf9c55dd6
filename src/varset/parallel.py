"""Parallel interval counting with joblib."""

import logging
import os
from collections.abc import Sequence

from joblib import Parallel, delayed
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .utils.logging import console
from .variants.store import SortedVariantStore

logger = logging.getLogger(__name__)

__all__ = ["Interval", "count_intervals"]

Interval = tuple[int | str, int, int]

# Intervals handed to one worker call; keeps joblib dispatch overhead small.
DEFAULT_BATCH_SIZE = 1024


def _count_batch(store: SortedVariantStore, batch: Sequence[Interval]) -> list[int]:
    return [store.count_in_interval(chrom, start, end) for chrom, start, end in batch]


def count_intervals(
    store: SortedVariantStore,
    intervals: Sequence[Interval],
    n_jobs: int = 1,
    batch_size: int = DEFAULT_BATCH_SIZE,
    show_progress: bool = False,
) -> list[int]:
    """
    Count stored variants in many closed intervals.

    The store is only read, so batches are shared between threads without
    copying (joblib threading backend).

    Args:
        store: Store to query.
        intervals: (chromosome, start, end) triples, closed on both ends.
        n_jobs: Number of worker threads (-1 for all CPUs).
        batch_size: Intervals per worker call.
        show_progress: Display a rich progress bar.

    Returns:
        One count per interval, in input order.
    """
    if n_jobs < 0:
        n_jobs = os.cpu_count() or 1
    batches = [intervals[i:i + batch_size] for i in range(0, len(intervals), batch_size)]
    logger.debug("Counting %d intervals in %d batches on %d threads", len(intervals), len(batches), n_jobs)

    results: list[int] = []
    if not batches:
        return results

    with Parallel(n_jobs=n_jobs, backend="threading") as parallel:
        jobs = (delayed(_count_batch)(store, batch) for batch in batches)
        if not show_progress:
            for counts in parallel(jobs):
                results.extend(counts)
            return results

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Counting intervals...", total=len(intervals))
            for counts in parallel(jobs):
                results.extend(counts)
                progress.update(task, advance=len(counts))

    return results
