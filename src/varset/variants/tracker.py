"""
Locality-aware search over a SortedVariantStore.

Scans along a chromosome tend to ask about loci close to the previous one.
The tracker remembers where the last search ended and first tries a few
single steps from there before falling back to binary search, which makes
sequential query streams O(1) on average while keeping the O(log n) worst
case of the underlying store.

A tracker holds mutable state: use one instance per scan and never share an
instance between threads. Several trackers may wrap the same store.
"""

import logging

from ..genome.locus import HasLocus, Locus, compare_loci
from .record import VariantRecord
from .store import Found, LocusQuery, NotFound, SearchResult, SortedVariantStore

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_MAX_LINEAR_STEPS", "LocalityAwareIndex"]

DEFAULT_MAX_LINEAR_STEPS = 3


class LocalityAwareIndex:
    """
    Search decorator that walks from the previous hit before bisecting.

    Results always equal those of the wrapped store's index_of().
    """

    def __init__(self, store: SortedVariantStore, max_linear_steps: int = DEFAULT_MAX_LINEAR_STEPS):
        if max_linear_steps < 0:
            raise ValueError("max_linear_steps must be >= 0")
        self.store = store
        self.max_linear_steps = max_linear_steps
        self.last_index = 0
        self._generation = store.generation

    def reset(self) -> None:
        """Forget the cached position, e.g. after the store was rebuilt."""
        self.last_index = 0
        self._generation = self.store.generation

    def _sync(self) -> None:
        if self._generation != self.store.generation:
            logger.debug("Store generation changed, resetting tracker")
            self.reset()

    def index_of(self, query: LocusQuery) -> SearchResult:
        """
        Find a locus, trying a short walk from the last position first.

        Each step moves one slot toward the locus; the walk stops at an exact
        match, when the direction would reverse, at either end of the store,
        or after max_linear_steps steps. A reversal or an end of the store
        proves where the locus would be inserted; exhausting the step budget
        falls back to binary search and moves the cursor to its answer.
        """
        self._sync()
        locus = Locus.parse(query, self.store.genome) if isinstance(query, str) else query
        size = len(self.store)
        if size == 0:
            return NotFound(0)

        direction = 0
        steps = 0
        while True:
            order = compare_loci(locus, self.store.get(self.last_index))
            if order == 0:
                return Found(self._leftmost_match(locus))
            if order < 0:
                if direction > 0:
                    # passed between last_index and the slot before it
                    return NotFound(self.last_index)
                if self.last_index == 0:
                    return NotFound(0)
                if steps >= self.max_linear_steps:
                    break
                self.last_index -= 1
                direction = -1
            else:
                if direction < 0:
                    return NotFound(self.last_index + 1)
                if self.last_index == size - 1:
                    return NotFound(size)
                if steps >= self.max_linear_steps:
                    break
                self.last_index += 1
                direction = 1
            steps += 1

        result = self.store.index_of(locus)
        if isinstance(result, Found):
            self.last_index = result.index
        else:
            self.last_index = min(result.insertion_index, size - 1)
        return result

    def _leftmost_match(self, locus: HasLocus) -> int:
        # duplicate loci: report the same slot as binary search would
        while self.last_index > 0 and compare_loci(locus, self.store.get(self.last_index - 1)) == 0:
            self.last_index -= 1
        return self.last_index

    def contains_locus(self, query: LocusQuery) -> bool:
        return self.index_of(query).found

    def get_at_locus(self, query: LocusQuery) -> VariantRecord | None:
        result = self.index_of(query)
        if isinstance(result, Found):
            return self.store.get(result.index).copy()
        return None

    def __len__(self) -> int:
        return len(self.store)

    def __repr__(self) -> str:
        return f"LocalityAwareIndex(last_index={self.last_index}, max_linear_steps={self.max_linear_steps})"
