"""
Comparison Selection — Process-Wide Store of Pokémon Being Compared.

The store is the single shared mutable resource of the application. It
lives for the process and is reset only by clear() or a restart.

INVARIANTS:
- Size is always within [0, MAX_COMPARE]
- No duplicate identities
- Insertion order is preserved
- The backing list is never handed out; readers get copies
"""

import logging
from dataclasses import dataclass, field
from threading import Lock

from pokebrowser.config import MAX_COMPARE
from pokebrowser.models.comparison import ComparisonRecord, ComparisonStats, StatRow
from pokebrowser.models.constants import STAT_NAMES

logger = logging.getLogger(__name__)


@dataclass
class ComparisonStore:
    """
    Thread-safe, capacity-bounded ordered selection.

    add/remove/clear are the only mutation surface.
    """

    capacity: int = MAX_COMPARE

    _selected: list[ComparisonRecord] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock)

    @property
    def selected_items(self) -> list[ComparisonRecord]:
        with self._lock:
            return list(self._selected)

    def add(self, record: ComparisonRecord) -> bool:
        """
        Append a record.

        Returns:
            True if added. False (no-op) when full or already selected.
        """
        with self._lock:
            if len(self._selected) >= self.capacity:
                logger.info(
                    "COMPARE_ADD_IGNORED",
                    extra={"identity": record.identity, "reason": "capacity"},
                )
                return False
            if any(r.identity == record.identity for r in self._selected):
                return False

            self._selected.append(record)
            logger.debug("COMPARE_ADDED", extra={"identity": record.identity})
            return True

    def remove(self, identity: str) -> bool:
        """Remove a record by identity. Returns False if it was not selected."""
        with self._lock:
            kept = [r for r in self._selected if r.identity != identity]
            removed = len(kept) != len(self._selected)
            self._selected = kept
            return removed

    def clear(self) -> None:
        with self._lock:
            self._selected = []

    def contains(self, identity: str) -> bool:
        with self._lock:
            return any(r.identity == identity for r in self._selected)

    def can_add_more(self) -> bool:
        with self._lock:
            return len(self._selected) < self.capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._selected)


def compare_stats(records: list[ComparisonRecord]) -> ComparisonStats:
    """
    Build the per-stat comparison table.

    Best and worst holders are only marked when the values differ; ties
    mark every holder.
    """
    rows: list[StatRow] = []

    for stat in STAT_NAMES:
        values = {r.name: r.stats.get(stat, 0) for r in records}
        best: list[str] = []
        worst: list[str] = []

        if values:
            high = max(values.values())
            low = min(values.values())
            if high != low:
                best = [name for name, value in values.items() if value == high]
                worst = [name for name, value in values.items() if value == low]

        rows.append(StatRow(stat=stat, values=values, best=best, worst=worst))

    totals = {r.name: r.base_stat_total() for r in records}
    return ComparisonStats(rows=rows, totals=totals)


# =============================================================================
# GLOBAL STORE INSTANCE
# =============================================================================

# Singleton store instance
_store: ComparisonStore | None = None


def get_comparison_store() -> ComparisonStore:
    """Get the process-wide comparison store (FastAPI dependency)."""
    global _store
    if _store is None:
        _store = ComparisonStore()
    return _store


def reset_comparison_store() -> None:
    """Drop the process-wide store (for testing)."""
    global _store
    _store = None
