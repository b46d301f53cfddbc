"""
Design (repository.py)
- Purpose: Encapsulate the mutable history (entries + id counter) behind a tiny API,
           so the UI never touches the list or storage directly.
- Inputs: Raw form values to record; an EntryStore to load from and save to.
- Outputs: Entry records, snapshots (tuples) of the history, totals.
- Side effects: Appends/clears the internal list; persists after every mutation.
- Thread-safety: Main thread only. Every mutation comes from one user action, so no lock.
"""

import logging
from typing import Iterable, List, Tuple

from .calculator import build_entry
from .config import RESET_COUNTER_ON_CLEAR
from .models import Entry, ValidationResult
from .storage import EntryStore
from .validation import validate

logger = logging.getLogger(__name__)


def compute_totals(entries: Iterable[Entry]) -> Tuple[float, float]:
    """
    Sum sales and commission over valid entries only.

    Returns:
        (total_sales, total_commission); (0.0, 0.0) for an empty history
    """
    total_sales = 0.0
    total_commission = 0.0
    for entry in entries:
        if not entry.is_valid:
            continue
        total_sales += entry.sales
        total_commission += entry.commission
    return total_sales, total_commission


class History:
    """
    Design (History)
    - State:
        _entries: list[Entry] in insertion order (append-only until clear())
        _count: last id handed out; persisted on its own, never len(_entries)
        reset_counter_on_clear: whether clear() restarts ids at 1
    """

    def __init__(self, store: EntryStore, reset_counter_on_clear: bool = RESET_COUNTER_ON_CLEAR) -> None:
        self.store = store
        self.reset_counter_on_clear = reset_counter_on_clear
        self._entries: List[Entry] = store.load()
        self._count: int = store.load_count()
        # never hand out an id that is already in the history
        highest = max((e.id for e in self._entries), default=0)
        if highest > self._count:
            logger.warning(f"Stored entry count {self._count} is behind history; using {highest}")
            self._count = highest
        logger.info(f"Loaded {len(self._entries)} entries (next id {self.next_id})")

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def next_id(self) -> int:
        return self._count + 1

    # -------- Mutations --------

    def record(self, name: str, raw_locks: str, raw_stocks: str, raw_barrels: str) -> Entry:
        """
        Purpose: Evaluate one form submission and append it to the history.
        Outputs: The new Entry (valid or not).
        Side effects: Bumps the id counter; persists entries and counter.
        """
        return self.record_result(name, validate(name, raw_locks, raw_stocks, raw_barrels))

    def record_result(self, name: str, result: ValidationResult) -> Entry:
        """
        Purpose: Append an entry for a submission that was already validated.
        Outputs: The new Entry (valid or not).
        """
        entry = build_entry(self.next_id, name, result)
        self._entries.append(entry)
        self._count = entry.id
        self._persist()
        if entry.is_valid:
            logger.info(f"Entry #{entry.id} {entry.name}: sales={entry.sales} commission={entry.commission}")
        else:
            logger.info(f"Entry #{entry.id} {entry.name} invalid: {'; '.join(entry.errors)}")
        return entry

    def clear(self) -> None:
        """
        Purpose: Drop all entries. The id counter goes back to zero unless
                 reset_counter_on_clear is False.
        Side effects: Removes the stored keys (or keeps only the counter).
        """
        self._entries.clear()
        self.store.clear()
        if self.reset_counter_on_clear:
            self._count = 0
        else:
            self.store.save_count(self._count)
        logger.info(f"History cleared (next id {self.next_id})")

    # -------- Snapshots for safe reading --------

    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def valid_entries(self) -> Tuple[Entry, ...]:
        return tuple(e for e in self._entries if e.is_valid)

    def totals(self) -> Tuple[float, float]:
        return compute_totals(self._entries)

    def _persist(self) -> None:
        self.store.save(self._entries)
        self.store.save_count(self._count)
