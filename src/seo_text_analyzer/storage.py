"""
Record store for analyses.

Analyses are kept in process memory only. The store interface is kept
explicit (create/get/update) so another backend can be swapped in.
"""

import copy
import dataclasses
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .models import Analysis


class AnalysisStore(ABC):
    """Key-value store for Analysis records keyed by integer id."""

    @abstractmethod
    def create(self, analysis: Analysis) -> Analysis:
        """Persist a new record and return it with its assigned id."""

    @abstractmethod
    def get(self, analysis_id: int) -> Optional[Analysis]:
        """Return the record for `analysis_id`, or None if absent."""

    @abstractmethod
    def update(self, analysis_id: int, **changes) -> Optional[Analysis]:
        """Apply field changes and return the updated record, or None if absent."""

    @abstractmethod
    def mutate(
        self,
        analysis_id: int,
        changes_for: Callable[[Analysis], dict[str, Any]],
    ) -> Optional[Analysis]:
        """
        Read-modify-write a record atomically.

        `changes_for` receives the current record and returns the field
        changes to apply. Returns the updated record, or None if absent.
        """


class InMemoryAnalysisStore(AnalysisStore):
    """
    Thread-safe in-memory store.

    Ids start at 1, increase monotonically and are never reused. Records
    are copied on the way in and out so callers cannot mutate stored state.
    """

    def __init__(self):
        self._records: dict[int, Analysis] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, analysis: Analysis) -> Analysis:
        with self._lock:
            record = dataclasses.replace(copy.deepcopy(analysis), id=next(self._ids))
            self._records[record.id] = record
            return copy.deepcopy(record)

    def get(self, analysis_id: int) -> Optional[Analysis]:
        with self._lock:
            record = self._records.get(analysis_id)
            return copy.deepcopy(record) if record is not None else None

    def update(self, analysis_id: int, **changes) -> Optional[Analysis]:
        return self.mutate(analysis_id, lambda _: changes)

    def mutate(
        self,
        analysis_id: int,
        changes_for: Callable[[Analysis], dict[str, Any]],
    ) -> Optional[Analysis]:
        with self._lock:
            existing = self._records.get(analysis_id)
            if existing is None:
                return None

            changes = changes_for(copy.deepcopy(existing))
            if "id" in changes:
                raise ValueError("Analysis id cannot be changed")

            updated = dataclasses.replace(existing, **copy.deepcopy(changes))
            self._records[analysis_id] = updated
            return copy.deepcopy(updated)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
