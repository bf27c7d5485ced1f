from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

from models import Advocate
from ports.search_index import SearchIndexPort


IndexFactory = Callable[[], SearchIndexPort]


class RecordStore:
    """Holds the full advocate snapshot and the index built over it.

    ``replace`` swaps both in one step: the index is rebuilt from the new
    snapshot before the method returns, so no query can reach an index built
    from an older snapshot.
    """

    def __init__(self, index_factory: IndexFactory) -> None:
        self._index_factory = index_factory
        self._records: Tuple[Advocate, ...] = ()
        self._index: Optional[SearchIndexPort] = None
        self.generation = 0

    @property
    def records(self) -> Tuple[Advocate, ...]:
        return self._records

    @property
    def index(self) -> SearchIndexPort:
        if self._index is None:
            self._index = self._index_factory()
            self._index.build(self._records)
        return self._index

    def replace(self, records: Iterable[Advocate]) -> None:
        snapshot = tuple(records)
        index = self._index_factory()
        index.build(snapshot)
        self._records = snapshot
        self._index = index
        self.generation += 1
        logging.info(
            f"Record store replaced with {len(snapshot)} advocates (generation {self.generation})",
            extra={"step": "replace_records", "status": "ok"},
        )

    def __len__(self) -> int:
        return len(self._records)
