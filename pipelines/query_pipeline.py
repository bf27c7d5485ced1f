from __future__ import annotations

import enum
import logging
from typing import Tuple

from models import Advocate
from services.record_store import RecordStore


class QueryState(str, enum.Enum):
    IDLE = "idle"
    FILTERING = "filtering"


class QueryPipeline:
    """Turns a dispatched query into the Displayed Set.

    Short or blank queries pass the full record store through untouched.
    Anything else goes to the store's current index; the ranked matches are
    projected back to plain records. A failing lookup empties the result
    instead of propagating.
    """

    def __init__(self, store: RecordStore, min_match_chars: int = 2) -> None:
        self.store = store
        self.min_match_chars = min_match_chars
        self.state = QueryState.IDLE
        self.query_text = ""
        self.displayed: Tuple[Advocate, ...] = store.records

    def resolve(self, text: str) -> Tuple[Advocate, ...]:
        query = (text or "").strip()
        self.query_text = query
        if len(query) < self.min_match_chars:
            self.state = QueryState.IDLE
            self.displayed = self.store.records
            return self.displayed

        self.state = QueryState.FILTERING
        try:
            matches = self.store.index.query(query)
            self.displayed = tuple(match.item for match in matches)
        except Exception as e:
            logging.exception(
                f"Error during search for {query!r}",
                extra={"step": "search", "status": "failed", "error": str(e)},
            )
            self.displayed = ()
        return self.displayed

    def reset(self) -> Tuple[Advocate, ...]:
        self.state = QueryState.IDLE
        self.query_text = ""
        self.displayed = self.store.records
        return self.displayed
