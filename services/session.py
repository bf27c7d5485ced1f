from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from config.settings import Settings, get_settings
from models import Advocate
from pipelines.query_pipeline import QueryPipeline
from pipelines.runner import Pipeline, RunContext
from pipelines.steps.fetch_advocates import FetchAdvocates
from pipelines.steps.load_records import LoadRecordStore
from ports.scheduler import SchedulerPort
from ports.source import AdvocateSourcePort
from services.debounce import DebounceGate
from services.fuzzy_index import FuzzyIndex
from services.record_store import IndexFactory, RecordStore


@dataclass(frozen=True)
class SessionView:
    """What the presentation layer needs to draw one frame."""

    loading: bool
    error: Optional[str]
    query_text: str
    displayed: Tuple[Advocate, ...]
    total: int

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None


class SearchSession:
    """Owns one page session: records, index, query state and the debounce timer.

    Nothing here is module-global, so independent sessions can run side by
    side. All methods are expected to be called from a single thread.
    """

    def __init__(
        self,
        source: AdvocateSourcePort,
        scheduler: SchedulerPort,
        settings: Optional[Settings] = None,
        index_factory: Optional[IndexFactory] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.source = source
        if index_factory is None:
            index_factory = lambda: FuzzyIndex(  # noqa: E731
                threshold=self.settings.search_threshold,
                min_match_char_length=self.settings.search_min_match_chars,
            )
        self.store = RecordStore(index_factory)
        self.pipeline = QueryPipeline(self.store, min_match_chars=self.settings.search_min_match_chars)
        self.gate = DebounceGate(
            scheduler,
            self._dispatch,
            delay_seconds=self.settings.search_debounce_ms / 1000.0,
        )
        self.loading = False
        self.error: Optional[str] = None
        self.query_text = ""
        self._torn_down = False
        self._listeners: List[Callable[[SessionView], None]] = []

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None and not self._torn_down

    @property
    def displayed(self) -> Tuple[Advocate, ...]:
        return self.pipeline.displayed

    def mount(self) -> RunContext:
        """Fetch once and build the record store. Failures end in the error state."""
        self.loading = True
        self.error = None
        self._notify()
        try:
            ctx = Pipeline([
                FetchAdvocates(self.source),
                LoadRecordStore(self.store),
            ]).run(RunContext())
        finally:
            self.loading = False
        if ctx.error is not None:
            self.error = ctx.error
            self._notify()
            return ctx
        self.pipeline.reset()
        self._notify()
        return ctx

    def on_input(self, text: str) -> None:
        if not self.ready:
            logging.warning("Ignoring search input while session is not ready", extra={"step": "input"})
            return
        self.query_text = text
        self.gate.submit(text)

    def reset(self) -> None:
        self.gate.cancel()
        self.query_text = ""
        self.pipeline.reset()
        self._notify()

    def replace_records(self, records: Iterable[Advocate]) -> None:
        self.store.replace(records)
        # Results computed against the previous snapshot are dropped here
        self.pipeline.resolve(self.pipeline.query_text)
        self._notify()

    def subscribe(self, listener: Callable[[SessionView], None]) -> None:
        self._listeners.append(listener)

    def teardown(self) -> None:
        self.gate.cancel()
        self._torn_down = True
        self._listeners.clear()

    def view(self) -> SessionView:
        return SessionView(
            loading=self.loading,
            error=self.error,
            query_text=self.query_text,
            displayed=self.pipeline.displayed,
            total=len(self.store),
        )

    def _dispatch(self, text: str) -> None:
        if self._torn_down:
            return
        self.pipeline.resolve(text)
        logging.info(
            f"Search {text!r} matched {len(self.pipeline.displayed)} of {len(self.store)} advocates",
            extra={"step": "search", "status": self.pipeline.state.value},
        )
        self._notify()

    def _notify(self) -> None:
        view = self.view()
        for listener in list(self._listeners):
            listener(view)
