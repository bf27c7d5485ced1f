from __future__ import annotations

from pipelines.runner import RunContext
from services.record_store import RecordStore


class LoadRecordStore:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def run(self, ctx: RunContext) -> RunContext:
        self.store.replace(ctx.advocates)
        ctx.meta["loaded_advocates"] = len(self.store)
        ctx.meta["store_generation"] = self.store.generation
        return ctx
