from __future__ import annotations

import logging

from pipelines.runner import RunContext
from ports.source import AdvocateSourcePort
from sources.base import AdvocateFetchError


class FetchAdvocates:
    def __init__(self, source: AdvocateSourcePort) -> None:
        self.source = source

    def run(self, ctx: RunContext) -> RunContext:
        try:
            ctx.advocates = list(self.source.fetch())
        except Exception as e:
            # Any failure here is fatal to the initial load; the session shows it
            logging.error(
                "Error fetching advocates",
                exc_info=not isinstance(e, AdvocateFetchError),
                extra={"step": "fetch_advocates", "status": "failed", "error": str(e)},
            )
            ctx.advocates = []
            ctx.error = str(e) or "Failed to fetch advocates"
            return ctx
        ctx.meta["fetched_advocates"] = len(ctx.advocates)
        ctx.meta["source_name"] = getattr(self.source, "source_name", None)
        return ctx
