from __future__ import annotations

import asyncio
import functools
import logging
from typing import Callable, Optional

from ports.scheduler import CancelHandle, SchedulerPort


DEFAULT_DEBOUNCE_SECONDS = 0.3


class AsyncioScheduler:
    """Runs callbacks on an asyncio event loop via ``call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def schedule(self, callback: Callable[[], None], delay_seconds: float) -> CancelHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)


class DebounceGate:
    """Coalesces rapid input so only the last value of a burst is dispatched.

    Every ``submit`` cancels the pending dispatch, if any, and starts a fresh
    quiescence window. ``cancel`` drops the pending dispatch; call it on
    teardown so nothing fires against a discarded session.
    """

    def __init__(
        self,
        scheduler: SchedulerPort,
        dispatch: Callable[[str], None],
        delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self.scheduler = scheduler
        self.dispatch = dispatch
        self.delay_seconds = delay_seconds
        self.latest_text = ""
        self._pending: Optional[CancelHandle] = None
        self._pending_text: Optional[str] = None
        self._token: Optional[object] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def submit(self, text: str) -> None:
        self.latest_text = text
        self.cancel()
        self._pending_text = text
        self._token = token = object()
        self._pending = self.scheduler.schedule(functools.partial(self._fire, token), self.delay_seconds)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._pending_text = None
        self._token = None

    def flush(self) -> bool:
        """Dispatch the pending input now. Returns False when nothing was pending."""
        if self._pending is None:
            return False
        text = self._pending_text or ""
        self.cancel()
        self.dispatch(text.strip())
        return True

    def _fire(self, token: object) -> None:
        if token is not self._token:
            # Superseded or cancelled after the timer was already queued
            return
        text = self._pending_text or ""
        self._pending = None
        self._pending_text = None
        self._token = None
        logging.debug(f"Dispatching debounced query {text.strip()!r}", extra={"step": "debounce"})
        self.dispatch(text.strip())
