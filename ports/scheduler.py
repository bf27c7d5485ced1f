from __future__ import annotations

from typing import Callable, Protocol


class CancelHandle(Protocol):
    def cancel(self) -> None:
        ...


class SchedulerPort(Protocol):
    def schedule(self, callback: Callable[[], None], delay_seconds: float) -> CancelHandle:
        ...
