from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence

from models import Advocate


@dataclass(frozen=True)
class SearchMatch:
    item: Advocate
    score: float
    ref_index: int


class SearchIndexPort(Protocol):
    def build(self, records: Sequence[Advocate]) -> None:
        ...

    def query(self, text: str) -> List[SearchMatch]:
        ...
