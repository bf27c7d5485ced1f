from __future__ import annotations

from typing import List, Protocol

from models import Advocate


class AdvocateSourcePort(Protocol):
    source_name: str

    def fetch(self) -> List[Advocate]:
        ...
