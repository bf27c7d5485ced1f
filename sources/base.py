from __future__ import annotations

from typing import Any, List

from models import Advocate


class AdvocateFetchError(RuntimeError):
    """Initial load failed: HTTP error status, network error or malformed body."""


class AdvocateSource:
    source_name: str = "advocates"

    def fetch(self) -> List[Advocate]:
        raise NotImplementedError

    def parse_body(self, body: Any) -> List[Advocate]:
        # Expected shape: {"data": [advocate, ...]}; entries are not validated
        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise AdvocateFetchError("Malformed response: expected a 'data' list")
        return [Advocate.from_payload(raw) for raw in body["data"]]
