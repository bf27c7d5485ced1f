"""
HTTP source for the advocates listing endpoint.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional

import requests

from config.settings import Settings, get_settings
from models import Advocate
from sources.base import AdvocateFetchError, AdvocateSource
from sources.registry import register


class AdvocatesApiSource(AdvocateSource):
    """Fetches the full advocate list with a single GET. No retries."""

    source_name = "advocates_api"

    def __init__(self, url: Optional[str] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.url = url or self.settings.advocates_api_url

    def fetch(self) -> List[Advocate]:
        logging.info(f"Fetching advocates from {self.url}", extra={"step": "fetch_advocates"})
        t0 = time.time()
        try:
            response = requests.get(self.url, timeout=self.settings.request_timeout_seconds)
        except requests.exceptions.RequestException as e:
            raise AdvocateFetchError(f"Network error: {e}") from e

        if not 200 <= response.status_code < 300:
            raise AdvocateFetchError(f"HTTP error! status: {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise AdvocateFetchError("Malformed response: body is not JSON") from e

        advocates = self.parse_body(body)
        logging.info(
            f"Fetched {len(advocates)} advocates",
            extra={"step": "fetch_advocates", "status": "ok", "duration_ms": int((time.time() - t0) * 1000)},
        )
        return advocates


def _register():
    register(AdvocatesApiSource.source_name, AdvocatesApiSource)


_register()
