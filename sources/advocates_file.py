from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from config.settings import get_settings
from models import Advocate
from sources.base import AdvocateFetchError, AdvocateSource
from sources.registry import register


class AdvocatesFileSource(AdvocateSource):
    """Reads the same {"data": [...]} body the API serves from a local JSON file."""

    source_name = "advocates_file"

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or get_settings().advocates_file)

    def fetch(self) -> List[Advocate]:
        try:
            body = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise AdvocateFetchError(f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise AdvocateFetchError(f"Malformed response: {self.path} is not JSON") from e
        advocates = self.parse_body(body)
        logging.info(f"Loaded {len(advocates)} advocates from {self.path}", extra={"step": "fetch_advocates", "status": "ok"})
        return advocates


def _register():
    register(AdvocatesFileSource.source_name, AdvocatesFileSource)


_register()
