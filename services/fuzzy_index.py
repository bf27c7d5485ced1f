from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from models import Advocate
from ports.search_index import SearchMatch
from utils.search_text import field_values, to_search_text


SEARCH_KEYS: Tuple[str, ...] = (
    "first_name",
    "last_name",
    "city",
    "degree",
    "specialties",
    "years_of_experience",
    "phone_number",
)

_EPSILON = sys.float_info.epsilon


def _field_norm(text: str) -> float:
    # Longer field values weigh less; mirrors a 1/sqrt(tokens) length norm
    tokens = len(text.split()) or 1
    return round(1.0 / math.sqrt(tokens), 3)


@dataclass(frozen=True)
class _IndexedValue:
    key: str
    text: str
    norm: float


class FuzzyIndex:
    """Approximate-match index over advocate records, backed by rapidfuzz.

    A field value matches when the Levenshtein distance between the pattern
    and its closest substring of the value, divided by the pattern length, is
    at most ``threshold``.
    Every matching value contributes to the record score, so records that
    match in several places rank ahead of single hits. Lower scores are
    better; 0 would be a perfect match everywhere.
    """

    def __init__(
        self,
        keys: Sequence[str] = SEARCH_KEYS,
        threshold: float = 0.3,
        min_match_char_length: int = 2,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be between 0 and 1")
        self.keys = tuple(keys)
        self.threshold = threshold
        self.min_match_char_length = max(1, int(min_match_char_length))
        self._entries: List[Tuple[Advocate, List[_IndexedValue]]] = []

    def build(self, records: Sequence[Advocate]) -> None:
        entries: List[Tuple[Advocate, List[_IndexedValue]]] = []
        for record in records:
            values: List[_IndexedValue] = []
            for key in self.keys:
                for text in field_values(getattr(record, key, None)):
                    values.append(_IndexedValue(key=key, text=text, norm=_field_norm(text)))
            entries.append((record, values))
        self._entries = entries
        logging.debug(f"Built fuzzy index over {len(entries)} records", extra={"step": "index_build"})

    def __len__(self) -> int:
        return len(self._entries)

    def score_value(self, pattern: str, text: str) -> Optional[float]:
        """Edit errors over pattern length against the closest substring of text.

        Returns None when the best distance is above the threshold.
        """
        if not text or not pattern:
            return None
        size = len(pattern)
        max_edits = int(self.threshold * size + 1e-9)
        best = max_edits + 1
        # Any substring within max_edits of the pattern has a length in this range
        for width in range(max(1, size - max_edits), min(len(text), size + max_edits) + 1):
            for start in range(len(text) - width + 1):
                distance = Levenshtein.distance(pattern, text[start:start + width], score_cutoff=best - 1)
                if distance < best:
                    best = distance
                    if best == 0:
                        return 0.0
        if best > max_edits:
            return None
        return best / size

    def query(self, text: str) -> List[SearchMatch]:
        pattern = to_search_text(text)
        if len(pattern) < self.min_match_char_length:
            return []

        matches: List[SearchMatch] = []
        for ref_index, (record, values) in enumerate(self._entries):
            total = 1.0
            matched = False
            for value in values:
                score = self.score_value(pattern, value.text)
                if score is None:
                    continue
                matched = True
                total *= max(score, _EPSILON) ** value.norm
            if matched:
                matches.append(SearchMatch(item=record, score=total, ref_index=ref_index))

        # list.sort is stable: equal scores keep insertion order
        matches.sort(key=lambda m: m.score)
        return matches
