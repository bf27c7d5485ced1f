from __future__ import annotations

from typing import Any, List, Optional, Sequence

from models import Advocate
from services.session import SessionView


TITLE = "Solace Advocates"
EMPTY_MESSAGE = "No advocates found matching your search."

COLUMNS = [
    ("First Name", "first_name"),
    ("Last Name", "last_name"),
    ("City", "city"),
    ("Degree", "degree"),
    ("Specialties", "specialties"),
    ("Years of Experience", "years_of_experience"),
    ("Phone Number", "phone_number"),
]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "; ".join(str(v) for v in value)
    return str(value)


def format_table(advocates: Sequence[Advocate]) -> List[str]:
    """Render advocates as fixed-width text rows, header first."""
    headers = [title for title, _ in COLUMNS]
    rows = [[_cell(getattr(a, attr, None)) for _, attr in COLUMNS] for a in advocates]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: List[str]) -> str:
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [_line(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(_line(row) for row in rows)
    return lines


def render_view(view: SessionView, retry_hint: Optional[str] = None) -> List[str]:
    """Lines for one frame: loading screen, error screen, or query echo plus results."""
    lines = [TITLE, "=" * 60]
    if view.loading:
        lines.append("Loading advocates...")
        return lines
    if view.error is not None:
        lines.append(f"Error: {view.error}")
        if retry_hint:
            lines.append(retry_hint)
        return lines
    lines.append(f"Search Advocates: {view.query_text}")
    lines.append(f"Showing {len(view.displayed)} of {view.total}")
    lines.append("")
    if not view.displayed:
        lines.append(EMPTY_MESSAGE)
        return lines
    lines.extend(format_table(view.displayed))
    return lines


def print_view(view: SessionView, retry_hint: Optional[str] = None) -> None:
    for line in render_view(view, retry_hint=retry_hint):
        print(line)
