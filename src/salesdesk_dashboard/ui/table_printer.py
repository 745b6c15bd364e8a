from __future__ import annotations

from typing import Any, TextIO

from salesdesk_dashboard.ui.formatting import EMPTY_VALUE


def _cell(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    text = str(value).strip()
    return text or EMPTY_VALUE


def render_table(rows: list[dict[str, Any]], columns: list[tuple[str, str]]) -> list[str]:
    if not rows:
        return ["(no results)"]

    widths = []
    for key, header in columns:
        max_cell = max(len(_cell(row.get(key))) for row in rows)
        widths.append(max(len(header), max_cell))

    lines = [
        " | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns)),
        "-+-".join("-" * width for width in widths),
    ]
    for row in rows:
        lines.append(" | ".join(_cell(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns)))
    return lines


def print_table(title: str, rows: list[dict[str, Any]], columns: list[tuple[str, str]], *, stream: TextIO) -> None:
    stream.write(f"\n{title}\n")
    for line in render_table(rows, columns):
        stream.write(f"{line}\n")
