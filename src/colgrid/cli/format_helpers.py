"""Shared text formatting primitives for CLI output."""

from __future__ import annotations


def tabular(rows: list[list[str]], sep: str = "  ") -> str:
    """Align columns by max width per column.

    >>> tabular([["GROUP", "ROWS"], ["a", "3"], ["bbb", "12"]])
    'GROUP  ROWS\\na      3\\nbbb    12'
    """
    if not rows:
        return ""
    col_count = max(len(row) for row in rows)
    col_widths = [
        max((len(row[col]) if col < len(row) else 0) for row in rows)
        for col in range(col_count)
    ]
    lines: list[str] = []
    for row in rows:
        cells = [
            (row[col] if col < len(row) else "").ljust(col_widths[col])
            for col in range(col_count)
        ]
        lines.append(sep.join(cells).rstrip())
    return "\n".join(lines)


def kv_block(pairs: list[tuple[str, str | None]]) -> str:
    """Render key: value pairs, skipping None values.

    >>> kv_block([("mode", "auto"), ("order", "column"), ("width", None)])
    'mode: auto\\norder: column'
    """
    return "\n".join(f"{k}: {v}" for k, v in pairs if v is not None)
