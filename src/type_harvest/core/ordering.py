"""Approximate reading order for text blocks."""

from collections.abc import Iterable

from type_harvest.formatting.ir import TextBlock

# Blocks within this distance below the first block of a row share the row
ROW_TOLERANCE = 4


def _position(value) -> float:
    return value if value is not None else 0


def assign_rows(blocks: Iterable[TextBlock]) -> list[tuple[int, TextBlock]]:
    """Pair each block with a row index, top row first.

    Blocks are scanned top to bottom; a block opens a new row when it sits
    more than ROW_TOLERANCE below the first block of the current row, so
    every row spans at most ROW_TOLERANCE vertically.
    """
    rows: list[tuple[int, TextBlock]] = []
    row = -1
    row_top = 0.0
    for block in sorted(blocks, key=lambda b: _position(b.y)):
        y = _position(block.y)
        if row < 0 or y - row_top > ROW_TOLERANCE:
            row += 1
            row_top = y
        rows.append((row, block))
    return rows


def sort_reading_order(blocks: Iterable[TextBlock]) -> list[TextBlock]:
    """Return blocks sorted top to bottom, then left to right (stable)."""
    rows = assign_rows(blocks)
    rows.sort(key=lambda item: (item[0], _position(item[1].x)))
    return [block for _, block in rows]
