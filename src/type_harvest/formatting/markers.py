"""Text-pattern list marker detection."""

import re
from dataclasses import dataclass
from typing import Optional

from type_harvest.formatting.ir import ListType


# Bullet glyphs: hyphen, asterisk, bullet, triangular bullet, en dash, em dash
UNORDERED_MARKER = re.compile(r"^\s*[-*•‣–—]\s+")

# 1.  1)  A.  a)  iv.
ORDERED_MARKER = re.compile(r"^\s*(?:[0-9]+|[A-Za-z]+)[.)]\s+")


@dataclass(frozen=True)
class ListMarker:
    """Outcome of marker detection on one line.

    Attributes:
        type: List type, or None when the line is not a list item
        strip: Number of leading characters that make up the marker
    """

    type: Optional[ListType] = None
    strip: int = 0


NO_MARKER = ListMarker()


def classify_list_line(text: str) -> ListMarker:
    """Decide whether a raw (untrimmed) line starts with a list marker."""
    match = UNORDERED_MARKER.match(text)
    if match:
        return ListMarker(ListType.UL, match.end())

    match = ORDERED_MARKER.match(text)
    if match:
        return ListMarker(ListType.OL, match.end())

    return NO_MARKER
