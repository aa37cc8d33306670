"""Intermediate Representation for styled text blocks.

This module defines the data structures that bridge a host document's
styled-run model to HTML rendering. Text blocks and style runs are owned
by the host and only read; everything else is created fresh for a single
extraction and discarded afterwards.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Host attribute sets
# =============================================================================

# Attributes requested when rendering a block to HTML
RENDER_ATTRIBUTES: tuple[str, ...] = (
    "font_weight",
    "font_name",
    "hyperlink",
    "font_size",
    "list_options",
    "indentation",
    "paragraph_spacing",
    "list_spacing",
    "paragraph_indent",
)

# Attributes requested when computing a block's dominant font
FONT_ATTRIBUTES: tuple[str, ...] = ("font_name", "font_weight")

BOLD_WEIGHT = 600
DEFAULT_WEIGHT = 400
UNKNOWN_FAMILY = "Unknown"

ITALIC_PATTERN = re.compile(r"italic|oblique", re.IGNORECASE)


# =============================================================================
# Style runs
# =============================================================================

class ListKind(str, Enum):
    """Native list classification reported by the host."""

    ORDERED = "ORDERED"
    UNORDERED = "UNORDERED"
    NONE = "NONE"


class ListType(str, Enum):
    """List container emitted in HTML."""

    UL = "ul"
    OL = "ol"


@dataclass(frozen=True)
class FontName:
    """Font family and style label (e.g. "Inter", "Semi Bold Italic")."""

    family: Optional[str] = None
    style: Optional[str] = None


@dataclass(frozen=True)
class Hyperlink:
    """Hyperlink attached to a run.

    Attributes:
        type: "URL" for external links, "NODE" for in-document jumps
        value: The URL or node id
    """

    type: str = "URL"
    value: str = ""


@dataclass(frozen=True)
class StyleRun:
    """A half-open character range [start, end) sharing one set of styles.

    Attributes that were not requested from the host, or that the host
    could not provide, stay at their "absent" default and render as plain
    text.
    """

    start: int
    end: int
    font_weight: object = None
    font_name: Optional[FontName] = None
    hyperlink: Optional[Hyperlink] = None
    list_kind: Optional[ListKind] = None
    font_size: Optional[float] = None
    indentation: int = 0
    paragraph_spacing: float = 0
    list_spacing: float = 0
    paragraph_indent: float = 0

    @property
    def length(self) -> int:
        return max(0, self.end - self.start)

    @property
    def weight(self) -> float:
        """Numeric weight; missing or unparsable weights count as regular."""
        try:
            value = float(self.font_weight)
        except (TypeError, ValueError):
            return DEFAULT_WEIGHT
        return value or DEFAULT_WEIGHT

    @property
    def is_bold(self) -> bool:
        return self.weight >= BOLD_WEIGHT

    @property
    def style_label(self) -> str:
        if self.font_name and self.font_name.style:
            return str(self.font_name.style)
        return ""

    @property
    def is_italic(self) -> bool:
        return bool(ITALIC_PATTERN.search(self.style_label))

    @property
    def family(self) -> str:
        if self.font_name and self.font_name.family:
            return self.font_name.family
        return UNKNOWN_FAMILY

    @property
    def href(self) -> Optional[str]:
        """URL of an external hyperlink, None for none or in-document links."""
        if self.hyperlink and self.hyperlink.type == "URL" and self.hyperlink.value:
            return self.hyperlink.value
        return None

    @property
    def list_type(self) -> Optional[ListType]:
        if self.list_kind == ListKind.ORDERED:
            return ListType.OL
        if self.list_kind == ListKind.UNORDERED:
            return ListType.UL
        return None

    def overlap(self, start: int, end: int) -> tuple[int, int]:
        """Intersection with [start, end); empty when the result has s >= e."""
        return max(start, self.start), min(end, self.end)


# =============================================================================
# Text blocks and paragraphs
# =============================================================================

@dataclass(frozen=True)
class TextBlock:
    """A unit of styled text from the host document.

    Attributes:
        id: Stable identifier used to query style runs
        characters: Raw character buffer
        x: Horizontal position (for reading order)
        y: Vertical position (for reading order)
        name: Optional layer name, informational only
    """

    id: str
    characters: str = ""
    x: float = 0
    y: float = 0
    name: str = ""


@dataclass(frozen=True)
class Paragraph:
    """A [start, end) slice of a block's characters between line breaks."""

    start: int
    end: int
    text: str

    @property
    def is_blank(self) -> bool:
        return self.text.strip() == ""


# =============================================================================
# Extraction output
# =============================================================================

@dataclass(frozen=True)
class RenderedCard:
    """One rendered text block with its dominant font metadata."""

    node_id: str
    html: str
    font_family: str = UNKNOWN_FAMILY
    font_style: str = ""
    is_variable: bool = False

    def to_dict(self) -> dict:
        return {
            "nodeId": self.node_id,
            "html": self.html,
            "fontFamily": self.font_family,
            "fontStyle": self.font_style,
            "isVariable": self.is_variable,
        }


@dataclass
class FontGroup:
    """Cards sharing a dominant font family and variable-font flag."""

    font_family: str
    is_variable: bool = False
    items: list[RenderedCard] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, bool]:
        return self.font_family, self.is_variable

    def to_dict(self) -> dict:
        return {
            "fontFamily": self.font_family,
            "isVariable": self.is_variable,
            "items": [card.to_dict() for card in self.items],
        }


@dataclass
class ExtractionResult:
    """Result of one extraction call.

    Attributes:
        items: One HTML string per block, in reading order
        groups: Font groups of rendered cards
        message: Guidance text when nothing could be extracted
    """

    items: list[str] = field(default_factory=list)
    groups: list[FontGroup] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> dict:
        payload: dict = {
            "items": list(self.items),
            "groups": [group.to_dict() for group in self.groups],
        }
        if self.message:
            payload["error"] = self.message
        return payload
