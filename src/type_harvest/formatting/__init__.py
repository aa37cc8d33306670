"""Formatting utilities for rendering styled text to HTML."""

from type_harvest.formatting.ir import (
    FONT_ATTRIBUTES,
    RENDER_ATTRIBUTES,
    ExtractionResult,
    FontGroup,
    FontName,
    Hyperlink,
    ListKind,
    ListType,
    Paragraph,
    RenderedCard,
    StyleRun,
    TextBlock,
)
from type_harvest.formatting.options import (
    BoldMode,
    LinkTarget,
    ListSource,
    RenderOptions,
    normalize_options,
)
from type_harvest.formatting.markers import ListMarker, classify_list_line
from type_harvest.formatting.inline import InlineRenderer, escape_attribute, escape_html
from type_harvest.formatting.blocks import BlockRenderer, ListState, split_paragraphs

__all__ = [
    "FONT_ATTRIBUTES",
    "RENDER_ATTRIBUTES",
    "ExtractionResult",
    "FontGroup",
    "FontName",
    "Hyperlink",
    "ListKind",
    "ListType",
    "Paragraph",
    "RenderedCard",
    "StyleRun",
    "TextBlock",
    "BoldMode",
    "LinkTarget",
    "ListSource",
    "RenderOptions",
    "normalize_options",
    "ListMarker",
    "classify_list_line",
    "InlineRenderer",
    "escape_attribute",
    "escape_html",
    "BlockRenderer",
    "ListState",
    "split_paragraphs",
]
