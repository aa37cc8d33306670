"""Core extraction logic for Type Harvest."""

from type_harvest.core.extractor import (
    EMPTY_SELECTION_MESSAGE,
    ExtractionError,
    TextExtractor,
    render_cards,
    render_font_groups,
    render_html_list,
    text_block_to_html,
)
from type_harvest.core.fonts import FontInfo, group_cards_by_font, primary_font_info
from type_harvest.core.ordering import ROW_TOLERANCE, assign_rows, sort_reading_order

__all__ = [
    "EMPTY_SELECTION_MESSAGE",
    "ExtractionError",
    "TextExtractor",
    "render_cards",
    "render_font_groups",
    "render_html_list",
    "text_block_to_html",
    "FontInfo",
    "group_cards_by_font",
    "primary_font_info",
    "ROW_TOLERANCE",
    "assign_rows",
    "sort_reading_order",
]
