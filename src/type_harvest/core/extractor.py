"""Main extraction orchestrator."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional

from docx.opc.exceptions import PackageNotFoundError

from type_harvest.core.fonts import group_cards_by_font, primary_font_info
from type_harvest.core.ordering import sort_reading_order
from type_harvest.formats import SUPPORTED_EXTENSIONS, get_handler
from type_harvest.formats.base import StyledTextSource
from type_harvest.formats.json_handler import JSONHandler
from type_harvest.formatting.blocks import BlockRenderer
from type_harvest.formatting.ir import (
    FONT_ATTRIBUTES,
    RENDER_ATTRIBUTES,
    ExtractionResult,
    FontGroup,
    RenderedCard,
    TextBlock,
)
from type_harvest.formatting.options import RenderOptions, normalize_options

logger = logging.getLogger(__name__)

EMPTY_SELECTION_MESSAGE = "Select frames/layers containing TEXT and try again."


class ExtractionError(Exception):
    """Error while loading a document for extraction."""

    pass


def text_block_to_html(
    block: TextBlock, source: StyledTextSource, options: RenderOptions
) -> str:
    """Render one text block to an HTML fragment."""
    runs = source.query_runs(block.id, RENDER_ATTRIBUTES)
    return BlockRenderer(block.characters, runs, options).render()


def render_html_list(
    blocks: Sequence[TextBlock],
    source: StyledTextSource,
    options: Any = None,
) -> list[str]:
    """Render blocks to one HTML string each, in reading order."""
    opts = normalize_options(options)
    return [
        text_block_to_html(block, source, opts)
        for block in sort_reading_order(blocks)
    ]


def render_cards(
    blocks: Sequence[TextBlock],
    source: StyledTextSource,
    options: Any = None,
) -> list[RenderedCard]:
    """Render blocks to cards carrying their dominant font, in reading order."""
    opts = normalize_options(options)
    cards: list[RenderedCard] = []
    for block in sort_reading_order(blocks):
        font = primary_font_info(source.query_runs(block.id, FONT_ATTRIBUTES))
        cards.append(
            RenderedCard(
                node_id=block.id,
                html=text_block_to_html(block, source, opts),
                font_family=font.family,
                font_style=font.style,
                is_variable=font.is_variable,
            )
        )
    return cards


def render_font_groups(
    blocks: Sequence[TextBlock],
    source: StyledTextSource,
    options: Any = None,
) -> list[FontGroup]:
    """Render blocks and group the cards by dominant font."""
    return group_cards_by_font(render_cards(blocks, source, options))


class TextExtractor:
    """Orchestrates the extraction pipeline.

    Pipeline:
    1. Resolve the selected text blocks from the host document
    2. Sort them into reading order
    3. Render each block to HTML with the normalized options
    4. Group rendered cards by dominant font
    """

    def __init__(self, options: Any = None) -> None:
        """Initialize the extractor.

        Args:
            options: Loosely typed render options; anything missing or
                invalid falls back to its default
        """
        self.options = normalize_options(options)

    def extract(self, source: StyledTextSource) -> ExtractionResult:
        """Extract HTML items and font groups from a source's selection.

        An empty selection is not an error: the result is empty and
        carries a guidance message instead.
        """
        blocks = source.selection()
        if not blocks:
            logger.info("No text blocks selected")
            return ExtractionResult(message=EMPTY_SELECTION_MESSAGE)

        cards = render_cards(blocks, source, self.options)
        items = [card.html for card in cards]
        groups = group_cards_by_font(cards)

        logger.info(
            "Extracted %d text block(s) into %d font group(s)",
            len(items),
            len(groups),
        )
        return ExtractionResult(items=items, groups=groups)

    def extract_file(
        self, path: Path, select: Optional[Sequence[str]] = None
    ) -> ExtractionResult:
        """Load a document file and extract it.

        Args:
            path: Path to a .json export, .docx or .txt file
            select: Node ids to select (JSON exports only)

        Raises:
            ExtractionError: If the file is missing, unsupported or unreadable
        """
        if not path.exists():
            raise ExtractionError(f"Input file not found: {path}")

        ext = path.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ExtractionError(
                f"Unsupported format: {ext}. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )

        handler_class = get_handler(ext)
        if handler_class is JSONHandler:
            handler = JSONHandler(select=select)
        else:
            if select:
                logger.warning("Node selection is ignored for %s files", ext)
            handler = handler_class()

        try:
            source = handler.read(path)
        except (OSError, ValueError, PackageNotFoundError) as e:
            raise ExtractionError(f"Could not read {path.name}: {e}") from e

        return self.extract(source)
