"""Paragraph and list structure for one text block.

A block is split into paragraphs on line breaks. Each paragraph is either
blank, a list item, or plain text, and a small state machine tracks which
list container (if any) is open while the HTML fragment is emitted.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Optional

from type_harvest.formatting.inline import BREAK, InlineRenderer
from type_harvest.formatting.ir import ListType, Paragraph, StyleRun
from type_harvest.formatting.markers import classify_list_line
from type_harvest.formatting.options import ListSource, RenderOptions

logger = logging.getLogger(__name__)

# Tags after which plain text starts a new line without an explicit <br>
BLOCK_CLOSERS = ("</ul>", "</ol>", "</p>")


class ListState(Enum):
    NO_LIST = "none"
    IN_UNORDERED = "ul"
    IN_ORDERED = "ol"


# (state, classified list type) -> (closing tag, opening tag, next state).
# A None list type means a blank line, a plain line or the end of the block.
TRANSITIONS: dict[
    tuple[ListState, Optional[ListType]], tuple[str, str, ListState]
] = {
    (ListState.NO_LIST, None): ("", "", ListState.NO_LIST),
    (ListState.NO_LIST, ListType.UL): ("", "<ul>", ListState.IN_UNORDERED),
    (ListState.NO_LIST, ListType.OL): ("", "<ol>", ListState.IN_ORDERED),
    (ListState.IN_UNORDERED, None): ("</ul>", "", ListState.NO_LIST),
    (ListState.IN_UNORDERED, ListType.UL): ("", "", ListState.IN_UNORDERED),
    (ListState.IN_UNORDERED, ListType.OL): ("</ul>", "<ol>", ListState.IN_ORDERED),
    (ListState.IN_ORDERED, None): ("</ol>", "", ListState.NO_LIST),
    (ListState.IN_ORDERED, ListType.OL): ("", "", ListState.IN_ORDERED),
    (ListState.IN_ORDERED, ListType.UL): ("</ol>", "<ul>", ListState.IN_UNORDERED),
}


def split_paragraphs(characters: str) -> list[Paragraph]:
    """Split a character buffer into paragraphs on "\\n".

    The last paragraph always runs to the end of the buffer, so a trailing
    line break yields a final empty paragraph.
    """
    paragraphs: list[Paragraph] = []
    start = 0
    for index, char in enumerate(characters):
        if char == "\n":
            paragraphs.append(Paragraph(start, index, characters[start:index]))
            start = index + 1
    paragraphs.append(Paragraph(start, len(characters), characters[start:]))
    return paragraphs


class BlockRenderer:
    """Render one block's characters and style runs to an HTML fragment."""

    def __init__(
        self,
        characters: str,
        runs: Sequence[StyleRun],
        options: RenderOptions,
    ) -> None:
        self.characters = characters
        self.runs = runs
        self.options = options
        self.inline = InlineRenderer(characters, runs, options)

        self.state = ListState.NO_LIST
        self._parts: list[str] = []
        self._buffer: list[str] = []

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def native_list_type(self, paragraph: Paragraph) -> Optional[ListType]:
        """First native list type among runs overlapping the paragraph."""
        for run in self.runs:
            if run.end <= paragraph.start or run.start >= paragraph.end:
                continue
            if run.list_type:
                return run.list_type
        return None

    def list_type(self, paragraph: Paragraph) -> Optional[ListType]:
        """Decide the list type of a paragraph according to the options."""
        if self.options.lists == ListSource.NATIVE:
            native = self.native_list_type(paragraph)
            if native:
                return native

        if paragraph.is_blank:
            return None
        return classify_list_line(paragraph.text).type

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    @property
    def html(self) -> str:
        return "".join(self._parts)

    def _emit(self, fragment: str) -> None:
        if fragment:
            self._parts.append(fragment)

    def _ends_with_break(self) -> bool:
        if not self._parts:
            return True
        last = self._parts[-1]
        return last.endswith(BREAK) or last.endswith(BLOCK_CLOSERS)

    def _transition(self, list_type: Optional[ListType]) -> None:
        closing, opening, next_state = TRANSITIONS[(self.state, list_type)]
        self._emit(closing)
        self._emit(opening)
        self.state = next_state

    def _flush_paragraph(self) -> None:
        if not self._buffer:
            return
        self._emit(f"<p>{BREAK.join(self._buffer)}</p>")
        self._buffer = []

    # -------------------------------------------------------------------------
    # Paragraph handlers
    # -------------------------------------------------------------------------

    def _blank(self) -> None:
        self._flush_paragraph()
        self._transition(None)
        if self.options.join_lines and not self.options.wrap_paragraphs:
            self._emit(BREAK)

    def _list_item(self, paragraph: Paragraph, list_type: ListType) -> None:
        self._flush_paragraph()
        self._transition(list_type)
        strip = classify_list_line(paragraph.text).strip
        rendered = self.inline.render(paragraph.start + strip, paragraph.end)
        self._emit(f"<li>{rendered}</li>")

    def _plain(self, paragraph: Paragraph) -> None:
        self._transition(None)
        rendered = self.inline.render(paragraph.start, paragraph.end)

        if self.options.wrap_paragraphs:
            self._buffer.append(rendered)
        elif self.options.join_lines:
            if not self._ends_with_break():
                self._emit(BREAK)
            self._emit(rendered)
        else:
            self._emit(rendered)

    def render(self) -> str:
        """Render every paragraph and return the HTML fragment.

        A block with no visible text renders as an empty string.
        """
        paragraphs = split_paragraphs(self.characters)
        if all(paragraph.is_blank for paragraph in paragraphs):
            return ""

        self.state = ListState.NO_LIST
        self._parts = []
        self._buffer = []

        for paragraph in paragraphs:
            if paragraph.is_blank:
                self._blank()
                continue

            list_type = self.list_type(paragraph)
            if list_type:
                self._list_item(paragraph, list_type)
            else:
                self._plain(paragraph)

        self._transition(None)
        self._flush_paragraph()

        html = self.html
        logger.debug(
            "Rendered %d characters into %d HTML characters",
            len(self.characters),
            len(html),
        )
        return html
