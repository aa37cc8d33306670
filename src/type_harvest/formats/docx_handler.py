"""Microsoft Word (.docx) file handler."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from docx import Document
from docx.document import Document as DocumentObject
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.hyperlink import Hyperlink as DocxHyperlink
from docx.text.paragraph import Paragraph as DocxParagraph
from docx.text.run import Run

from type_harvest.formats.base import FormatHandler
from type_harvest.formats.memory import InMemorySource
from type_harvest.formatting.ir import (
    FontName,
    Hyperlink,
    ListKind,
    StyleRun,
    TextBlock,
)

logger = logging.getLogger(__name__)

BOLD_WEIGHT = 700
REGULAR_WEIGHT = 400

# Vertical spacing between consecutive blocks, well above the row tolerance
BLOCK_GAP = 100
ROW_GAP = 10
COLUMN_GAP = 100

LIST_STYLE_KINDS = (
    ("List Bullet", ListKind.UNORDERED),
    ("List Number", ListKind.ORDERED),
)


def _style_chain(style) -> Iterator:
    """Yield a style followed by the styles it is based on."""
    while style is not None:
        yield style
        style = style.base_style


def _style_label(bold: bool, italic: bool) -> str:
    if bold and italic:
        return "Bold Italic"
    if bold:
        return "Bold"
    if italic:
        return "Italic"
    return "Regular"


class DOCXHandler(FormatHandler):
    """Handler for Microsoft Word (.docx) files.

    Uses python-docx to read run-level bold, italic, font and hyperlink
    information. Consecutive body paragraphs form one text block; every
    table cell becomes its own block, laid out below the preceding text
    in row and column order.
    """

    def __init__(self) -> None:
        self._numbering = None
        self._default_family: Optional[str] = None

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".docx",)

    def read(self, path: Path) -> InMemorySource:
        """Load a DOCX file into an in-memory source."""
        doc = Document(path)
        source = InMemorySource()
        self._numbering = self._numbering_element(doc)
        self._default_family = self._normal_font(doc)

        y = 0
        pending: list[DocxParagraph] = []
        table_index = 0

        for item in doc.iter_inner_content():
            if isinstance(item, Table):
                if pending:
                    self._add_block(source, f"body-{y}", pending, 0, y)
                    pending = []
                    y += BLOCK_GAP
                y = self._add_table(source, item, table_index, y)
                table_index += 1
            else:
                pending.append(item)

        if pending:
            self._add_block(source, f"body-{y}", pending, 0, y)

        logger.debug("Loaded %d text block(s) from %s", len(source.selection()), path)
        return source

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _add_table(
        self, source: InMemorySource, table: Table, table_index: int, y: float
    ) -> float:
        seen: list = []
        for row_index, row in enumerate(table.rows):
            for col_index, cell in enumerate(row.cells):
                # Merged cells repeat the same underlying element
                if cell._tc in seen:
                    continue
                seen.append(cell._tc)
                self._add_block(
                    source,
                    f"table{table_index}-r{row_index}c{col_index}",
                    cell.paragraphs,
                    col_index * COLUMN_GAP,
                    y + row_index * ROW_GAP,
                )
        return y + len(table.rows) * ROW_GAP + BLOCK_GAP

    def _add_block(
        self,
        source: InMemorySource,
        block_id: str,
        paragraphs: list[DocxParagraph],
        x: float,
        y: float,
    ) -> None:
        characters = ""
        runs: list[StyleRun] = []

        for index, paragraph in enumerate(paragraphs):
            if index:
                runs.append(StyleRun(start=len(characters), end=len(characters) + 1))
                characters += "\n"
            list_kind = self._list_kind(paragraph)
            for text, run_data in self._paragraph_runs(paragraph):
                start = len(characters)
                characters += text
                runs.append(
                    StyleRun(
                        start=start,
                        end=len(characters),
                        font_weight=run_data["weight"],
                        font_name=run_data["font_name"],
                        hyperlink=run_data["hyperlink"],
                        list_kind=list_kind,
                    )
                )

        block = TextBlock(id=block_id, characters=characters, x=x, y=y)
        source.add_block(block, runs)

    def _paragraph_runs(
        self, paragraph: DocxParagraph
    ) -> Iterator[tuple[str, dict]]:
        for item in paragraph.iter_inner_content():
            if isinstance(item, DocxHyperlink):
                link = self._hyperlink(item)
                for run in item.runs:
                    yield from self._run(run, paragraph, link)
            else:
                yield from self._run(item, paragraph, None)

    def _run(
        self,
        run: Run,
        paragraph: DocxParagraph,
        link: Optional[Hyperlink],
    ) -> Iterator[tuple[str, dict]]:
        # Soft line breaks stay inside the paragraph
        text = run.text.replace("\n", "\u2028")
        if not text:
            return
        bold = self._resolve(run, paragraph, "bold")
        italic = self._resolve(run, paragraph, "italic")
        yield text, {
            "weight": BOLD_WEIGHT if bold else REGULAR_WEIGHT,
            "font_name": FontName(
                family=self._family(run, paragraph),
                style=_style_label(bold, italic),
            ),
            "hyperlink": link,
        }

    # -------------------------------------------------------------------------
    # Style resolution
    # -------------------------------------------------------------------------

    def _resolve(self, run: Run, paragraph: DocxParagraph, attr: str) -> bool:
        """Resolve a tri-state font flag through run, character and
        paragraph styles."""
        value = getattr(run.font, attr)
        if value is not None:
            return value
        for style in (run.style, paragraph.style):
            for inherited in _style_chain(style):
                value = getattr(inherited.font, attr)
                if value is not None:
                    return value
        return False

    def _family(self, run: Run, paragraph: DocxParagraph) -> Optional[str]:
        if run.font.name:
            return run.font.name
        for style in _style_chain(paragraph.style):
            if style.font.name:
                return style.font.name
        return self._default_family

    def _normal_font(self, doc: DocumentObject) -> Optional[str]:
        try:
            return doc.styles["Normal"].font.name
        except KeyError:
            return None

    def _hyperlink(self, link: DocxHyperlink) -> Optional[Hyperlink]:
        if link.address:
            return Hyperlink(type="URL", value=link.url)
        if link.fragment:
            return Hyperlink(type="NODE", value=link.fragment)
        return None

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def _numbering_element(self, doc: DocumentObject):
        try:
            return doc.part.numbering_part.element
        except (KeyError, NotImplementedError):
            return None

    def _list_kind(self, paragraph: DocxParagraph) -> Optional[ListKind]:
        for style in _style_chain(paragraph.style):
            for prefix, kind in LIST_STYLE_KINDS:
                if style.name and style.name.startswith(prefix):
                    return kind

        num_pr = paragraph._p.find(f"{qn('w:pPr')}/{qn('w:numPr')}")
        if num_pr is None:
            return None
        return self._numbering_kind(num_pr)

    def _numbering_kind(self, num_pr) -> ListKind:
        num_id = self._child_val(num_pr, "w:numId")
        level = self._child_val(num_pr, "w:ilvl") or "0"
        if num_id is None or num_id == "0":
            return ListKind.NONE
        if self._numbering is None:
            return ListKind.ORDERED

        abstract_ids = self._numbering.xpath(
            f'./w:num[@w:numId="{num_id}"]/w:abstractNumId/@w:val'
        )
        if not abstract_ids:
            return ListKind.ORDERED
        formats = self._numbering.xpath(
            f'./w:abstractNum[@w:abstractNumId="{abstract_ids[0]}"]'
            f'/w:lvl[@w:ilvl="{level}"]/w:numFmt/@w:val'
        )
        if formats and formats[0] == "bullet":
            return ListKind.UNORDERED
        if formats and formats[0] == "none":
            return ListKind.NONE
        return ListKind.ORDERED

    @staticmethod
    def _child_val(element, tag: str) -> Optional[str]:
        child = element.find(qn(tag))
        if child is None:
            return None
        return child.get(qn("w:val"))
