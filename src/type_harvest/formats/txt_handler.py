"""Plain text file handler."""

from pathlib import Path

from type_harvest.formats.base import FormatHandler
from type_harvest.formats.memory import InMemorySource
from type_harvest.formatting.ir import FontName, StyleRun, TextBlock

BOLD_STYLE = "Bold"
ITALIC_STYLE = "Italic"
BOLD_ITALIC_STYLE = "Bold Italic"
REGULAR_STYLE = "Regular"

MARKERS = ("***", "**", "*")
MARKER_STYLES = {
    "***": BOLD_ITALIC_STYLE,
    "**": BOLD_STYLE,
    "*": ITALIC_STYLE,
}


def _opens_at(text: str, pos: int, marker: str) -> bool:
    """An emphasis marker opens only when followed by non-space text."""
    if not text.startswith(marker, pos):
        return False
    after = pos + len(marker)
    return after < len(text) and not text[after].isspace() and text[after] != "*"


def tokenize_emphasis(line: str) -> list[tuple[str, str]]:
    """Tokenize one line into (text, style label) pairs.

    Handles:
    - ***bold italic***
    - **bold**
    - *italic*
    - plain text (including "* " bullet markers and unmatched asterisks)
    """
    segments: list[tuple[str, str]] = []
    plain_start = 0
    pos = 0

    while pos < len(line):
        for marker in MARKERS:
            if not _opens_at(line, pos, marker):
                continue
            end = line.find(marker, pos + len(marker))
            if end == -1:
                continue
            if pos > plain_start:
                segments.append((line[plain_start:pos], REGULAR_STYLE))
            segments.append(
                (line[pos + len(marker) : end], MARKER_STYLES[marker])
            )
            pos = end + len(marker)
            plain_start = pos
            break
        else:
            pos += 1

    if plain_start < len(line):
        segments.append((line[plain_start:], REGULAR_STYLE))
    return segments


def parse_emphasis(text: str) -> tuple[str, list[StyleRun]]:
    """Strip emphasis markup and return (characters, runs)."""
    characters: list[str] = []
    runs: list[StyleRun] = []
    offset = 0

    lines = text.split("\n")
    for index, line in enumerate(lines):
        if index < len(lines) - 1:
            line_segments = tokenize_emphasis(line) + [("\n", REGULAR_STYLE)]
        else:
            line_segments = tokenize_emphasis(line)

        for segment, style in line_segments:
            if not segment:
                continue
            weight = 700 if style in (BOLD_STYLE, BOLD_ITALIC_STYLE) else 400
            runs.append(
                StyleRun(
                    start=offset,
                    end=offset + len(segment),
                    font_weight=weight,
                    font_name=FontName(style=style),
                )
            )
            characters.append(segment)
            offset += len(segment)

    return "".join(characters), runs


class TXTHandler(FormatHandler):
    """Handler for plain text (.txt) files.

    The whole file becomes a single text block. Markdown-style emphasis
    is turned into styled runs:
    - **bold** for bold text
    - *italic* for italic text
    - ***both*** for bold italic text
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt",)

    def read(self, path: Path) -> InMemorySource:
        """Read a text file into a one-block source."""
        raw = path.read_text(encoding="utf-8").replace("\r\n", "\n")
        characters, runs = parse_emphasis(raw)
        block = TextBlock(id=path.stem, characters=characters, name=path.name)
        return InMemorySource([block], {block.id: runs})
