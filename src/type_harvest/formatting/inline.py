"""Inline rendering of styled runs to HTML."""

from collections.abc import Sequence

from type_harvest.formatting.ir import StyleRun
from type_harvest.formatting.options import BoldMode, LinkTarget, RenderOptions


LINE_SEPARATOR = "\u2028"
BREAK = "<br>"


def escape_html(text: str) -> str:
    """Escape &, < and > (ampersand first so entities are not re-escaped)."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(value: str) -> str:
    """Escape a value for a double-quoted attribute."""
    return escape_html(value).replace('"', "&quot;")


def split_edges(text: str) -> tuple[str, str, str]:
    """Split text into (leading whitespace, core, trailing whitespace)."""
    core = text.strip()
    if not core:
        return text, "", ""
    lead = text[: len(text) - len(text.lstrip())]
    trail = text[len(text.rstrip()) :]
    return lead, core, trail


class InlineRenderer:
    """Render character ranges of one block using its style runs.

    Wrapping order is fixed: emphasis innermost, then bold, then link.
    Leading and trailing whitespace of each run chunk stays outside the
    inserted tags, and whitespace-only chunks are never wrapped.
    """

    def __init__(
        self,
        characters: str,
        runs: Sequence[StyleRun],
        options: RenderOptions,
    ) -> None:
        self.characters = characters
        self.runs = runs
        self.options = options

    def render(self, start: int, end: int) -> str:
        """Render [start, end) to an HTML fragment."""
        parts: list[str] = []

        for run in self.runs:
            s, e = run.overlap(start, end)
            if e <= s:
                continue
            parts.append(self.render_chunk(self.characters[s:e], run))

        return "".join(parts).replace(LINE_SEPARATOR, BREAK)

    def render_chunk(self, text: str, run: StyleRun) -> str:
        """Escape one run's text and wrap it according to the run's style."""
        lead, core, trail = split_edges(text)
        if not core:
            return escape_html(text)

        chunk = escape_html(core)

        if run.is_italic and self.options.italic:
            chunk = f"<em>{chunk}</em>"

        if run.is_bold and self.options.bold != BoldMode.NONE:
            if self.options.bold == BoldMode.STRONG:
                chunk = f"<strong>{chunk}</strong>"
            else:
                chunk = f'<span class="bold">{chunk}</span>'

        href = run.href
        if href:
            chunk = self._link(chunk, href)

        return f"{escape_html(lead)}{chunk}{escape_html(trail)}"

    def _link(self, chunk: str, href: str) -> str:
        escaped = escape_attribute(href)
        if self.options.links == LinkTarget.NEW_TAB:
            return f'<a href="{escaped}" target="_blank" rel="noopener">{chunk}</a>'
        return f'<a href="{escaped}">{chunk}</a>'
