"""In-memory host document."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Optional

from type_harvest.formats.base import StyledTextSource
from type_harvest.formatting.ir import StyleRun, TextBlock

logger = logging.getLogger(__name__)

# Host attribute name -> StyleRun fields it populates
ATTRIBUTE_FIELDS: dict[str, tuple[str, ...]] = {
    "font_weight": ("font_weight",),
    "font_name": ("font_name",),
    "hyperlink": ("hyperlink",),
    "list_options": ("list_kind",),
    "font_size": ("font_size",),
    "indentation": ("indentation",),
    "paragraph_spacing": ("paragraph_spacing",),
    "list_spacing": ("list_spacing",),
    "paragraph_indent": ("paragraph_indent",),
}

_ABSENT = StyleRun(start=0, end=0)


def _requested_fields(attributes: Iterable[str]) -> set[str]:
    fields: set[str] = set()
    for name in attributes:
        if name not in ATTRIBUTE_FIELDS:
            logger.debug("Ignoring unknown style attribute %r", name)
            continue
        fields.update(ATTRIBUTE_FIELDS[name])
    return fields


def _project(run: StyleRun, fields: set[str]) -> StyleRun:
    """Reset every attribute not in fields to its absent value."""
    dropped = {
        name: getattr(_ABSENT, name)
        for names in ATTRIBUTE_FIELDS.values()
        for name in names
        if name not in fields
    }
    return replace(run, **dropped)


def _same_style(a: StyleRun, b: StyleRun) -> bool:
    return replace(a, start=0, end=0) == replace(b, start=0, end=0)


class InMemorySource(StyledTextSource):
    """A host document held entirely in memory.

    Runs are stored with every attribute; queries project them onto the
    requested attributes and merge neighbours that become identical, the
    way a design tool reports styled segments.
    """

    def __init__(
        self,
        blocks: Sequence[TextBlock] = (),
        runs: Optional[Mapping[str, Sequence[StyleRun]]] = None,
    ) -> None:
        self._blocks: dict[str, TextBlock] = {}
        for block in blocks:
            self._blocks.setdefault(block.id, block)
        self._runs: dict[str, list[StyleRun]] = {
            block_id: sorted(block_runs, key=lambda r: r.start)
            for block_id, block_runs in (runs or {}).items()
        }

    def add_block(self, block: TextBlock, runs: Sequence[StyleRun] = ()) -> None:
        """Add a block (ignored if the id is already present)."""
        if block.id in self._blocks:
            return
        self._blocks[block.id] = block
        if runs:
            self._runs[block.id] = sorted(runs, key=lambda r: r.start)

    def get_block(self, block_id: str) -> TextBlock:
        return self._blocks[block_id]

    def selection(self) -> list[TextBlock]:
        return list(self._blocks.values())

    def query_runs(
        self, block_id: str, attributes: Sequence[str]
    ) -> list[StyleRun]:
        block = self._blocks[block_id]
        runs = self._runs.get(block_id)
        if not runs:
            if not block.characters:
                return []
            runs = [StyleRun(start=0, end=len(block.characters))]

        fields = _requested_fields(attributes)
        merged: list[StyleRun] = []
        for run in runs:
            projected = _project(run, fields)
            if merged and merged[-1].end == projected.start and _same_style(
                merged[-1], projected
            ):
                merged[-1] = replace(merged[-1], end=projected.end)
            else:
                merged.append(projected)
        return merged
