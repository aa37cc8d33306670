"""Design document export (.json) handler.

The export is a node tree as produced by a design tool plugin:

    {
      "selection": ["12:7"],
      "children": [
        {"id": "12:7", "type": "FRAME", "x": 0, "y": 0, "children": [
          {"id": "12:8", "type": "TEXT", "x": 16, "y": 24,
           "characters": "Hello",
           "styledTextSegments": [
             {"start": 0, "end": 5, "fontWeight": 700,
              "fontName": {"family": "Inter", "style": "Bold"}}
           ]}
        ]}
      ]
    }

Segment keys follow the tool's camel case names (fontWeight, fontName,
hyperlink, listOptions, fontSize, indentation, paragraphSpacing,
listSpacing, paragraphIndent).
"""

import json
import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, Optional

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

TEXT_NODE = "TEXT"


def _number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def _font_name(data: Any) -> Optional[FontName]:
    if not isinstance(data, dict):
        return None
    family = data.get("family")
    style = data.get("style")
    return FontName(
        family=str(family) if family else None,
        style=str(style) if style else None,
    )


def _hyperlink(data: Any) -> Optional[Hyperlink]:
    if not isinstance(data, dict) or not data.get("value"):
        return None
    return Hyperlink(type=str(data.get("type", "URL")), value=str(data["value"]))


def _list_kind(data: Any) -> Optional[ListKind]:
    if not isinstance(data, dict):
        return None
    try:
        return ListKind(str(data.get("type", "")).upper())
    except ValueError:
        return None


def parse_segment(data: Any) -> Optional[StyleRun]:
    """Convert one exported segment to a StyleRun (None if unusable)."""
    if not isinstance(data, dict):
        return None
    start, end = data.get("start"), data.get("end")
    if not isinstance(start, int) or not isinstance(end, int) or end < start:
        return None

    return StyleRun(
        start=start,
        end=end,
        font_weight=data.get("fontWeight"),
        font_name=_font_name(data.get("fontName")),
        hyperlink=_hyperlink(data.get("hyperlink")),
        list_kind=_list_kind(data.get("listOptions")),
        font_size=data.get("fontSize"),
        indentation=int(_number(data.get("indentation"))),
        paragraph_spacing=_number(data.get("paragraphSpacing")),
        list_spacing=_number(data.get("listSpacing")),
        paragraph_indent=_number(data.get("paragraphIndent")),
    )


def iter_text_nodes(node: dict) -> Iterator[dict]:
    """Yield TEXT descendants of a node in depth-first document order."""
    for child in node.get("children") or []:
        if not isinstance(child, dict):
            continue
        if child.get("type") == TEXT_NODE:
            yield child
        yield from iter_text_nodes(child)


def _index_nodes(nodes: Sequence[Any], index: dict[str, dict]) -> None:
    for node in nodes:
        if not isinstance(node, dict):
            continue
        if "id" in node:
            index.setdefault(str(node["id"]), node)
        _index_nodes(node.get("children") or [], index)


def selected_text_nodes(nodes: Sequence[dict]) -> list[dict]:
    """Resolve selected nodes to unique TEXT nodes.

    TEXT nodes are taken as they are; any node with children contributes
    all of its TEXT descendants. Duplicates keep their first position.
    """
    found: dict[str, dict] = {}
    for node in nodes:
        candidates = []
        if node.get("type") == TEXT_NODE:
            candidates.append(node)
        candidates.extend(iter_text_nodes(node))
        for text_node in candidates:
            found.setdefault(str(text_node.get("id")), text_node)
    return list(found.values())


def load_export(
    data: Any, select: Optional[Sequence[str]] = None
) -> InMemorySource:
    """Build an in-memory source from a parsed export.

    Args:
        data: Parsed JSON (a root object with children, or a list of nodes)
        select: Node ids to select; defaults to the export's "selection"
            list, then to every top-level node

    Returns:
        InMemorySource holding the selected TEXT nodes
    """
    if isinstance(data, list):
        data = {"children": data}
    if not isinstance(data, dict):
        raise ValueError("Design export must be a JSON object or list of nodes")

    roots = [n for n in data.get("children") or [] if isinstance(n, dict)]
    index: dict[str, dict] = {}
    _index_nodes(roots, index)

    ids = select if select is not None else data.get("selection")
    if ids is None:
        chosen = roots
    else:
        chosen = []
        for node_id in ids:
            node = index.get(str(node_id))
            if node is None:
                logger.warning("Selected node %s not found in export", node_id)
                continue
            chosen.append(node)

    source = InMemorySource()
    for node in selected_text_nodes(chosen):
        block = TextBlock(
            id=str(node.get("id")),
            characters=str(node.get("characters") or ""),
            x=_number(node.get("x")),
            y=_number(node.get("y")),
            name=str(node.get("name") or ""),
        )
        runs = []
        for segment in node.get("styledTextSegments") or []:
            run = parse_segment(segment)
            if run is None:
                logger.warning("Skipping malformed segment in node %s", block.id)
                continue
            runs.append(run)
        source.add_block(block, runs)

    logger.debug("Loaded %d text node(s) from export", len(source.selection()))
    return source


class JSONHandler(FormatHandler):
    """Handler for design document exports (.json)."""

    def __init__(self, select: Optional[Sequence[str]] = None) -> None:
        self.select = select

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".json",)

    def read(self, path: Path) -> InMemorySource:
        """Load an export; raises ValueError for invalid JSON."""
        data = json.loads(path.read_text(encoding="utf-8"))
        return load_export(data, select=self.select)
