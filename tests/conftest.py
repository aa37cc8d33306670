"""Pytest fixtures for Type Harvest tests."""

import json
from pathlib import Path
from typing import Callable, Optional

import pytest

from type_harvest.formats.memory import InMemorySource
from type_harvest.formatting.ir import (
    FontName,
    Hyperlink,
    ListKind,
    StyleRun,
    TextBlock,
)
from type_harvest.formatting.options import RenderOptions


def styled_run(
    start: int,
    end: int,
    weight: float = 400,
    family: Optional[str] = "Inter",
    style: Optional[str] = "Regular",
    href: Optional[str] = None,
    list_kind: Optional[ListKind] = None,
) -> StyleRun:
    return StyleRun(
        start=start,
        end=end,
        font_weight=weight,
        font_name=FontName(family=family, style=style),
        hyperlink=Hyperlink(type="URL", value=href) if href else None,
        list_kind=list_kind,
    )


@pytest.fixture
def run() -> Callable[..., StyleRun]:
    """Factory for style runs with sensible defaults."""
    return styled_run


@pytest.fixture
def plain_source() -> Callable[..., InMemorySource]:
    """Factory for a one-block source with a single regular run."""

    def build(characters: str, block_id: str = "1:1") -> InMemorySource:
        block = TextBlock(id=block_id, characters=characters)
        return InMemorySource(
            [block], {block_id: [styled_run(0, len(characters))]}
        )

    return build


@pytest.fixture
def pattern_options() -> RenderOptions:
    """Text-marker lists, <br> joined lines, no paragraphs."""
    return RenderOptions(lists="pattern", wrap_paragraphs=False, join_lines=True)


@pytest.fixture
def sample_export() -> dict:
    """A small design export with a frame, nested text and a loose text node."""
    return {
        "selection": ["10:1", "20:1"],
        "children": [
            {
                "id": "10:1",
                "type": "FRAME",
                "name": "Card",
                "x": 0,
                "y": 0,
                "children": [
                    {
                        "id": "10:2",
                        "type": "TEXT",
                        "name": "Body",
                        "x": 0,
                        "y": 40,
                        "characters": "Read the docs",
                        "styledTextSegments": [
                            {
                                "start": 0,
                                "end": 9,
                                "fontWeight": 400,
                                "fontName": {"family": "Inter", "style": "Regular"},
                            },
                            {
                                "start": 9,
                                "end": 13,
                                "fontWeight": 400,
                                "fontName": {"family": "Inter", "style": "Regular"},
                                "hyperlink": {"type": "URL", "value": "https://x.com/a&b"},
                            },
                        ],
                    },
                    {
                        "id": "10:3",
                        "type": "TEXT",
                        "name": "Title",
                        "x": 0,
                        "y": 0,
                        "characters": "Welcome",
                        "styledTextSegments": [
                            {
                                "start": 0,
                                "end": 7,
                                "fontWeight": 700,
                                "fontName": {"family": "Roboto", "style": "Bold"},
                            }
                        ],
                    },
                ],
            },
            {
                "id": "20:1",
                "type": "TEXT",
                "name": "Steps",
                "x": 200,
                "y": 2,
                "characters": "One\nTwo",
                "styledTextSegments": [
                    {
                        "start": 0,
                        "end": 7,
                        "fontWeight": 400,
                        "fontName": {"family": "Inter", "style": "Variable"},
                        "listOptions": {"type": "ORDERED"},
                    }
                ],
            },
            {
                "id": "30:1",
                "type": "TEXT",
                "name": "Unselected",
                "x": 0,
                "y": 500,
                "characters": "Hidden",
            },
        ],
    }


@pytest.fixture
def export_file(tmp_path: Path, sample_export: dict) -> Path:
    """Write the sample export to a temporary .json file."""
    file_path = tmp_path / "export.json"
    file_path.write_text(json.dumps(sample_export), encoding="utf-8")
    return file_path


@pytest.fixture
def tmp_text_file(tmp_path: Path) -> Path:
    """Create a temporary text file with emphasis and a list."""
    file_path = tmp_path / "notes.txt"
    file_path.write_text("Hello **world**\n- one\n- two", encoding="utf-8")
    return file_path
