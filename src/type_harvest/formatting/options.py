"""Render options and their normalization.

Options arrive loosely typed (from a panel, a CLI, or a JSON payload).
``normalize_options`` always returns a complete ``RenderOptions``: any
field that is missing or invalid falls back to its own default.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)


class BoldMode(str, Enum):
    STRONG = "strong"
    SPAN = "span"
    NONE = "none"


class LinkTarget(str, Enum):
    SAME_TAB = "same-tab"
    NEW_TAB = "new-tab"


class ListSource(str, Enum):
    """Where list structure comes from.

    PATTERN: only text markers ("- item", "1. item")
    NATIVE: host list attributes, falling back to text markers
    """

    PATTERN = "pattern"
    NATIVE = "native"


class RenderOptions(BaseModel):
    """Closed set of options consumed by the renderers."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    bold: BoldMode = BoldMode.SPAN
    italic: bool = True
    wrap_paragraphs: bool = False
    join_lines: bool = True
    links: LinkTarget = LinkTarget.NEW_TAB
    lists: ListSource = ListSource.NATIVE

    @field_validator("*", mode="wrap")
    @classmethod
    def default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        """Replace an invalid value with the field default."""
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].default


# Keys and values used by the original panel payload
_LEGACY_LINKS = {"same": LinkTarget.SAME_TAB, "newtab": LinkTarget.NEW_TAB}
_LEGACY_LISTS = {"regex": ListSource.PATTERN, "figma": ListSource.NATIVE}


def _translate_legacy(raw: Mapping) -> dict[str, Any]:
    """Map legacy panel keys onto RenderOptions fields."""
    data: dict[str, Any] = {}

    paras = raw.get("paras")
    if paras == "p":
        data["wrap_paragraphs"] = True
    elif paras == "br":
        data["wrap_paragraphs"] = False
        data["join_lines"] = True

    links = raw.get("links")
    if isinstance(links, str) and links in _LEGACY_LINKS:
        data["links"] = _LEGACY_LINKS[links]

    lists = raw.get("lists")
    if isinstance(lists, str) and lists in _LEGACY_LISTS:
        data["lists"] = _LEGACY_LISTS[lists]

    return data


def _is_legacy_value(name: str, value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return (name == "links" and value in _LEGACY_LINKS) or (
        name == "lists" and value in _LEGACY_LISTS
    )


def normalize_options(raw: Any = None) -> RenderOptions:
    """Build a complete RenderOptions from an arbitrary input.

    Args:
        raw: A mapping of option values, a RenderOptions, or anything else
            (treated as "no options")

    Returns:
        RenderOptions with every field defined
    """
    if isinstance(raw, RenderOptions):
        return raw
    if not isinstance(raw, Mapping):
        return RenderOptions()

    data = _translate_legacy(raw)
    for name in RenderOptions.model_fields:
        value = raw.get(name)
        if value is None or _is_legacy_value(name, value):
            continue
        data[name] = value

    return RenderOptions.model_validate(data)
