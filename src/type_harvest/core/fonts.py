"""Dominant font detection and grouping of rendered cards."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from type_harvest.formatting.ir import (
    UNKNOWN_FAMILY,
    FontGroup,
    RenderedCard,
    StyleRun,
)

# Style labels such as "Variable", "Inter Display opsz=32" or "wght 450"
VARIABLE_PATTERN = re.compile(r"variable|opsz|wdth|wght", re.IGNORECASE)


@dataclass(frozen=True)
class FontInfo:
    """Representative font of a text block."""

    family: str = UNKNOWN_FAMILY
    style: str = ""
    is_variable: bool = False


def is_variable_style(style: str) -> bool:
    return bool(VARIABLE_PATTERN.search(style))


def primary_font_info(runs: Sequence[StyleRun]) -> FontInfo:
    """Find the family covering the most characters.

    Character counts accumulate per family while scanning; a family takes
    the lead only when its running total beats the current best, so ties
    go to the family that got there first. The style label comes from the
    run that gave the leader its lead.
    """
    totals: dict[str, int] = {}
    best = FontInfo()
    best_len = -1

    for run in runs:
        family = run.family
        total = totals.get(family, 0) + run.length
        totals[family] = total

        if total > best_len:
            best_len = total
            best = FontInfo(
                family=family,
                style=run.style_label,
                is_variable=is_variable_style(run.style_label),
            )

    return best


def group_cards_by_font(cards: Iterable[RenderedCard]) -> list[FontGroup]:
    """Group cards by (family, variable flag).

    Groups are sorted by family name (case-insensitive), with the variable
    group first when a family has both. Cards keep their input order.
    """
    groups: dict[tuple[str, bool], FontGroup] = {}
    for card in cards:
        key = (card.font_family, card.is_variable)
        if key not in groups:
            groups[key] = FontGroup(
                font_family=card.font_family, is_variable=card.is_variable
            )
        groups[key].items.append(card)

    return sorted(
        groups.values(),
        key=lambda g: (g.font_family.casefold(), not g.is_variable),
    )
