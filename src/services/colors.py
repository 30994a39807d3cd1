"""
Category color assignment.

Colors are handed out in order of first appearance, cycling through the
palette once it runs out. The same key keeps its color for as long as the
caller keeps threading the same map back in. Rebuilding a map from scratch
with keys arriving in a different order can produce different colors.
"""

from typing import Hashable, Iterable, Mapping, Sequence

from core.config import FALLBACK_COLOR
from core.errors import InvalidConfiguration


def validate_palette(palette: Sequence[str]) -> list[str]:
    """Return the palette as a list, raising InvalidConfiguration if empty."""
    colors = list(palette or [])
    if not colors:
        raise InvalidConfiguration("Color palette must contain at least one color")
    return colors


def color_for(
    key: Hashable | None,
    existing_map: Mapping[Hashable, str],
    palette: Sequence[str],
) -> tuple[str, dict[Hashable, str]]:
    """
    Color for a category key plus the (possibly extended) color map.

    The input map is never modified. Events without a category key get the
    fallback color and nothing is recorded for them.
    """
    colors = validate_palette(palette)
    updated = dict(existing_map)

    if key is None:
        return FALLBACK_COLOR, updated
    if key in updated:
        return updated[key], updated

    color = colors[len(updated) % len(colors)]
    updated[key] = color
    return color, updated


def assign_colors(
    keys: Iterable[Hashable | None],
    existing_map: Mapping[Hashable, str],
    palette: Sequence[str],
) -> dict[Hashable, str]:
    """Fold color_for over a sequence of keys."""
    color_map = dict(existing_map)
    for key in keys:
        _, color_map = color_for(key, color_map, palette)
    return color_map
