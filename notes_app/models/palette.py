"""
Note Colour Palette.

Notes store a colour key ("Note 1" .. "Note 6") rather than a colour
value, so the palette can change without touching stored rows.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol

PALETTE: dict[str, str] = {
    "Note 1": "#F7D26E",
    "Note 2": "#F4A6A0",
    "Note 3": "#A8D8B9",
    "Note 4": "#9CC7F0",
    "Note 5": "#C9B3F2",
    "Note 6": "#F5C28B",
}

# The in-editor picker offers the first five; random assignment uses all six.
PICKER_KEYS: tuple[str, ...] = tuple(PALETTE)[:5]

FALLBACK_COLOR = "#D9D9D9"


class ChoiceSource(Protocol):
    """Anything with random.Random's choice()."""

    def choice(self, seq: Sequence[str]) -> str: ...


def pick_color(palette: Mapping[str, str], rng: ChoiceSource) -> str:
    """
    Pick a colour key uniformly at random.

    Args:
        palette: Mapping of colour keys to hex values
        rng: Random source, injected so callers can make the pick deterministic

    Returns:
        One key of the palette

    Raises:
        ValueError: If the palette is empty
    """
    keys = list(palette)
    if not keys:
        raise ValueError("Cannot pick a colour from an empty palette")
    return rng.choice(keys)


def color_for(key: str, palette: Mapping[str, str] = PALETTE) -> str:
    """Hex colour for a stored key, or the fallback for unknown keys."""
    return palette.get(key, FALLBACK_COLOR)


def is_palette_key(key: str, palette: Mapping[str, str] = PALETTE) -> bool:
    return key in palette
