"""Fixed panel placement tables for the seven logo characters."""

from __future__ import annotations

PANEL_SIZE = 8
STRIP_WIDTH = 152
STRIP_HEIGHT = 32

# (x, y) of each 8x8 panel's top-left corner, per character.
PANEL_OFFSETS: tuple[tuple[tuple[int, int], ...], ...] = (
    ((0, 0), (0, 16), (0, 24), (0, 32)),
    ((0, 0), (0, 8), (8, 8), (0, 16), (0, 24), (8, 24), (16, 24)),
    ((0, 8), (8, 8), (16, 8), (0, 16), (16, 16), (0, 24), (8, 24), (16, 24)),
    ((0, 8), (8, 8), (16, 8), (0, 16), (0, 24)),
    ((8, 8), (16, 8), (0, 16), (16, 16), (0, 24), (8, 24), (16, 24)),
    ((0, 0), (0, 8), (8, 8), (0, 16), (0, 24), (8, 24), (16, 24)),
    ((0, 8), (8, 8), (16, 8), (0, 16), (16, 16), (0, 24), (8, 24)),
)

CHARACTER_COUNT = len(PANEL_OFFSETS)

# Characters whose glyph reaches the top row; cropping them would cut pixels.
UNCROPPED = frozenset({0, 1, 5})


def strip_offset(index: int) -> int:
    return 0 if index == 0 else (index * 3 - 2) * PANEL_SIZE


def character_width(index: int) -> int:
    return PANEL_SIZE if index == 0 else PANEL_SIZE * 3


def crop_offset(index: int, crop: bool) -> int:
    return -PANEL_SIZE if crop and index not in UNCROPPED else 0
