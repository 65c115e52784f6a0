"""Pixel compositor that lays logo panels out on an RGBA canvas."""

from __future__ import annotations

import numpy as np

from .colors import decode_color
from .errors import InvalidCharacterIndex, ShapeError
from .models import Character, LogoDescription, RenderedImage, RenderOptions
from .shapes import (
    CHARACTER_COUNT,
    PANEL_OFFSETS,
    PANEL_SIZE,
    STRIP_HEIGHT,
    STRIP_WIDTH,
    character_width,
    crop_offset,
    strip_offset,
)


def render(description: LogoDescription, options: RenderOptions | None = None) -> RenderedImage:
    """Render the full strip or a single character.

    Drawing happens on an unscaled canvas which is then upscaled with
    nearest-neighbour block replication, so every logical pixel becomes an
    identical ``pixel_size`` x ``pixel_size`` block. Background stays
    ``(0, 0, 0, 0)``.
    """
    options = options or RenderOptions()
    colors: dict[str, tuple[int, int, int]] = {}

    if options.character is None:
        if len(description) > CHARACTER_COUNT:
            raise ShapeError(f"logo has {len(description)} characters, at most {CHARACTER_COUNT} can be placed")
        canvas = _blank(STRIP_WIDTH, STRIP_HEIGHT)
        for index, chr_ in enumerate(description.characters):
            _write_character(canvas, chr_, index, strip_offset(index), 0, colors)
    else:
        index = options.character
        if index < 0 or index >= CHARACTER_COUNT or index >= len(description):
            raise InvalidCharacterIndex(index, len(description))
        letter_y = crop_offset(index, options.crop)
        canvas = _blank(character_width(index), STRIP_HEIGHT + letter_y)
        _write_character(canvas, description.characters[index], index, 0, letter_y, colors)

    return _to_image(canvas, options.pixel_size)


def _blank(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, 4), dtype=np.uint8)


def _write_character(
    canvas: np.ndarray,
    chr_: Character,
    index: int,
    letter_x: int,
    letter_y: int,
    colors: dict[str, tuple[int, int, int]],
) -> None:
    offsets = PANEL_OFFSETS[index]
    if len(chr_) > len(offsets):
        raise ShapeError(f"character {index} has {len(chr_)} panels, expected at most {len(offsets)}")

    height, width = canvas.shape[:2]
    for (base_x, base_y), panel in zip(offsets, chr_):
        for k, token in enumerate(panel):
            x = base_x + k % PANEL_SIZE + letter_x
            y = base_y + k // PANEL_SIZE + letter_y
            # Pixels outside the canvas are dropped rather than wrapped.
            if not (0 <= x < width and 0 <= y < height):
                continue
            rgb = colors.get(token)
            if rgb is None:
                rgb = colors[token] = decode_color(token)
            canvas[y, x] = (*rgb, 255)


def _to_image(canvas: np.ndarray, pixel_size: int) -> RenderedImage:
    if pixel_size > 1:
        canvas = canvas.repeat(pixel_size, axis=0).repeat(pixel_size, axis=1)
    height, width = canvas.shape[:2]
    return RenderedImage(width=width, height=height, pixels=canvas.tobytes())
