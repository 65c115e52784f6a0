"""Renderer package for logo pixel composition and PNG encoding."""

from .colors import FALLBACK_GRAY, decode_color
from .compositor import render
from .errors import ColorParseError, EncodeError, InvalidCharacterIndex, RenderError, ShapeError
from .models import LogoDescription, RenderedImage, RenderOptions
from .png import encode_image, encode_png, render_png
from .shapes import CHARACTER_COUNT, PANEL_OFFSETS

__all__ = [
    "CHARACTER_COUNT",
    "ColorParseError",
    "EncodeError",
    "FALLBACK_GRAY",
    "InvalidCharacterIndex",
    "LogoDescription",
    "PANEL_OFFSETS",
    "RenderError",
    "RenderOptions",
    "RenderedImage",
    "ShapeError",
    "decode_color",
    "encode_image",
    "encode_png",
    "render",
    "render_png",
]
