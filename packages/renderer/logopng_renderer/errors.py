"""Errors raised while composing or encoding a logo image."""

from __future__ import annotations


class RenderError(Exception):
    pass


class InvalidCharacterIndex(RenderError, ValueError):
    def __init__(self, index: int, available: int) -> None:
        super().__init__(f"{index} is not a valid character (logo has {available})")
        self.index = index
        self.available = available


class ColorParseError(RenderError, ValueError):
    def __init__(self, token: str) -> None:
        super().__init__(f"invalid hex color token: {token!r}")
        self.token = token


class ShapeError(RenderError, ValueError):
    """Description does not fit the fixed character coordinate tables."""


class EncodeError(RenderError):
    pass
