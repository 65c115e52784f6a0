"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Panel = tuple[str, ...]
Character = tuple[Panel, ...]


@dataclass(frozen=True)
class LogoDescription:
    """Character -> panel -> color token grid as served by the logo API."""

    characters: tuple[Character, ...] = ()

    @classmethod
    def empty(cls) -> LogoDescription:
        return cls(characters=())

    @classmethod
    def from_payload(cls, payload: Any) -> LogoDescription:
        if not isinstance(payload, dict) or "logo" not in payload:
            raise ValueError("payload must be an object with a 'logo' key")
        raw = payload["logo"]
        if not isinstance(raw, list):
            raise ValueError("'logo' must be a list of characters")

        characters: list[Character] = []
        for ci, chr_ in enumerate(raw):
            if not isinstance(chr_, list):
                raise ValueError(f"character {ci} must be a list of panels")
            panels: list[Panel] = []
            for pi, panel in enumerate(chr_):
                if not isinstance(panel, list) or not all(isinstance(t, str) for t in panel):
                    raise ValueError(f"panel {ci}/{pi} must be a list of color strings")
                panels.append(tuple(panel))
            characters.append(tuple(panels))
        return cls(characters=tuple(characters))

    def __len__(self) -> int:
        return len(self.characters)


@dataclass(frozen=True)
class RenderOptions:
    pixel_size: int = 1
    character: int | None = None
    crop: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.pixel_size, bool) or not isinstance(self.pixel_size, int) or self.pixel_size < 1:
            raise ValueError(f"pixel_size must be an integer >= 1, got {self.pixel_size!r}")

    @classmethod
    def from_query(cls, size: int | None = None, character: int | None = None, crop: bool = False) -> RenderOptions:
        return cls(pixel_size=1 if size is None else size, character=character, crop=bool(crop))


@dataclass(frozen=True)
class RenderedImage:
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError("RGBA buffer length must equal width*height*4")
