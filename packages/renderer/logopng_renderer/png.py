"""PNG encoding for rendered RGBA buffers."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from .compositor import render
from .errors import EncodeError
from .models import LogoDescription, RenderedImage, RenderOptions


def encode_png(width: int, height: int, rgba: bytes) -> bytes:
    try:
        image = Image.frombytes("RGBA", (width, height), rgba)
        buf = BytesIO()
        image.save(buf, format="PNG")
    except (ValueError, OSError) as exc:
        raise EncodeError(f"could not encode {width}x{height} RGBA image: {exc}") from exc
    return buf.getvalue()


def encode_image(image: RenderedImage) -> bytes:
    return encode_png(image.width, image.height, image.pixels)


def render_png(description: LogoDescription, options: RenderOptions | None = None) -> bytes:
    return encode_image(render(description, options))
