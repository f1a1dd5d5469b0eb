"""
RU: Поверхность рисования для растрового вывода (Pillow).
EN: Drawing surface used by the raster renderer, backed by Pillow.

The renderer only needs four capabilities: fill a rectangle, measure text,
draw text at a baseline and serialize the canvas. ``DrawingSurface`` is the
structural contract; ``PillowSurface`` is the production implementation.
Pillow failures surface as RenderingBackendError with the original exception
chained.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Dict, Optional, Protocol, Tuple, Union, runtime_checkable

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as PILImageFont

from pubbarcode.exceptions import LayoutSettingsError, RenderingBackendError

logger = logging.getLogger(__name__)

__all__ = ["DrawingSurface", "PillowSurface"]

_Font = Union[FreeTypeFont, PILImageFont]


@runtime_checkable
class DrawingSurface(Protocol):
    """Minimal 2D drawing capability consumed by render_raster()."""

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Fill an axis-aligned rectangle with the ink colour."""
        ...

    def text_width(self, text: str, font_size: int) -> float:
        """Advance width of ``text`` at ``font_size``."""
        ...

    def draw_text(self, x: float, y: float, text: str, font_size: int) -> None:
        """Draw ``text`` with its left edge at ``x`` and baseline at ``y``."""
        ...


class PillowSurface:
    """
    Pillow canvas.

    Args:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        alpha: RGBA with a transparent background (PNG) if True, otherwise
            RGB on opaque white (JPEG).
        font_path: TrueType font for digits and labels. If None, Pillow's
            bundled default font is used.

    Example:
        >>> surface = PillowSurface(408, 220, alpha=True)
        >>> surface.fill_rect(28, 0, 4, 200)
        >>> png = surface.to_png()
    """

    def __init__(
        self,
        width: int,
        height: int,
        alpha: bool = True,
        font_path: Optional[str] = None,
    ) -> None:
        self.alpha = alpha
        self.font_path = font_path
        self._fonts: Dict[int, _Font] = {}
        if alpha:
            self.image = Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 0))
            self.ink: Tuple[int, ...] = (0, 0, 0, 255)
        else:
            self.image = Image.new("RGB", (int(width), int(height)), (255, 255, 255))
            self.ink = (0, 0, 0)
        self._draw = ImageDraw.Draw(self.image)

    def _font(self, size: int) -> _Font:
        font = self._fonts.get(size)
        if font is None:
            try:
                if self.font_path:
                    font = ImageFont.truetype(self.font_path, size)
                else:
                    font = ImageFont.load_default(size=size)
            except (OSError, ValueError) as e:
                raise RenderingBackendError(
                    f"Could not load font {self.font_path or '<default>'!s} at size {size}",
                    backend_error=e,
                ) from e
            self._fonts[size] = font
        return font

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            return
        x0, y0 = round(x), round(y)
        # Pillow rectangles include both corners
        x1, y1 = round(x + width) - 1, round(y + height) - 1
        self._draw.rectangle((x0, y0, x1, y1), fill=self.ink)

    def text_width(self, text: str, font_size: int) -> float:
        # advance width, matching the origin draw_text positions glyphs at
        return float(self._font(font_size).getlength(text))

    def draw_text(self, x: float, y: float, text: str, font_size: int) -> None:
        self._draw.text(
            (round(x), round(y)), text, font=self._font(font_size), fill=self.ink, anchor="ls"
        )

    def _encode(self, image: Image.Image, fmt: str, **params: int) -> bytes:
        buf = BytesIO()
        try:
            image.save(buf, format=fmt, **params)
        except (OSError, ValueError, KeyError) as e:
            raise RenderingBackendError(f"{fmt} encoding failed", backend_error=e) from e
        logger.debug("Canvas encoded as %s (%d bytes)", fmt, buf.getbuffer().nbytes)
        return buf.getvalue()

    def to_png(self) -> bytes:
        return self._encode(self.image, "PNG")

    def to_jpeg(self, quality: int = 90) -> bytes:
        if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 100:
            raise LayoutSettingsError("jpeg_quality", quality, "must be an integer 0-100")
        image = self.image if self.image.mode == "RGB" else self._flatten()
        return self._encode(image, "JPEG", quality=quality)

    def _flatten(self) -> Image.Image:
        background = Image.new("RGB", self.image.size, (255, 255, 255))
        background.paste(self.image, mask=self.image.getchannel("A"))
        return background
