from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TypedDict, Union

from PIL import Image

from pubbarcode.config import get_config
from pubbarcode.exceptions import LayoutSettingsError
from pubbarcode.model.enums import OutputFormat
from pubbarcode.model.symbol import PublicationSymbol

from .encoder import encode_symbol
from .layout import Layout, layout_for
from .raster_renderer import render_raster
from .surface import PillowSurface
from .svg_renderer import render_svg

logger = logging.getLogger(__name__)

__all__ = [
    "PublicationBarcodeGenerator",
    "PublicationRenderOptions",
    "render",
]


class PublicationRenderOptions(TypedDict, total=False):
    """
    Типобезопасные опции рендеринга издательского штрихкода.

    Missing keys fall back to the package configuration
    (see pubbarcode.config.DEFAULT_CONFIG).

    Example:
        >>> options: PublicationRenderOptions = {"bar_width": 2, "jpeg_quality": 75}
        >>> gen = PublicationBarcodeGenerator("9780306406157", options=options)
    """

    bar_width: int  # Ширина модуля (единицы рисования)
    bar_height: int  # Высота охранных штрихов
    jpeg_quality: int  # 0-100, только для JPEG
    font_path: Optional[str]  # TrueType шрифт для растрового вывода


_OPTION_KEYS = frozenset(PublicationRenderOptions.__annotations__)


class PublicationBarcodeGenerator:
    """
    ISBN / ISSN / EAN-13 barcode with optional EAN-2/EAN-5 add-on.

    The code is classified and encoded in the constructor, so an invalid
    identifier or add-on fails before any drawing work. Settings are plain
    attributes and may be changed between renders.

    Args:
        code: ISBN-13, ISSN-13, 7/8-digit ISSN or other EAN-13, free-form
            (hyphens, spaces and an "ISSN" prefix are ignored).
        addon: Price indicator (ISBN) or issue number (ISSN), optional.
        options: Rendering options overriding the configuration.
    """

    def __init__(
        self,
        code: str,
        addon: Optional[str] = None,
        options: Optional[PublicationRenderOptions] = None,
    ) -> None:
        config = get_config()
        settings: Dict[str, Any] = {key: config.get(key) for key in _OPTION_KEYS}
        for key, value in dict(options or {}).items():
            if key not in _OPTION_KEYS:
                raise LayoutSettingsError("options", key, "unknown option")
            settings[key] = value

        self.bar_width: int = settings["bar_width"]
        self.bar_height: int = settings["bar_height"]
        self.jpeg_quality: int = settings["jpeg_quality"]
        self.font_path: Optional[str] = settings["font_path"]
        self.default_format: str = str(config.get("default_format") or "svg")

        self.symbol: PublicationSymbol = self.generate(code, addon)

    def generate(self, code: str, addon: Optional[str] = None) -> PublicationSymbol:
        """
        (Re)encode the barcode for a new code/add-on.

        Raises:
            InvalidIdentifierLength: code does not normalize to 7, 8 or 13 digits.
            AddonFormatError: add-on is not a 1-5 digit number.
        """
        symbol = encode_symbol(code, addon)
        self.symbol = symbol
        logger.info(
            "Barcode generated: type=%s code=%s addon=%s",
            symbol.symbol_type.value,
            symbol.code,
            symbol.addon.digits if symbol.addon else None,
        )
        return symbol

    @property
    def code(self) -> str:
        return self.symbol.code

    @property
    def diagnostics(self) -> List[str]:
        return [str(d) for d in self.symbol.diagnostics]

    def layout(self) -> Layout:
        return layout_for(self.symbol, self.bar_width, self.bar_height)

    def render(
        self, output_format: Union[str, OutputFormat, None] = None, strict: bool = True
    ) -> Union[str, bytes]:
        """
        Render to the requested format.

        Args:
            output_format: "svg", "png", "jpg"/"jpeg". None uses the configured default.
            strict: If False, unknown formats fall back to SVG (legacy behaviour).

        Returns:
            SVG document as str; PNG/JPEG as bytes.

        Raises:
            UnsupportedFormatError: unknown format and strict=True.
            RenderingBackendError: Pillow failed (font, encoder).
        """
        fmt = OutputFormat.parse(
            self.default_format if output_format is None else output_format, strict=strict
        )
        if fmt is OutputFormat.PNG:
            return self.png()
        if fmt is OutputFormat.JPEG:
            return self.jpeg()
        return self.svg()

    def svg(self) -> str:
        return render_svg(self.symbol, self.layout())

    def render_image(self, alpha: bool = True) -> Image.Image:
        """Draw the barcode on a Pillow image (RGBA if alpha, else RGB on white)."""
        return self._surface(alpha).image

    def _surface(self, alpha: bool) -> PillowSurface:
        layout = self.layout()
        surface = PillowSurface(
            layout.image_width, layout.image_height, alpha=alpha, font_path=self.font_path
        )
        render_raster(self.symbol, layout, surface)
        return surface

    def png(self) -> bytes:
        return self._surface(alpha=True).to_png()

    def jpeg(self) -> bytes:
        return self._surface(alpha=False).to_jpeg(self.jpeg_quality)

    def render_bytes(self, output_format: Union[str, OutputFormat] = OutputFormat.PNG) -> bytes:
        """Like render(), but SVG is returned UTF-8 encoded."""
        result = self.render(output_format)
        return result.encode("utf-8") if isinstance(result, str) else result

    @classmethod
    def supported_formats(cls) -> List[str]:
        return OutputFormat.names()


def render(
    output_format: Union[str, OutputFormat],
    code: str,
    addon: Optional[str] = None,
    options: Optional[PublicationRenderOptions] = None,
    strict: bool = True,
) -> Union[str, bytes]:
    """
    One-shot rendering.

    Example:
        >>> svg = render("svg", "9780306406157", "51995")
        >>> jpeg = render("jpeg", "03178471", "07", options={"jpeg_quality": 80})
    """
    return PublicationBarcodeGenerator(code, addon, options).render(output_format, strict=strict)
