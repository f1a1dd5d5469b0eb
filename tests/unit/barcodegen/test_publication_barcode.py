from io import BytesIO
from typing import Any, Dict
from unittest.mock import Mock, patch

import pytest
from PIL import Image

from pubbarcode.barcodegen.publication_barcode import (
    PublicationBarcodeGenerator,
    render,
)
from pubbarcode.exceptions import (
    AddonFormatError,
    InvalidIdentifierLength,
    LayoutSettingsError,
    RenderingBackendError,
    UnsupportedFormatError,
)
from pubbarcode.model.enums import AddonKind, OutputFormat, SymbolType


class TestPublicationBarcodeGenerator:
    """Facade: encode in the constructor, render on demand."""

    @pytest.fixture
    def isbn_generator(self) -> PublicationBarcodeGenerator:
        return PublicationBarcodeGenerator("978-0-306-40615-7", "51995")

    @pytest.fixture
    def issn_generator(self) -> PublicationBarcodeGenerator:
        return PublicationBarcodeGenerator("ISSN 0317-8471", "07")

    # === Initialization ===
    def test_defaults(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        assert isbn_generator.bar_width == 4
        assert isbn_generator.bar_height == 200
        assert isbn_generator.jpeg_quality == 90
        assert isbn_generator.font_path is None

    def test_options_override_defaults(self) -> None:
        options: Dict[str, Any] = {"bar_width": 2, "bar_height": 100, "jpeg_quality": 50}
        gen = PublicationBarcodeGenerator("9780306406157", options=options)  # type: ignore[arg-type]
        assert (gen.bar_width, gen.bar_height, gen.jpeg_quality) == (2, 100, 50)

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(LayoutSettingsError, match="unknown option"):
            PublicationBarcodeGenerator("9780306406157", options={"scale": 2})  # type: ignore[typeddict-unknown-key]

    def test_encodes_in_constructor(self, issn_generator: PublicationBarcodeGenerator) -> None:
        sym = issn_generator.symbol
        assert sym.symbol_type is SymbolType.ISSN
        assert sym.addon is not None and sym.addon.kind is AddonKind.EAN2
        assert issn_generator.code == "9770317847001"

    def test_invalid_code_fails_fast(self) -> None:
        with pytest.raises(InvalidIdentifierLength):
            PublicationBarcodeGenerator("12345")

    def test_invalid_addon_fails_fast(self) -> None:
        with pytest.raises(AddonFormatError):
            PublicationBarcodeGenerator("9780306406157", "1234567")

    @pytest.mark.parametrize("code,width", [("03178471", 408), ("9780306406157", 408)])
    def test_zero_addon_draws_no_addon(self, code: str, width: int) -> None:
        gen = PublicationBarcodeGenerator(code, "0")
        assert gen.symbol.addon is None
        assert gen.layout().image_width == width
        assert gen.svg() == PublicationBarcodeGenerator(code).svg()

    def test_generate_replaces_symbol(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        first = isbn_generator.symbol
        second = isbn_generator.generate("03178471")
        assert isbn_generator.symbol is second
        assert first.symbol_type is SymbolType.ISBN
        assert second.symbol_type is SymbolType.ISSN
        assert second.addon is None

    def test_diagnostics(self) -> None:
        gen = PublicationBarcodeGenerator("9780306406150")
        assert gen.code == "9780306406157"
        assert len(gen.diagnostics) == 1
        assert "CheckDigitMismatch" in gen.diagnostics[0]

    # === Rendering ===
    def test_svg(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        svg = isbn_generator.render("svg")
        assert isinstance(svg, str)
        assert svg.startswith('<svg width="624" height="220"')

    def test_default_format_is_svg(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        assert isbn_generator.render() == isbn_generator.svg()

    def test_png(self, issn_generator: PublicationBarcodeGenerator) -> None:
        data = issn_generator.render("PNG")
        assert isinstance(data, bytes)
        img = Image.open(BytesIO(data))
        assert img.format == "PNG"
        assert img.mode == "RGBA"
        assert img.size == (516, 300)
        # start guard bar, below the label band
        assert img.getpixel((29, 150)) == (0, 0, 0, 255)
        # quiet zone next to it
        assert img.getpixel((33, 150))[3] == 0

    @pytest.mark.parametrize("fmt", ["jpeg", "jpg", "JPG", OutputFormat.JPEG])
    def test_jpeg(self, isbn_generator: PublicationBarcodeGenerator, fmt: Any) -> None:
        data = isbn_generator.render(fmt)
        assert isinstance(data, bytes)
        img = Image.open(BytesIO(data))
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert img.size == (624, 220)
        assert min(img.getpixel((2, 2))) > 230

    def test_jpeg_quality_is_used(self) -> None:
        low = PublicationBarcodeGenerator("9780306406157", options={"jpeg_quality": 5})
        high = PublicationBarcodeGenerator("9780306406157", options={"jpeg_quality": 100})
        assert len(low.jpeg()) < len(high.jpeg())

    def test_unknown_format_strict(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        with pytest.raises(UnsupportedFormatError):
            isbn_generator.render("gif")

    def test_unknown_format_legacy_fallback(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        assert isbn_generator.render("gif", strict=False) == isbn_generator.svg()

    def test_render_image(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        img = isbn_generator.render_image(alpha=False)
        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"
        assert img.size == isbn_generator.layout().size

    def test_render_bytes(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        assert isbn_generator.render_bytes("svg").startswith(b"<svg")
        assert isbn_generator.render_bytes()[:4] == b"\x89PNG"

    def test_settings_validated_at_render(self, isbn_generator: PublicationBarcodeGenerator) -> None:
        isbn_generator.bar_height = 10
        with pytest.raises(LayoutSettingsError):
            isbn_generator.svg()

    def test_missing_font_propagates(self) -> None:
        gen = PublicationBarcodeGenerator(
            "9780306406157", options={"font_path": "/nonexistent/Arial.ttf"}
        )
        with pytest.raises(RenderingBackendError):
            gen.png()
        assert gen.svg().startswith("<svg")

    @patch("pubbarcode.barcodegen.publication_barcode.PillowSurface")
    def test_png_uses_transparent_surface(
        self, mock_surface_cls: Mock, isbn_generator: PublicationBarcodeGenerator
    ) -> None:
        mock_surface_cls.return_value.text_width.return_value = 10.0
        mock_surface_cls.return_value.to_png.return_value = b"png"
        assert isbn_generator.png() == b"png"
        _, kwargs = mock_surface_cls.call_args
        assert kwargs["alpha"] is True
        assert kwargs["font_path"] is None

    @patch("pubbarcode.barcodegen.publication_barcode.PillowSurface")
    def test_jpeg_uses_opaque_surface(
        self, mock_surface_cls: Mock, isbn_generator: PublicationBarcodeGenerator
    ) -> None:
        mock_surface_cls.return_value.text_width.return_value = 10.0
        mock_surface_cls.return_value.to_jpeg.return_value = b"jpeg"
        assert isbn_generator.jpeg() == b"jpeg"
        _, kwargs = mock_surface_cls.call_args
        assert kwargs["alpha"] is False
        mock_surface_cls.return_value.to_jpeg.assert_called_once_with(90)

    def test_supported_formats(self) -> None:
        assert set(PublicationBarcodeGenerator.supported_formats()) == {"svg", "png", "jpeg", "jpg"}


def test_render_function_svg() -> None:
    svg = render("svg", "9780306406157")
    assert isinstance(svg, str)
    assert 'viewBox="0 0 408 220"' in svg


def test_render_function_options() -> None:
    svg = render("svg", "9780306406157", options={"bar_width": 1, "bar_height": 50})
    assert 'viewBox="0 0 102 70"' in svg


@pytest.mark.parametrize("code", ["", "----", "no digits"])
def test_render_rejects_empty_identifier(code: str) -> None:
    with pytest.raises(InvalidIdentifierLength) as exc_info:
        render("png", code)
    assert exc_info.value.length == 0


def test_render_unknown_format() -> None:
    with pytest.raises(UnsupportedFormatError):
        render("bmp", "9780306406157")
