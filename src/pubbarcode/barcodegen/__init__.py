"""
barcodegen

Encoding and rendering engine for publication barcodes.

- Normalization and classification of ISBN / ISSN / EAN-13 identifiers
- EAN-13, ISSN and EAN-5 check-digit arithmetic
- Parity-table encoding of EAN-13 with EAN-2 / EAN-5 add-ons
- Layout engine shared by the SVG and raster (PNG/JPEG) renderers

Public API:
    - PublicationBarcodeGenerator: encode once, render to any format (class)
    - render: one-shot rendering function
    - classify / encode / encode_symbol: pipeline steps
    - ean13_check_digit / issn_check_char: check-digit helpers
    - compute_layout / Layout: geometry

Examples:
    >>> from pubbarcode.barcodegen import PublicationBarcodeGenerator
    >>> svg = PublicationBarcodeGenerator("978-0-306-40615-7", "51995").svg()

Dependencies:
    Pillow
"""

from pubbarcode.exceptions import (
    AddonFormatError,
    BarcodeGenError,
    CheckDigitMismatch,
    ChecksumInputError,
    IdentifierTypeError,
    InvalidIdentifierLength,
    LayoutSettingsError,
    PayloadFormatError,
    RenderingBackendError,
    UnsupportedFormatError,
)

from .checksum import (
    ean5_checksum,
    ean13_check_digit,
    is_valid_ean13,
    is_valid_issn,
    issn_check_char,
)
from .classifier import Classification, classify, normalize_digits
from .encoder import (
    EncodingResult,
    encode,
    encode_addon,
    encode_ean2,
    encode_ean5,
    encode_ean13,
    encode_symbol,
    normalize_addon,
    select_addon_kind,
)
from .layout import (
    BarRect,
    Layout,
    TextPlacement,
    bar_rects,
    bar_runs,
    compute_layout,
    layout_for,
    text_placements,
)
from .publication_barcode import (
    PublicationBarcodeGenerator,
    PublicationRenderOptions,
    render,
)
from .raster_renderer import render_raster
from .surface import DrawingSurface, PillowSurface
from .svg_renderer import render_svg

__all__ = [
    "PublicationBarcodeGenerator",
    "PublicationRenderOptions",
    "render",
    "Classification",
    "classify",
    "normalize_digits",
    "ean13_check_digit",
    "issn_check_char",
    "ean5_checksum",
    "is_valid_ean13",
    "is_valid_issn",
    "EncodingResult",
    "encode",
    "encode_ean13",
    "encode_ean5",
    "encode_ean2",
    "encode_addon",
    "encode_symbol",
    "normalize_addon",
    "select_addon_kind",
    "Layout",
    "BarRect",
    "TextPlacement",
    "compute_layout",
    "layout_for",
    "bar_rects",
    "bar_runs",
    "text_placements",
    "render_svg",
    "render_raster",
    "DrawingSurface",
    "PillowSurface",
    "BarcodeGenError",
    "InvalidIdentifierLength",
    "CheckDigitMismatch",
    "AddonFormatError",
    "RenderingBackendError",
    "UnsupportedFormatError",
    "LayoutSettingsError",
    "ChecksumInputError",
    "PayloadFormatError",
    "IdentifierTypeError",
]
