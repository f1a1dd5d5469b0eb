"""
model/enums.py

Enums of the publication barcode model: symbol type, add-on kind and output
format. No encoding logic here; see pubbarcode.barcodegen.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, List, Literal

from pubbarcode.exceptions import UnsupportedFormatError

_logger: Final[logging.Logger] = logging.getLogger(__name__)

# EAN-13 prefixes ("Bookland" / serials)
ISBN_PREFIX: Final[str] = "978"
ISSN_PREFIX: Final[str] = "977"


class SymbolType(str, Enum):
    ISBN = "isbn"
    ISSN = "issn"
    EAN = "ean"

    @property
    def has_issn_label(self) -> bool:
        return self is SymbolType.ISSN

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names_ru = {
            SymbolType.ISBN: "ISBN (книга)",
            SymbolType.ISSN: "ISSN (периодическое издание)",
            SymbolType.EAN: "EAN-13",
        }
        names_en = {
            SymbolType.ISBN: "ISBN (book)",
            SymbolType.ISSN: "ISSN (serial)",
            SymbolType.EAN: "EAN-13",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class AddonKind(str, Enum):
    EAN2 = "ean2"  # issue number
    EAN5 = "ean5"  # price indicator

    @property
    def digits(self) -> int:
        return 2 if self is AddonKind.EAN2 else 5

    @property
    def module_width(self) -> int:
        """Width of the add-on symbol in modules, guard included."""
        return 20 if self is AddonKind.EAN2 else 47

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        if self is AddonKind.EAN2:
            return "EAN-2 (номер выпуска)" if lang == "ru" else "EAN-2 (issue number)"
        return "EAN-5 (цена)" if lang == "ru" else "EAN-5 (price)"


class OutputFormat(str, Enum):
    SVG = "svg"
    PNG = "png"
    JPEG = "jpeg"

    @property
    def is_raster(self) -> bool:
        return self is not OutputFormat.SVG

    @property
    def media_type(self) -> str:
        return {
            OutputFormat.SVG: "image/svg+xml",
            OutputFormat.PNG: "image/png",
            OutputFormat.JPEG: "image/jpeg",
        }[self]

    @classmethod
    def names(cls) -> List[str]:
        return [f.value for f in cls] + ["jpg"]

    @classmethod
    def parse(cls, value: "str | OutputFormat", strict: bool = True) -> "OutputFormat":
        """
        Resolve a format name ("svg", "png", "jpg", "jpeg"; case-insensitive).

        Args:
            value: Name or OutputFormat member.
            strict: If True, unknown names raise UnsupportedFormatError.
                If False, they fall back to SVG (legacy behaviour) with a warning.

        Raises:
            UnsupportedFormatError: unknown name in strict mode.
        """
        if isinstance(value, OutputFormat):
            return value
        name = str(value).strip().lower()
        if name == "jpg":
            name = "jpeg"
        for member in cls:
            if member.value == name:
                return member
        if strict:
            raise UnsupportedFormatError(value, cls.names())
        _logger.warning("Unknown output format %r, falling back to SVG", value)
        return OutputFormat.SVG


DEFAULT_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat.SVG
