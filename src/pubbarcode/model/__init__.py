"""Data model of the publication barcode pipeline (enums and immutable value types)."""

from .enums import AddonKind, OutputFormat, SymbolType
from .symbol import (
    AddonInfo,
    EncodedBars,
    IssnInfo,
    NormalizedPayload,
    PublicationSymbol,
)

__all__ = [
    "SymbolType",
    "AddonKind",
    "OutputFormat",
    "NormalizedPayload",
    "IssnInfo",
    "AddonInfo",
    "EncodedBars",
    "PublicationSymbol",
]
