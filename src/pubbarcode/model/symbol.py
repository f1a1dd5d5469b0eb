# RU: Неизменяемые значения конвейера кодирования: нормализованный код, ISSN, дополнение, штрихи.
# EN: Immutable values produced by the encoding pipeline, built fresh on every call.

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pubbarcode.exceptions import CheckDigitMismatch, PayloadFormatError

from .enums import AddonKind, SymbolType


@dataclass(frozen=True)
class NormalizedPayload:
    """13-digit EAN-13 number to encode, plus the add-on digits as supplied."""

    code: str
    addon: Optional[str] = None

    def __post_init__(self) -> None:
        if not (
            isinstance(self.code, str)
            and len(self.code) == 13
            and self.code.isascii()
            and self.code.isdigit()
        ):
            raise PayloadFormatError(self.code)


@dataclass(frozen=True)
class IssnInfo:
    core: str
    check_char: str

    @property
    def number(self) -> str:
        """The 8-character ISSN, e.g. ``03178471``."""
        return self.core + self.check_char

    @property
    def label(self) -> str:
        """Display form, e.g. ``ISSN 0317-8471``."""
        number = self.number
        return f"ISSN {number[:4]}-{number[4:]}"


@dataclass(frozen=True)
class AddonInfo:
    digits: str
    kind: AddonKind


@dataclass(frozen=True)
class EncodedBars:
    """
    Bit-strings of the symbol ('1' = bar module, '0' = space module).

    Guards are not included in ``left``/``right``; ``addon`` carries its own
    guard and delimiters and is empty when there is no add-on.
    """

    left: str
    right: str
    addon: str = ""


@dataclass(frozen=True)
class PublicationSymbol:
    """
    Complete result of one encode call.

    Examples:
        sym = encode_symbol("9780306406157", "51995")
        sym.symbol_type   # SymbolType.ISBN
        sym.addon.kind    # AddonKind.EAN5
        sym.diagnostics   # () unless the supplied check digit was wrong
    """

    symbol_type: SymbolType
    payload: NormalizedPayload
    bars: EncodedBars
    issn: Optional[IssnInfo] = None
    addon: Optional[AddonInfo] = None
    diagnostics: Tuple[CheckDigitMismatch, ...] = field(default=())

    @property
    def code(self) -> str:
        return self.payload.code

    @property
    def label(self) -> Optional[str]:
        return self.issn.label if self.issn else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.symbol_type.value,
            "code": self.code,
            "issn": self.issn.number if self.issn else None,
            "label": self.label,
            "addon": self.addon.digits if self.addon else None,
            "addon_kind": self.addon.kind.value if self.addon else None,
            "bars": {
                "left": self.bars.left,
                "right": self.bars.right,
                "addon": self.bars.addon,
            },
            "warnings": [d.message for d in self.diagnostics],
        }

    def __str__(self) -> str:
        addon = f" +{self.addon.digits}" if self.addon else ""
        return f"PublicationSymbol({self.symbol_type.value}, code={self.code}{addon})"
