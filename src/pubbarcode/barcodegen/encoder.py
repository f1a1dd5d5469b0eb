"""
EAN-13 / EAN-5 / EAN-2 symbol encoder.

Translates the 13-digit payload and optional add-on into bit-strings. The
supplied EAN-13 check digit is never trusted: it is recomputed, and a
mismatch becomes a CheckDigitMismatch diagnostic (logged, returned, not
raised) while the recomputed digit is encoded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pubbarcode.exceptions import AddonFormatError, CheckDigitMismatch, IdentifierTypeError
from pubbarcode.model.enums import AddonKind, SymbolType
from pubbarcode.model.symbol import (
    AddonInfo,
    EncodedBars,
    NormalizedPayload,
    PublicationSymbol,
)

from .checksum import ean5_checksum, ean13_check_digit
from .classifier import classify
from .tables import (
    ADDON_DELIMITER,
    ADDON_GUARD,
    CODE_RIGHT,
    PARITY_2,
    PARITY_5,
    PARITY_13,
    digit_pattern,
)

logger = logging.getLogger(__name__)

__all__ = [
    "EncodingResult",
    "encode",
    "encode_ean13",
    "encode_ean5",
    "encode_ean2",
    "encode_addon",
    "encode_symbol",
    "normalize_addon",
    "select_addon_kind",
]


@dataclass(frozen=True)
class EncodingResult:
    bars: EncodedBars
    code: str
    addon: Optional[AddonInfo] = None
    diagnostics: Tuple[CheckDigitMismatch, ...] = ()


def encode_ean13(code: str) -> Tuple[str, str, str, Optional[CheckDigitMismatch]]:
    """
    Encode a 13-digit payload.

    Returns:
        (left bits, right bits, corrected 13-digit code, mismatch or None)
    """
    check_digit = ean13_check_digit(code)
    mismatch: Optional[CheckDigitMismatch] = None
    if str(check_digit) != code[12]:
        mismatch = CheckDigitMismatch(code, code[12], check_digit)
        logger.warning(
            "Check digit should be %d instead of %s (code %s)", check_digit, code[12], code
        )
    corrected = code[:12] + str(check_digit)

    parity = PARITY_13[int(corrected[0])]
    left = "".join(digit_pattern(d, p) for d, p in zip(corrected[1:7], parity))
    right = "".join(CODE_RIGHT[int(d)] for d in corrected[7:13])
    return left, right, corrected, mismatch


def _join_addon(digits: str, parity: str) -> str:
    groups: List[str] = [digit_pattern(d, p) for d, p in zip(digits, parity)]
    return ADDON_GUARD + ADDON_DELIMITER.join(groups)


def encode_ean5(digits: str) -> str:
    """EAN-5 bits (guard + 5 groups + 4 delimiters = 47 modules)."""
    digits = digits.zfill(5)
    return _join_addon(digits, PARITY_5[ean5_checksum(digits)])


def encode_ean2(digits: str) -> str:
    """EAN-2 bits (guard + 2 groups + 1 delimiter = 20 modules)."""
    digits = digits.zfill(2)
    return _join_addon(digits, PARITY_2[int(digits) % 4])


def select_addon_kind(symbol_type: SymbolType, addon: str) -> AddonKind:
    """
    EAN-2 only for ISSN symbols with at most 2 add-on digits, EAN-5 otherwise.

    ISSN issue numbers are 2 digits, ISBN price indicators 5; an ISSN with a
    longer add-on is treated as a price.
    """
    if symbol_type is SymbolType.ISSN and len(addon) <= 2:
        return AddonKind.EAN2
    return AddonKind.EAN5


def normalize_addon(addon: Optional[str]) -> Optional[str]:
    """
    Strip surrounding whitespace; None, "" and "0" mean "no add-on".

    Raises:
        AddonFormatError: non-digit characters or more than 5 digits.
    """
    if addon is None:
        return None
    if not isinstance(addon, str):
        raise AddonFormatError(repr(addon), "add-on must be a string of digits")
    value = addon.strip()
    if value in ("", "0"):
        return None
    if not (value.isascii() and value.isdigit()):
        raise AddonFormatError(addon, "add-on must contain digits only")
    if len(value) > AddonKind.EAN5.digits:
        raise AddonFormatError(addon, f"add-on has {len(value)} digits, at most 5 allowed")
    return value


def encode_addon(symbol_type: SymbolType, addon: str) -> Tuple[AddonInfo, str]:
    """Pick the add-on kind, zero-pad the digits and encode them."""
    kind = select_addon_kind(symbol_type, addon)
    digits = addon.zfill(kind.digits)
    bits = encode_ean2(digits) if kind is AddonKind.EAN2 else encode_ean5(digits)
    return AddonInfo(digits=digits, kind=kind), bits


def encode(
    payload: str,
    addon: Optional[str] = None,
    symbol_type: SymbolType = SymbolType.EAN,
) -> EncodingResult:
    """
    Encode a 13-digit payload and optional add-on into bars.

    Args:
        payload: Exactly 13 ASCII digits.
        addon: Add-on digits; None/"" for none.
        symbol_type: Drives the EAN-2/EAN-5 choice for the add-on.

    Raises:
        PayloadFormatError: payload is not 13 digits (a ValueError).
        AddonFormatError: add-on is not a 1-5 digit number.
    """
    NormalizedPayload(payload, addon)
    addon_digits = normalize_addon(addon)

    left, right, corrected, mismatch = encode_ean13(payload)

    addon_info: Optional[AddonInfo] = None
    addon_bits = ""
    if addon_digits is not None:
        addon_info, addon_bits = encode_addon(symbol_type, addon_digits)

    logger.debug(
        "Encoded %s (addon=%s)",
        corrected,
        f"{addon_info.kind.value}:{addon_info.digits}" if addon_info else None,
    )
    return EncodingResult(
        bars=EncodedBars(left=left, right=right, addon=addon_bits),
        code=corrected,
        addon=addon_info,
        diagnostics=(mismatch,) if mismatch else (),
    )


def encode_symbol(code: str, addon: Optional[str] = None) -> PublicationSymbol:
    """
    Full pipeline: classify the raw identifier, then encode it.

    Example:
        >>> sym = encode_symbol("ISSN 0317-8471", "07")
        >>> sym.code, sym.label, sym.addon.kind.value
        ('9770317847001', 'ISSN 0317-8471', 'ean2')
    """
    if not isinstance(code, str):
        raise IdentifierTypeError(code)
    classification = classify(code)
    result = encode(classification.code, addon, classification.symbol_type)
    return PublicationSymbol(
        symbol_type=classification.symbol_type,
        payload=NormalizedPayload(code=result.code, addon=normalize_addon(addon)),
        bars=result.bars,
        issn=classification.issn,
        addon=result.addon,
        diagnostics=result.diagnostics,
    )
