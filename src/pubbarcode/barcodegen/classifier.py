"""
Identifier normalizer and classifier.

Turns free-form input ("978-0-306-40615-7", "ISSN 0317-8471", "03178471") into
the 13-digit EAN payload and its symbol type.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from pubbarcode.exceptions import InvalidIdentifierLength
from pubbarcode.model.enums import ISBN_PREFIX, ISSN_PREFIX, SymbolType
from pubbarcode.model.symbol import IssnInfo

from .checksum import ean13_check_digit, issn_check_char

logger = logging.getLogger(__name__)

__all__ = ["Classification", "classify", "normalize_digits"]

_NON_DIGIT = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class Classification:
    symbol_type: SymbolType
    code: str
    issn: Optional[IssnInfo] = None


def normalize_digits(raw_code: str) -> str:
    """
    Uppercase and drop every non-digit.

    A trailing ISSN check letter 'X' goes away with the rest; it is never
    validated, the check character is always recomputed from the core.
    """
    return _NON_DIGIT.sub("", raw_code.upper())


def classify(raw_code: str) -> Classification:
    """
    Detect the symbol type and build the 13-digit payload.

    - 7 or 8 digits: ISSN; payload is "977" + core + "00" + EAN check digit.
    - 13 digits: "978" -> ISBN, "977" -> ISSN (core at offset 3), else EAN.

    Raises:
        InvalidIdentifierLength: any other digit count.
    """
    digits = normalize_digits(raw_code)
    issn_core: Optional[str] = None

    if len(digits) in (7, 8):
        symbol_type = SymbolType.ISSN
        issn_core = digits[:7]
        code = f"{ISSN_PREFIX}{issn_core}00"
        code += str(ean13_check_digit(code))
    elif len(digits) == 13:
        code = digits
        prefix = digits[:3]
        if prefix == ISBN_PREFIX:
            symbol_type = SymbolType.ISBN
        elif prefix == ISSN_PREFIX:
            symbol_type = SymbolType.ISSN
            issn_core = digits[3:10]
        else:
            symbol_type = SymbolType.EAN
    else:
        raise InvalidIdentifierLength(raw_code, digits)

    issn = None
    if issn_core is not None:
        issn = IssnInfo(core=issn_core, check_char=issn_check_char(issn_core))

    logger.debug("Classified %r as %s, payload=%s", raw_code, symbol_type.value, code)
    return Classification(symbol_type=symbol_type, code=code, issn=issn)
