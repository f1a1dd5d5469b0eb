"""
Check-digit arithmetic for EAN-13, ISSN and the EAN-5 add-on.

All functions are pure; they raise ChecksumInputError (a ValueError) on
malformed input and never touch logging.
"""

from __future__ import annotations

from pubbarcode.exceptions import ChecksumInputError

__all__ = [
    "ean13_check_digit",
    "issn_check_char",
    "ean5_checksum",
    "is_valid_ean13",
    "is_valid_issn",
]


def _require_digits(value: str, min_len: int, max_len: int, what: str) -> None:
    if (
        not isinstance(value, str)
        or not (min_len <= len(value) <= max_len)
        or not (value.isascii() and value.isdigit())
    ):
        raise ChecksumInputError(value, what)


def ean13_check_digit(payload: str) -> int:
    """
    EAN-13 check digit over the first 12 digits of ``payload``.

    Odd positions (1-indexed) count once, even positions three times; the
    check digit brings the total to a multiple of 10.

    Args:
        payload: 12 digits, or a full 13-digit code (the 13th is ignored).

    Example:
        >>> ean13_check_digit("978030640615")
        7
    """
    _require_digits(payload, 12, 13, "12 or 13 digits")
    odd = sum(int(d) for d in payload[0:12:2])
    even = sum(int(d) for d in payload[1:12:2])
    total = odd + even * 3
    return (10 - total % 10) % 10


def issn_check_char(core: str) -> str:
    """
    ISSN check character for a 7-digit core: weights 8..2, mod 11, 10 -> 'X'.

    Example:
        >>> issn_check_char("0317847")
        '1'
    """
    _require_digits(core, 7, 7, "7 digits")
    total = sum(int(d) * (8 - i) for i, d in enumerate(core))
    modulo = total % 11
    if modulo == 0:
        return "0"
    check = 11 - modulo
    return "X" if check == 10 else str(check)


def ean5_checksum(digits: str) -> int:
    """EAN-5 parity selector: (3 x odd-position sum + 9 x even-position sum) mod 10."""
    _require_digits(digits, 5, 5, "5 digits")
    odd = sum(int(d) for d in digits[0::2])
    even = sum(int(d) for d in digits[1::2])
    return (odd * 3 + even * 9) % 10


def is_valid_ean13(code: str) -> bool:
    """True if ``code`` is 13 digits with a correct check digit."""
    if not (isinstance(code, str) and len(code) == 13 and code.isascii() and code.isdigit()):
        return False
    return ean13_check_digit(code) == int(code[12])


def is_valid_issn(issn: str) -> bool:
    """
    True if the 8-character ISSN (hyphen allowed) passes the mod-11 check.

    The full weighted sum (check character weighted 1, 'X' = 10) must be a
    multiple of 11.
    """
    if not isinstance(issn, str):
        return False
    number = issn.replace("-", "").upper()
    if len(number) != 8 or not number[:7].isdigit():
        return False
    last = number[7]
    if last == "X":
        check = 10
    elif last.isdigit():
        check = int(last)
    else:
        return False
    total = sum(int(d) * (8 - i) for i, d in enumerate(number[:7])) + check
    return total % 11 == 0
