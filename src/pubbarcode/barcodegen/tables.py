"""
EAN digit and parity tables.

L/R codes are 7-module patterns per digit. A G code (used on the left half and
in add-ons) is the R code read backwards, so it is derived rather than stored.
"""

from __future__ import annotations

from typing import Final, Tuple

__all__ = [
    "CODE_LEFT",
    "CODE_RIGHT",
    "PARITY_13",
    "PARITY_5",
    "PARITY_2",
    "START_GUARD",
    "CENTER_GUARD",
    "END_GUARD",
    "ADDON_GUARD",
    "ADDON_DELIMITER",
    "digit_pattern",
]

CODE_LEFT: Final[Tuple[str, ...]] = (
    "0001101",
    "0011001",
    "0010011",
    "0111101",
    "0100011",
    "0110001",
    "0101111",
    "0111011",
    "0110111",
    "0001011",
)

CODE_RIGHT: Final[Tuple[str, ...]] = (
    "1110010",
    "1100110",
    "1101100",
    "1000010",
    "1011100",
    "1001110",
    "1010000",
    "1000100",
    "1001000",
    "1110100",
)

# Left-half parity by leading (13th) digit
PARITY_13: Final[Tuple[str, ...]] = (
    "LLLLLL",
    "LLGLGG",
    "LLGGLG",
    "LLGGGL",
    "LGLLGG",
    "LGGLLG",
    "LGGGLL",
    "LGLGLG",
    "LGLGGL",
    "LGGLGL",
)

# EAN-5 parity by checksum 0-9
PARITY_5: Final[Tuple[str, ...]] = (
    "GGLLL",
    "GLGLL",
    "GLLGL",
    "GLLLG",
    "LGGLL",
    "LLGGL",
    "LLLGG",
    "LGLGL",
    "LGLLG",
    "LLGLG",
)

# EAN-2 parity by value mod 4
PARITY_2: Final[Tuple[str, ...]] = ("LL", "LG", "GL", "GG")

START_GUARD: Final[str] = "101"
CENTER_GUARD: Final[str] = "01010"
END_GUARD: Final[str] = "101"
ADDON_GUARD: Final[str] = "1011"
ADDON_DELIMITER: Final[str] = "01"


def digit_pattern(digit: str, parity: str) -> str:
    """L code for parity 'L', bit-reversed R code for parity 'G'."""
    if parity == "L":
        return CODE_LEFT[int(digit)]
    return CODE_RIGHT[int(digit)][::-1]
