import dataclasses

import pytest

from pubbarcode.exceptions import CheckDigitMismatch, PayloadFormatError
from pubbarcode.model.enums import AddonKind, SymbolType
from pubbarcode.model.symbol import (
    AddonInfo,
    EncodedBars,
    IssnInfo,
    NormalizedPayload,
    PublicationSymbol,
)


def _symbol(**kwargs: object) -> PublicationSymbol:
    defaults: dict = {
        "symbol_type": SymbolType.ISSN,
        "payload": NormalizedPayload("9770317847001", "07"),
        "bars": EncodedBars(left="0" * 42, right="1" * 42, addon="1011"),
        "issn": IssnInfo("0317847", "1"),
        "addon": AddonInfo("07", AddonKind.EAN2),
    }
    defaults.update(kwargs)
    return PublicationSymbol(**defaults)


class TestNormalizedPayload:
    def test_valid(self) -> None:
        payload = NormalizedPayload("9780306406157")
        assert payload.code == "9780306406157"
        assert payload.addon is None

    @pytest.mark.parametrize("code", ["978030640615", "97803064061570", "978030640615X", "９７８０３０６４０６１５７"])
    def test_invalid(self, code: str) -> None:
        with pytest.raises(PayloadFormatError) as exc_info:
            NormalizedPayload(code)
        assert exc_info.value.rule == "payload-format"
        assert exc_info.value.payload == code

    def test_non_string_code(self) -> None:
        with pytest.raises(PayloadFormatError):
            NormalizedPayload(9780306406157)  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        payload = NormalizedPayload("9780306406157")
        with pytest.raises(dataclasses.FrozenInstanceError):
            payload.code = "0000000000000"  # type: ignore[misc]


def test_issn_info_display() -> None:
    issn = IssnInfo("1050124", "X")
    assert issn.number == "1050124X"
    assert issn.label == "ISSN 1050-124X"


def test_publication_symbol_properties() -> None:
    sym = _symbol()
    assert sym.code == "9770317847001"
    assert sym.label == "ISSN 0317-8471"
    assert str(sym) == "PublicationSymbol(issn, code=9770317847001 +07)"


def test_publication_symbol_without_issn() -> None:
    sym = _symbol(symbol_type=SymbolType.ISBN, issn=None, addon=None)
    assert sym.label is None
    assert str(sym) == "PublicationSymbol(isbn, code=9770317847001)"


def test_to_dict() -> None:
    mismatch = CheckDigitMismatch("9770317847000", "0", 1)
    d = _symbol(diagnostics=(mismatch,)).to_dict()
    assert d["type"] == "issn"
    assert d["issn"] == "03178471"
    assert d["label"] == "ISSN 0317-8471"
    assert d["addon"] == "07"
    assert d["addon_kind"] == "ean2"
    assert d["bars"]["addon"] == "1011"
    assert d["warnings"] == ["Check digit should be 1 instead of 0"]


def test_bars_are_immutable() -> None:
    bars = EncodedBars(left="0", right="1")
    assert bars.addon == ""
    with pytest.raises(dataclasses.FrozenInstanceError):
        bars.left = "1"  # type: ignore[misc]
