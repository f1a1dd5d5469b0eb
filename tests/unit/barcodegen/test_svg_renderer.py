import re
import xml.etree.ElementTree as ET

import pytest

from pubbarcode.barcodegen.encoder import encode_symbol
from pubbarcode.barcodegen.layout import bar_rects, layout_for
from pubbarcode.barcodegen.svg_renderer import render_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def isbn_svg() -> str:
    sym = encode_symbol("9780306406157", "51995")
    return render_svg(sym, layout_for(sym, 4, 200))


@pytest.fixture
def issn_svg() -> str:
    sym = encode_symbol("03178471", "07")
    return render_svg(sym, layout_for(sym, 4, 200))


def test_document_is_well_formed(isbn_svg: str) -> None:
    root = ET.fromstring(isbn_svg)
    assert root.tag == f"{SVG_NS}svg"


def test_size_and_viewbox(isbn_svg: str) -> None:
    root = ET.fromstring(isbn_svg)
    assert root.get("width") == "624"
    assert root.get("height") == "220"
    assert root.get("viewBox") == "0 0 624 220"


def test_embedded_style(isbn_svg: str) -> None:
    root = ET.fromstring(isbn_svg)
    style = root.find(f"{SVG_NS}style")
    assert style is not None and style.text is not None
    assert ".code" in style.text and "font-size: 28px" in style.text
    assert ".label" in style.text and "text-anchor: middle" in style.text


def test_rects_match_layout() -> None:
    sym = encode_symbol("9780306406157", "51995")
    layout = layout_for(sym, 4, 200)
    root = ET.fromstring(render_svg(sym, layout))
    rects = [
        (int(r.get("x", "")), int(r.get("y", "")), int(r.get("width", "")), int(r.get("height", "")))
        for r in root.iter(f"{SVG_NS}rect")
    ]
    assert rects == [(r.x, r.y, r.width, r.height) for r in bar_rects(sym.bars, layout)]


def test_digit_texts_have_text_length(isbn_svg: str) -> None:
    root = ET.fromstring(isbn_svg)
    texts = {t.text: t for t in root.iter(f"{SVG_NS}text")}
    assert set(texts) == {"9", "780306", "406157", "51995"}
    assert texts["780306"].get("x") == "54"
    assert texts["780306"].get("textLength") == "140"
    assert texts["406157"].get("x") == "242"
    assert texts["9"].get("textLength") == "28"
    assert texts["51995"].get("y") == "20"
    for t in texts.values():
        assert t.get("class") == "code"
        assert t.get("textLength") is not None


def test_issn_label(issn_svg: str) -> None:
    root = ET.fromstring(issn_svg)
    labels = [t for t in root.iter(f"{SVG_NS}text") if t.get("class") == "label"]
    assert len(labels) == 1
    assert labels[0].text == "ISSN 0317-8471"
    assert labels[0].get("y") == "48"
    assert labels[0].get("x") == "272"
    assert root.get("height") == "300"


def test_no_label_for_isbn(isbn_svg: str) -> None:
    assert "ISSN" not in isbn_svg


def test_half_unit_coordinates_are_kept() -> None:
    sym = encode_symbol("9780306406157")
    svg = render_svg(sym, layout_for(sym, 1, 100))
    assert re.search(r'x="13\.5"', svg)
    assert 'x="60.5"' in svg
    assert ".0\"" not in svg
