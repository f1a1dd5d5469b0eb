"""
SVG renderer.

Produces a self-contained document: embedded style rules, bars as <rect>,
digits as <text> with explicit textLength so that the digit groups keep
their width whatever font the viewer substitutes for Arial.
"""

from __future__ import annotations

import logging
from typing import List, Union
from xml.sax.saxutils import escape

from pubbarcode.model.symbol import PublicationSymbol

from .layout import Layout, TextPlacement, bar_rects, text_placements

logger = logging.getLogger(__name__)

__all__ = ["render_svg"]

_STYLE = """\t<style>
\t\t.code {{
\t\t\tfont-family: Arial;
\t\t\tfont-size: {code_size}px;
\t\t}}

\t\t.label {{
\t\t\tfont-family: Arial;
\t\t\tfont-size: {label_size}px;
\t\t\ttext-anchor: middle;
\t\t\ttext-align: center;
\t\t}}
\t</style>"""


def _num(value: Union[int, float]) -> str:
    """54.0 -> '54', 13.5 -> '13.5'."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _text(p: TextPlacement) -> str:
    attrs = f'class="{p.css_class}" x="{_num(p.x)}" y="{_num(p.y)}"'
    if p.width is not None:
        attrs += f' textLength="{_num(p.width)}"'
    return f"<text {attrs}>{escape(p.text)}</text>"


def render_svg(symbol: PublicationSymbol, layout: Layout) -> str:
    """
    Render the symbol as an SVG document string.

    Width, height and viewBox equal the layout image size.
    """
    width = _num(layout.image_width)
    height = _num(layout.image_height)
    lines: List[str] = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        _STYLE.format(code_size=layout.code_font_size, label_size=layout.label_font_size),
    ]

    placements = text_placements(symbol, layout)
    labels = [p for p in placements if p.centered]
    codes = [p for p in placements if not p.centered]

    for p in labels:
        lines.append(f"\t<g>\n\t\t{_text(p)}\n\t</g>")

    rects = "".join(
        f'<rect x="{_num(r.x)}" y="{_num(r.y)}" width="{_num(r.width)}" height="{_num(r.height)}" />'
        for r in bar_rects(symbol.bars, layout)
    )
    lines.append(f"\t<g>\n\t\t{rects}\n\t</g>")
    lines.append("\t<g>\n" + "\n".join(f"\t\t{_text(p)}" for p in codes) + "\n\t</g>")
    lines.append("</svg>")

    svg = "\n".join(lines) + "\n"
    logger.debug("SVG rendered for %s (%d bytes)", symbol.code, len(svg))
    return svg
