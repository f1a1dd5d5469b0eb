"""
Raster renderer: replays the layout on a DrawingSurface.

Bars come straight from ``bar_rects``. Digit groups are spread over their box
one character at a time with equal gaps, computed from measured glyph widths,
which is the raster counterpart of SVG's textLength.
"""

from __future__ import annotations

import logging
from typing import List

from pubbarcode.model.symbol import PublicationSymbol

from .layout import Layout, TextPlacement, bar_rects, text_placements
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

__all__ = ["render_raster", "draw_text_placement"]


def draw_text_placement(surface: DrawingSurface, p: TextPlacement) -> None:
    if p.centered:
        width = surface.text_width(p.text, p.font_size)
        surface.draw_text(p.x - width / 2, p.y, p.text, p.font_size)
        return
    if p.width is None or len(p.text) < 2:
        surface.draw_text(p.x, p.y, p.text, p.font_size)
        return

    widths: List[float] = [surface.text_width(ch, p.font_size) for ch in p.text]
    gap = (p.width - sum(widths)) / (len(p.text) - 1)
    x = p.x
    for ch, w in zip(p.text, widths):
        surface.draw_text(x, p.y, ch, p.font_size)
        x += w + gap


def render_raster(symbol: PublicationSymbol, layout: Layout, surface: DrawingSurface) -> None:
    """Draw every bar and text of ``symbol`` onto ``surface``."""
    rects = bar_rects(symbol.bars, layout)
    for r in rects:
        surface.fill_rect(r.x, r.y, r.width, r.height)
    for p in text_placements(symbol, layout):
        draw_text_placement(surface, p)
    logger.debug("Raster drawn for %s: %d bars", symbol.code, len(rects))
