"""
Layout engine: geometry shared by the SVG and raster renderers.

Every measurement derives from ``bar_width`` (one module), ``bar_height``
(guard bar height) and which optional elements are present. Nothing here
draws; renderers consume ``bar_rects`` and ``text_placements``.

Horizontal structure, in modules:
    7 quiet/leading digit | 95 EAN-13 | 7 gap | 47 EAN-5 or 20 EAN-2
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from typing import Final, List, Optional, Tuple

from pubbarcode.exceptions import LayoutSettingsError
from pubbarcode.model.enums import AddonKind
from pubbarcode.model.symbol import EncodedBars, PublicationSymbol

from .tables import CENTER_GUARD, END_GUARD, START_GUARD

__all__ = [
    "BarRect",
    "Layout",
    "TextPlacement",
    "bar_rects",
    "bar_runs",
    "compute_layout",
    "layout_for",
    "text_placements",
]

EAN13_MODULES: Final[int] = 102
DIGIT_MODULES: Final[int] = 7
GAP_MODULES: Final[int] = 7

LABEL_BAND_HEIGHT: Final[int] = 80
LABEL_BASELINE: Final[int] = 48
BOTTOM_MARGIN: Final[int] = 20
DIGIT_BAR_SHORTENING: Final[int] = 20
ADDON_BAR_OFFSET: Final[int] = 30
ADDON_TEXT_BASELINE: Final[int] = 20
CODE_TEXT_OFFSET: Final[int] = 10

CODE_FONT_SIZE: Final[int] = 28
LABEL_FONT_SIZE: Final[int] = 48

# Digit group text boxes, in modules from the left edge
LEFT_GROUP_X: Final[float] = 13.5
RIGHT_GROUP_X: Final[float] = 60.5
GROUP_TEXT_MODULES: Final[int] = 35


@dataclass(frozen=True)
class Layout:
    bar_width: int
    bar_height: int
    has_issn_label: bool
    addon_kind: Optional[AddonKind]

    ean13_width: int
    ean5_width: int
    ean2_width: int
    digit_width: int
    gap_width: int
    addon_width: int
    image_width: int
    image_height: int
    label_height: int

    guard_bar_height: int
    digit_bar_height: int
    bars_x: int
    bars_y: int

    addon_bars_x: int
    addon_bars_y: int
    addon_bar_height: int
    addon_text_x: float
    addon_text_y: int
    addon_text_width: int

    code_text_y: int
    left_group_x: float
    right_group_x: float
    group_text_width: int

    label_x: float
    label_y: int
    code_font_size: int = CODE_FONT_SIZE
    label_font_size: int = LABEL_FONT_SIZE

    @property
    def has_addon(self) -> bool:
        return self.addon_kind is not None

    @property
    def size(self) -> Tuple[int, int]:
        return self.image_width, self.image_height


@dataclass(frozen=True)
class BarRect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class TextPlacement:
    """
    A text run and the box it occupies.

    ``x``/``y`` are the left edge and baseline, except for centred text where
    ``x`` is the horizontal centre and ``width`` is None.
    """

    text: str
    x: float
    y: int
    width: Optional[float]
    font_size: int
    css_class: str = "code"
    centered: bool = False


def _check_int(name: str, value: object, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutSettingsError(name, value, "must be an integer")
    if value < minimum:
        raise LayoutSettingsError(name, value, f"must be at least {minimum}")


def compute_layout(
    bar_width: int,
    bar_height: int,
    has_issn_label: bool = False,
    has_addon: bool = False,
    addon_kind: Optional[AddonKind] = None,
) -> Layout:
    """
    Derive every measurement the renderers need.

    Raises:
        LayoutSettingsError: bar_width < 1, bar_height <= 30, or an add-on
            without a kind.
    """
    _check_int("bar_width", bar_width, 1)
    _check_int("bar_height", bar_height, ADDON_BAR_OFFSET + 1)
    if has_addon and addon_kind is None:
        raise LayoutSettingsError("addon_kind", addon_kind, "required when an add-on is present")
    if not has_addon:
        addon_kind = None

    ean13_width = EAN13_MODULES * bar_width
    ean5_width = AddonKind.EAN5.module_width * bar_width
    ean2_width = AddonKind.EAN2.module_width * bar_width
    digit_width = DIGIT_MODULES * bar_width

    gap_width = 0
    addon_width = 0
    if addon_kind is not None:
        gap_width = GAP_MODULES * bar_width
        addon_width = addon_kind.module_width * bar_width
    image_width = ean13_width + gap_width + addon_width

    label_height = LABEL_BAND_HEIGHT if has_issn_label else 0
    image_height = label_height + bar_height + BOTTOM_MARGIN

    return Layout(
        bar_width=bar_width,
        bar_height=bar_height,
        has_issn_label=has_issn_label,
        addon_kind=addon_kind,
        ean13_width=ean13_width,
        ean5_width=ean5_width,
        ean2_width=ean2_width,
        digit_width=digit_width,
        gap_width=gap_width,
        addon_width=addon_width,
        image_width=image_width,
        image_height=image_height,
        label_height=label_height,
        guard_bar_height=bar_height,
        digit_bar_height=bar_height - DIGIT_BAR_SHORTENING,
        bars_x=digit_width,
        bars_y=label_height,
        addon_bars_x=ean13_width + gap_width,
        addon_bars_y=label_height + ADDON_BAR_OFFSET,
        addon_bar_height=bar_height - ADDON_BAR_OFFSET,
        addon_text_x=image_width - addon_width + digit_width / 2,
        addon_text_y=label_height + ADDON_TEXT_BASELINE,
        addon_text_width=max(addon_width - digit_width, 0),
        code_text_y=label_height + bar_height + CODE_TEXT_OFFSET,
        left_group_x=LEFT_GROUP_X * bar_width,
        right_group_x=RIGHT_GROUP_X * bar_width,
        group_text_width=GROUP_TEXT_MODULES * bar_width,
        label_x=(image_width - digit_width) / 2 + digit_width,
        label_y=LABEL_BASELINE,
    )


def layout_for(symbol: PublicationSymbol, bar_width: int, bar_height: int) -> Layout:
    """Layout for an encoded symbol."""
    return compute_layout(
        bar_width,
        bar_height,
        has_issn_label=symbol.symbol_type.has_issn_label,
        has_addon=symbol.addon is not None,
        addon_kind=symbol.addon.kind if symbol.addon else None,
    )


def bar_runs(bits: str, start_x: int, bar_width: int) -> Tuple[List[Tuple[int, int]], int]:
    """
    Coalesce consecutive '1' modules into single bars.

    Returns:
        ([(x, width), ...], x after the last module)
    """
    runs: List[Tuple[int, int]] = []
    x = start_x
    for bit, group in groupby(bits):
        width = sum(1 for _ in group) * bar_width
        if bit == "1":
            runs.append((x, width))
        x += width
    return runs, x


def bar_rects(bars: EncodedBars, layout: Layout) -> List[BarRect]:
    """All bar rectangles: guards full height, data bars shortened, add-on offset."""
    rects: List[BarRect] = []
    parts = (
        (START_GUARD, layout.guard_bar_height),
        (bars.left, layout.digit_bar_height),
        (CENTER_GUARD, layout.guard_bar_height),
        (bars.right, layout.digit_bar_height),
        (END_GUARD, layout.guard_bar_height),
    )
    x = layout.bars_x
    for bits, height in parts:
        runs, x = bar_runs(bits, x, layout.bar_width)
        rects.extend(BarRect(rx, layout.bars_y, w, height) for rx, w in runs)

    if bars.addon and layout.has_addon:
        runs, _ = bar_runs(bars.addon, layout.addon_bars_x, layout.bar_width)
        rects.extend(
            BarRect(rx, layout.addon_bars_y, w, layout.addon_bar_height) for rx, w in runs
        )
    return rects


def text_placements(symbol: PublicationSymbol, layout: Layout) -> List[TextPlacement]:
    """Human readable texts: ISSN label, leading digit, two digit groups, add-on."""
    code = symbol.code
    placements: List[TextPlacement] = []
    if symbol.issn is not None and layout.has_issn_label:
        placements.append(
            TextPlacement(
                text=symbol.issn.label,
                x=layout.label_x,
                y=layout.label_y,
                width=None,
                font_size=layout.label_font_size,
                css_class="label",
                centered=True,
            )
        )
    y = layout.code_text_y
    placements.append(TextPlacement(code[0], 0, y, layout.digit_width, layout.code_font_size))
    placements.append(
        TextPlacement(
            code[1:7], layout.left_group_x, y, layout.group_text_width, layout.code_font_size
        )
    )
    placements.append(
        TextPlacement(
            code[7:13], layout.right_group_x, y, layout.group_text_width, layout.code_font_size
        )
    )
    if symbol.addon is not None and layout.has_addon:
        placements.append(
            TextPlacement(
                symbol.addon.digits,
                layout.addon_text_x,
                layout.addon_text_y,
                layout.addon_text_width,
                layout.code_font_size,
            )
        )
    return placements
