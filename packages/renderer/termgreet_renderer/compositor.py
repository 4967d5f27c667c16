"""Row-aligned composition of the rendered image with info text lines."""

from __future__ import annotations

import re

from wcwidth import wcswidth

from termgreet_display.kitty import cursor_forward, cursor_up

from .models import Composition, CompositionPlan, Layout, RenderGeometry

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def visible_width(text: str) -> int:
    plain = _ANSI_RE.sub("", text)
    width = wcswidth(plain)
    return width if width >= 0 else len(plain)


def plan_composition(layout: Layout | str, padding: int, geometry: RenderGeometry | None, header=()) -> CompositionPlan:
    return CompositionPlan(
        layout=Layout(layout),
        padding=max(0, int(padding)),
        left_width=geometry.columns if geometry is not None else 0,
        header=tuple(header),
    )


def compose_blocks(image_lines: list[str], text_lines: list[str], plan: CompositionPlan) -> Composition:
    if plan.layout == Layout.VERTICAL:
        return Composition(
            header=list(plan.header),
            preamble="",
            rows=[*image_lines, "", *text_lines],
            trailing_blank_lines=plan.padding,
        )

    gap = " " * plan.padding
    rows: list[str] = []
    for i in range(max(len(image_lines), len(text_lines))):
        if i < len(image_lines):
            image_part = image_lines[i] + " " * max(0, plan.left_width - visible_width(image_lines[i]))
        else:
            image_part = " " * plan.left_width
        text_part = text_lines[i] if i < len(text_lines) else ""
        rows.append(image_part + gap + text_part)
    return Composition(header=list(plan.header), preamble="", rows=rows, trailing_blank_lines=1)


def compose_protocol(
    payload_escape: str,
    geometry: RenderGeometry,
    text_lines: list[str],
    plan: CompositionPlan,
) -> Composition:
    """Place a graphics protocol payload; the terminal overlays the image itself.

    The payload leaves the cursor on the image's top row, right of its last
    column. Rows are reserved with newlines first so the terminal scrolls
    before the image is drawn, not after.
    """
    if plan.layout == Layout.VERTICAL:
        reserved = geometry.rows
        rows = ["" for _ in range(geometry.rows)] + ["", *text_lines]
        trailing = plan.padding
    else:
        reserved = max(geometry.rows, len(text_lines))
        first_gap = " " * (max(0, plan.left_width - geometry.columns) + plan.padding)
        gap = " " * plan.padding
        rows = []
        for i in range(reserved):
            if i >= len(text_lines):
                rows.append("")
            elif i == 0:
                rows.append(first_gap + text_lines[0])
            else:
                rows.append(cursor_forward(max(plan.left_width, geometry.columns)) + gap + text_lines[i])
        trailing = 1

    preamble = "\n" * reserved + cursor_up(reserved) + payload_escape
    return Composition(header=list(plan.header), preamble=preamble, rows=rows, trailing_blank_lines=trailing)


def compose_info_only(text_lines: list[str], plan: CompositionPlan) -> Composition:
    return Composition(header=list(plan.header), preamble="", rows=list(text_lines), trailing_blank_lines=plan.padding)
