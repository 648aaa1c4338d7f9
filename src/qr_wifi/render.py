"""Raster and vector surfaces for a QR matrix.

Both renderers share the same geometry: the symbol fills ``visual.size``
pixels inside a ``visual.quiet_zone`` pixel margin, body modules are drawn as
dots or squares, and each finder pattern is drawn as three nested rounded
rectangles (dark frame, light ring, dark eye).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple
from xml.sax.saxutils import quoteattr

from PIL import Image, ImageDraw

from .config import VisualConfig
from .generator import matrix_from_text
from .matrix_utils import FINDER_SIZE, dark_modules, finder_origins, finder_pattern_modules

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

Box = Tuple[float, float, float, float]


@dataclass(frozen=True)
class _Layout:
    matrix: List[List[bool]]
    visual: VisualConfig

    @property
    def cell(self) -> float:
        return self.visual.size / len(self.matrix)

    def module_box(self, x: int, y: int) -> Box:
        left = self.visual.quiet_zone + x * self.cell
        top = self.visual.quiet_zone + y * self.cell
        return left, top, left + self.cell, top + self.cell

    def body_boxes(self) -> Iterator[Box]:
        skip = finder_pattern_modules(self.matrix)
        for x, y in dark_modules(self.matrix, skip):
            yield self.module_box(x, y)

    def eye_shapes(self) -> Iterator[Tuple[Box, float, bool]]:
        """Yield ``(box, radius, dark)`` for each layer of each finder pattern."""
        for origin_x, origin_y in finder_origins(self.matrix):
            for inset, dark in ((0, True), (1, False), (2, True)):
                span = (FINDER_SIZE - 2 * inset) * self.cell
                left, top, _, _ = self.module_box(origin_x + inset, origin_y + inset)
                box = (left, top, left + span, top + span)
                yield box, _clamp_radius(self.visual.eye_radius, span), dark


def _clamp_radius(radius: float, span: float) -> float:
    return max(0.0, min(float(radius), span / 2.0))


def render_matrix_raster(matrix: Sequence[Sequence[bool]], visual: VisualConfig) -> Image.Image:
    layout = _Layout([list(row) for row in matrix], visual)
    canvas = visual.canvas_size
    image = Image.new("RGB", (canvas, canvas), visual.background)
    draw = ImageDraw.Draw(image)

    for box in map(_pixel_box, layout.body_boxes()):
        if visual.dots:
            draw.ellipse(box, fill=visual.foreground)
        else:
            draw.rectangle(box, fill=visual.foreground)

    for box, radius, dark in layout.eye_shapes():
        box = _pixel_box(box)
        fill = visual.foreground if dark else visual.background
        if radius > 0:
            draw.rounded_rectangle(box, radius=radius, fill=fill)
        else:
            draw.rectangle(box, fill=fill)
    return image


def render_matrix_vector(matrix: Sequence[Sequence[bool]], visual: VisualConfig) -> str:
    layout = _Layout([list(row) for row in matrix], visual)
    canvas = visual.canvas_size
    foreground = quoteattr(visual.foreground)
    background = quoteattr(visual.background)

    out: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{SVG_NAMESPACE}" version="1.1" width="{canvas}" height="{canvas}" '
        f'viewBox="0 0 {canvas} {canvas}">',
        f'<rect x="0" y="0" width="{canvas}" height="{canvas}" fill={background}/>',
    ]
    half = layout.cell / 2.0
    for left, top, right, bottom in layout.body_boxes():
        if visual.dots:
            out.append(
                f'<circle cx="{_num(left + half)}" cy="{_num(top + half)}" r="{_num(half)}" fill={foreground}/>'
            )
        else:
            out.append(
                f'<rect x="{_num(left)}" y="{_num(top)}" width="{_num(right - left)}" '
                f'height="{_num(bottom - top)}" fill={foreground}/>'
            )
    for (left, top, right, bottom), radius, dark in layout.eye_shapes():
        fill = foreground if dark else background
        out.append(
            f'<rect x="{_num(left)}" y="{_num(top)}" width="{_num(right - left)}" '
            f'height="{_num(bottom - top)}" rx="{_num(radius)}" ry="{_num(radius)}" fill={fill}/>'
        )
    out.append("</svg>")
    return "\n".join(out) + "\n"


def render_raster(text: str, visual: VisualConfig) -> Image.Image:
    matrix = matrix_from_text(text, ecc=visual.ecc)
    logger.debug("Rendering %dx%d matrix as raster", len(matrix), len(matrix))
    return render_matrix_raster(matrix, visual)


def render_vector(text: str, visual: VisualConfig) -> str:
    matrix = matrix_from_text(text, ecc=visual.ecc)
    logger.debug("Rendering %dx%d matrix as vector", len(matrix), len(matrix))
    return render_matrix_vector(matrix, visual)


def _pixel_box(box: Box) -> Tuple[int, int, int, int]:
    left, top, right, bottom = (round(value) for value in box)
    # Pillow treats the far edge as inclusive.
    return left, top, max(left, right - 1), max(top, bottom - 1)


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text or "0"
