from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from qr_wifi.config import VisualConfig
from qr_wifi.generator import matrix_from_text
from qr_wifi.matrix_utils import detect_quiet_zone, finder_origins, finder_pattern_modules
from qr_wifi.render import SVG_NAMESPACE, render_matrix_raster, render_matrix_vector, render_vector

NS = {"svg": SVG_NAMESPACE}
BLACK_ON_WHITE = VisualConfig(foreground="#000000", background="#FFFFFF", dots=False, eye_radius=0)


def test_matrix_has_no_border_by_default():
    matrix = matrix_from_text("https://example.com")
    assert len(matrix) == 25
    assert detect_quiet_zone(matrix) == 0
    assert all(matrix[0][:7])


def test_matrix_with_border():
    matrix = matrix_from_text("https://example.com", border=4)
    assert detect_quiet_zone(matrix) == 4


def test_matrix_rejects_unknown_ecc():
    with pytest.raises(ValueError):
        matrix_from_text("x", ecc="Z")


def test_finder_origins():
    matrix = matrix_from_text("hello")
    size = len(matrix)
    assert finder_origins(matrix) == [(0, 0), (size - 7, 0), (0, size - 7)]


def test_finder_modules_cover_three_blocks():
    matrix = matrix_from_text("hello")
    assert len(finder_pattern_modules(matrix)) == 3 * 49


def test_tiny_matrix_has_no_finders():
    assert finder_origins([[True] * 3 for _ in range(3)]) == []
    assert detect_quiet_zone([[False] * 3 for _ in range(3)]) == 0


def test_raster_uses_configured_colours():
    matrix = matrix_from_text("hello")
    image = render_matrix_raster(matrix, BLACK_ON_WHITE)
    assert image.size == (280, 280)
    assert image.getpixel((0, 0)) == (255, 255, 255)
    # centre of the top-left finder eye
    centre = 10 + int(3.5 * 260 / len(matrix))
    assert image.getpixel((centre, centre)) == (0, 0, 0)


def test_default_raster_background():
    image = render_matrix_raster(matrix_from_text("hello"), VisualConfig())
    assert image.getpixel((1, 1)) == (0xF6, 0xF0, 0xD7)


def test_vector_dots_and_rounded_eyes():
    root = ET.fromstring(render_vector("hello", VisualConfig()))
    assert root.get("viewBox") == "0 0 280 280"
    assert root.findall("svg:circle", NS)
    eyes = [rect for rect in root.findall("svg:rect", NS) if rect.get("rx")]
    assert len(eyes) == 9
    assert {rect.get("rx") for rect in eyes} == {"8"}


def test_vector_square_modules():
    root = ET.fromstring(render_matrix_vector(matrix_from_text("hello"), BLACK_ON_WHITE))
    assert not root.findall("svg:circle", NS)
    assert root.findall("svg:rect", NS)[0].get("fill") == "#FFFFFF"


def test_visual_config_validation():
    with pytest.raises(ValueError):
        VisualConfig(size=0)
    with pytest.raises(ValueError):
        VisualConfig(ecc="X")
    assert VisualConfig(size=100, quiet_zone=5).canvas_size == 110
