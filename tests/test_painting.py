"""Tests for the painting primitives: blending, lines, rectangles and text."""

from __future__ import annotations

import pytest

from ohlcrender.canvas import Canvas, Margin, text_extent
from ohlcrender.canvas.fonts import glyph

BLACK = 0x000000FF
WHITE = 0xFFFFFFFF
RED = 0xFF0000FF
BLUE = 0x0000FFFF


def _blank(width: int = 20, height: int = 20, background: int = BLACK) -> Canvas:
    return Canvas(width, height, Margin(0, 0, 0, 0), 1.0, 0.0, 1, background)


def _painted(canvas: Canvas, background=(0, 0, 0)) -> set:
    return {
        (x, y)
        for y in range(canvas.height)
        for x in range(canvas.width)
        if canvas.pixel(x, y) != background
    }


def test_opaque_colour_overwrites() -> None:
    canvas = _blank()
    canvas.colour(3, 4, 0x123456FF)
    assert canvas.pixel(3, 4) == (0x12, 0x34, 0x56)


@pytest.mark.parametrize("alpha", [0x00, 0x05, 0x0A])
def test_near_transparent_colour_is_a_no_op(alpha: int) -> None:
    canvas = _blank()
    canvas.colour(3, 4, 0xFFFFFF00 | alpha)
    assert canvas.pixel(3, 4) == (0, 0, 0)


def test_near_opaque_colour_overwrites() -> None:
    """Alpha at 96% or more skips blending entirely."""
    canvas = _blank(background=WHITE)
    canvas.colour(0, 0, 0x000000F6)
    assert canvas.pixel(0, 0) == (0, 0, 0)


def test_partial_alpha_blends_per_channel() -> None:
    """Half-alpha white over black rounds to 128; over red it mixes channels."""
    canvas = _blank()
    canvas.colour(1, 1, 0xFFFFFF80)
    assert canvas.pixel(1, 1) == (128, 128, 128)

    canvas.colour(2, 2, RED)
    canvas.colour(2, 2, 0x0000FF80)
    assert canvas.pixel(2, 2) == (127, 0, 128)


def test_out_of_bounds_pixels_are_ignored() -> None:
    canvas = _blank()
    for x, y in [(-1, 0), (0, -1), (20, 0), (0, 20), (-5, -5), (100, 100)]:
        canvas.colour(x, y, WHITE)
    assert _painted(canvas) == set()


def test_line_includes_both_endpoints() -> None:
    canvas = _blank()
    canvas.line((2, 5), (12, 5), WHITE)
    assert _painted(canvas) == {(x, 5) for x in range(2, 13)}


def test_single_point_line() -> None:
    canvas = _blank()
    canvas.line((7, 7), (7, 7), WHITE)
    assert _painted(canvas) == {(7, 7)}


@pytest.mark.parametrize(
    "a, b",
    [
        ((1, 2), (15, 7)),
        ((3, 18), (17, 1)),
        ((0, 0), (4, 19)),
        ((19, 0), (0, 19)),
        ((5, 5), (5, 15)),
    ],
)
def test_line_is_symmetric(a, b) -> None:
    """Swapping the endpoints paints exactly the same pixels."""
    forward = _blank()
    backward = _blank()
    forward.line(a, b, WHITE)
    backward.line(b, a, WHITE)
    assert forward.pixels == backward.pixels
    painted = _painted(forward)
    assert a in painted and b in painted


def test_line_paints_each_pixel_once() -> None:
    """A translucent steep line blends every pixel exactly once."""
    canvas = _blank()
    canvas.line((0, 0), (3, 10), 0xFFFFFF80)
    painted = _painted(canvas)
    assert len(painted) == 11
    assert {canvas.pixel(x, y) for x, y in painted} == {(128, 128, 128)}


def test_line_clips_offscreen_segments() -> None:
    canvas = _blank()
    canvas.line((-10, 5), (30, 5), WHITE)
    assert _painted(canvas) == {(x, 5) for x in range(20)}


def test_rect_corners_in_any_order() -> None:
    a = _blank()
    b = _blank()
    a.rect(2, 3, 5, 7, RED)
    b.rect(5, 7, 2, 3, RED)
    assert a.pixels == b.pixels
    assert _painted(a) == {(x, y) for x in range(2, 6) for y in range(3, 8)}


def test_translucent_rect_matches_opaque_footprint() -> None:
    opaque = _blank()
    translucent = _blank()
    opaque.rect(1, 1, 4, 4, WHITE)
    translucent.rect(4, 4, 1, 1, 0xFFFFFF80)
    assert _painted(opaque) == _painted(translucent)


def test_rect_is_clipped_to_the_buffer() -> None:
    canvas = _blank()
    canvas.rect(-5, -5, 2, 2, RED)
    canvas.rect(18, 18, 40, 40, RED)
    assert canvas.pixel(0, 0) == (255, 0, 0)
    assert canvas.pixel(19, 19) == (255, 0, 0)
    assert len(_painted(canvas)) == 9 + 4
    canvas.rect(30, 30, 40, 40, RED)
    assert len(_painted(canvas)) == 9 + 4


def test_text_extent() -> None:
    assert text_extent("abc") == (30, 17)
    assert text_extent("ab\nabcd") == (40, 34)
    assert text_extent("") == (0, 17)


def test_glyph_cells_have_the_cell_size() -> None:
    assert len(glyph("A")) == 10 * 17
    assert any(glyph("A"))
    assert not any(glyph(" "))


def test_text_paints_inside_glyph_cells() -> None:
    canvas = _blank(width=40, height=40)
    canvas.text((5, 5), "AB", WHITE)
    painted = _painted(canvas)
    assert painted
    assert all(5 <= x < 25 and 5 <= y < 22 for x, y in painted)
    assert any(x < 15 for x, _ in painted) and any(x >= 15 for x, _ in painted)


def test_text_newline_starts_a_new_row() -> None:
    canvas = _blank(width=40, height=40)
    canvas.text((0, 0), "\nH", WHITE)
    painted = _painted(canvas)
    assert painted
    assert all(17 <= y < 34 and x < 10 for x, y in painted)


def test_non_ascii_characters_render_as_space() -> None:
    """Characters outside ASCII occupy a cell but paint nothing."""
    canvas = _blank(width=40, height=40)
    canvas.text((0, 0), "é€", WHITE)
    assert _painted(canvas) == set()

    shifted = _blank(width=40, height=40)
    shifted.text((0, 0), "éX", WHITE)
    reference = _blank(width=40, height=40)
    reference.text((10, 0), "X", WHITE)
    assert shifted.pixels == reference.pixels


def test_text_with_outline_draws_border_and_clears_box() -> None:
    canvas = _blank(width=40, height=40)
    canvas.rect(0, 0, 39, 39, RED)
    canvas.text_with_outline((2, 2), " ", BLUE)
    # 10x17 text plus a one pixel border on each side
    assert canvas.pixel(2, 2) == (0, 0, 255)
    assert canvas.pixel(13, 20) == (0, 0, 255)
    assert canvas.pixel(2, 20) == (0, 0, 255)
    assert canvas.pixel(13, 2) == (0, 0, 255)
    assert canvas.pixel(7, 10) == (0, 0, 0)
    assert canvas.pixel(14, 10) == (255, 0, 0)


def test_text_with_background_fills_text_box() -> None:
    canvas = _blank(width=40, height=40)
    canvas.text_with_background((2, 2), " ", WHITE, BLUE)
    assert canvas.pixel(2, 2) == (0, 0, 255)
    assert canvas.pixel(11, 18) == (0, 0, 255)
    assert canvas.pixel(12, 2) == (0, 0, 0)
    assert canvas.pixel(2, 19) == (0, 0, 0)


def test_colour_point_matches_colour() -> None:
    a = _blank()
    b = _blank()
    a.colour_point((4, 9), 0xFFFFFF80)
    b.colour(4, 9, 0xFFFFFF80)
    assert a.pixels == b.pixels
