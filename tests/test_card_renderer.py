"""Smoke tests for the Pillow card renderer.

These tests verify that:
- Both card kinds render to RGB images of the expected width
- The upscale factor multiplies the output size
- Long text wraps instead of overflowing
- Invalid input raises RasterizationError
"""

from datetime import date

import pytest

from resource_map.core.cards import Card, build_full_card, build_pocket_card
from resource_map.core.exceptions import RasterizationError
from resource_map.core.models import UserData
from resource_map.processing.card_renderer import (
    FULL_CARD_WIDTH,
    POCKET_CARD_WIDTH,
    POCKET_MIN_HEIGHT,
    PillowCardRenderer,
    load_font,
    wrap_text,
)


@pytest.fixture()
def renderer():
    return PillowCardRenderer()


def test_full_card_renders(renderer, filled_data):
    img = renderer.rasterize(build_full_card(filled_data, today=date(2024, 5, 1)), 1)
    assert img.width == FULL_CARD_WIDTH
    assert img.height > 0


def test_scale_doubles_dimensions(renderer, filled_data):
    card = build_pocket_card(filled_data)
    small = renderer.rasterize(card, 1)
    large = renderer.rasterize(card, 2)
    assert small.width == POCKET_CARD_WIDTH
    assert large.width == 2 * POCKET_CARD_WIDTH
    assert large.height >= small.height


def test_pocket_card_has_minimum_height(renderer):
    img = renderer.rasterize(build_pocket_card(UserData.empty()), 1)
    assert img.height >= POCKET_MIN_HEIGHT


def test_empty_full_card_renders(renderer):
    img = renderer.rasterize(build_full_card(UserData.empty()), 1)
    assert img.width == FULL_CARD_WIDTH


def test_very_long_memory_grows_the_card(renderer):
    short = UserData.empty().with_field("memories", 0, "description", "Corto")
    long_text = " ".join(["Una memoria muy larga"] * 200)
    long = UserData.empty().with_field("memories", 0, "description", long_text)
    short_img = renderer.rasterize(build_full_card(short), 1)
    long_img = renderer.rasterize(build_full_card(long), 1)
    assert long_img.height > short_img.height


def test_unknown_kind_raises(renderer):
    with pytest.raises(RasterizationError):
        renderer.rasterize(Card(kind="poster", title="X"), 1)


def test_invalid_scale_raises(renderer, filled_data):
    with pytest.raises(RasterizationError):
        renderer.rasterize(build_pocket_card(filled_data), 0)


def test_wrap_text_respects_width(renderer):
    from PIL import Image, ImageDraw

    draw = ImageDraw.Draw(Image.new("RGB", (10, 10)))
    font = load_font(16)
    lines = wrap_text(draw, "palabra " * 40, font, 200)
    assert len(lines) > 1
    for line in lines:
        assert draw.textlength(line, font=font) <= 200


def test_wrap_text_breaks_overlong_word():
    from PIL import Image, ImageDraw

    draw = ImageDraw.Draw(Image.new("RGB", (10, 10)))
    font = load_font(18, bold=True)
    word = "Supercalifragilisticoespialidoso" * 2 + "AbcdefghIjkl"
    lines = wrap_text(draw, word, font, 336)
    assert len(lines) > 1
    assert "".join(lines) == word
    for line in lines:
        assert draw.textlength(line, font=font) <= 336


def test_overlong_pocket_name_wraps_onto_more_lines(renderer):
    short = UserData.empty().with_field("people", 0, "name", "Ana")
    long = UserData.empty().with_field("people", 0, "name", "A" * 72)
    short_img = renderer.rasterize(build_pocket_card(short), 1)
    long_img = renderer.rasterize(build_pocket_card(long), 1)
    assert long_img.width == POCKET_CARD_WIDTH
    assert long_img.height > short_img.height
