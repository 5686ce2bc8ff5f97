"""End-to-end tests for the satire news card."""

from io import BytesIO

import pytest
from PIL import Image

from cardcanvas.cards.satire_news import CARD_SIZE, MARGIN, SatireNewsCard
from cardcanvas.errors import LoadError
from cardcanvas.render.surface import CanvasSurface

AVATAR = "https://img.example/avatar.png"
LANDSCAPE = "https://img.example/landscape.png"


def test_headline_fits_break_width(dict_loader):
    canvas = CanvasSurface(CARD_SIZE, CARD_SIZE, loader=dict_loader)
    card = SatireNewsCard(
        headline="the moon is made of cheese and every astronaut has been hiding it for decades",
        name="Lance",
        avatar=AVATAR,
        background=LANDSCAPE,
    )

    headline = card.render(canvas)

    assert headline.rect.width <= CARD_SIZE - MARGIN * 2 == 610
    assert len(headline.lines) > 1
    assert headline.lines[-1].startswith("Lance claims that")
    assert headline.rect.bottom == CARD_SIZE - 100
    assert headline.rect.left == MARGIN
    assert canvas.state_depth == 1


def test_background_defaults_to_avatar(dict_loader):
    card = SatireNewsCard(headline="he love Jea", name="Lance", avatar=AVATAR)

    card.render(CanvasSurface(CARD_SIZE, CARD_SIZE, loader=dict_loader))

    assert dict_loader.calls == [AVATAR, AVATAR]


def test_avatar_badge_sits_above_headline(dict_loader):
    canvas = CanvasSurface(CARD_SIZE, CARD_SIZE, loader=dict_loader)
    card = SatireNewsCard(headline="he love Jea", name="Lance", avatar=AVATAR, background=LANDSCAPE)

    headline = card.render(canvas)

    diameter = (CARD_SIZE - MARGIN * 2) / 3
    badge_bottom = headline.rect.top - headline.line_height / 2
    center = (MARGIN + diameter / 2, badge_bottom - diameter / 2)
    r, g, b, a = canvas.to_image().getpixel((round(center[0]), round(center[1])))
    assert (r, g, b, a) == pytest.approx((200, 40, 40, 255), abs=30)


def test_to_png_produces_square_card(dict_loader):
    card = SatireNewsCard(headline="he love Jea", name="Lance", avatar=AVATAR, background=LANDSCAPE)

    png = card.to_png(dict_loader)

    img = Image.open(BytesIO(png))
    assert img.format == "PNG"
    assert img.size == (CARD_SIZE, CARD_SIZE)


def test_missing_image_raises_load_error(dict_loader):
    card = SatireNewsCard(headline="x", name="Lance", avatar="https://img.example/nope.png")

    with pytest.raises(LoadError):
        card.to_png(dict_loader)


def test_accepts_in_memory_images(solid_image):
    card = SatireNewsCard(headline="x", name="Lance", avatar=solid_image(), background=solid_image(size=(1600, 900)))

    canvas = CanvasSurface(CARD_SIZE, CARD_SIZE)
    card.render(canvas)

    assert canvas.to_image().getpixel((CARD_SIZE // 2, 5))[3] == 255


@pytest.mark.parametrize("size", [100, 200, 400, 480, 800])
def test_square_avatars_render(solid_image, size):
    card = SatireNewsCard(headline="x", name="Lance", avatar=solid_image(size=(size, size)))

    png = card.to_png()

    assert Image.open(BytesIO(png)).size == (CARD_SIZE, CARD_SIZE)
