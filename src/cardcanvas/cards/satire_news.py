"""Satire news card: a headline over a dimmed background with an avatar badge."""

import logging
from dataclasses import dataclass

from cardcanvas.render.image import ImageLoaderFunc, ImageSource
from cardcanvas.render.surface import ACCENT_PRIMARY, ACCENT_SECONDARY, CanvasSurface, LayoutResult
from cardcanvas.utils.geometry import Explicit, circle_path, create_rect
from cardcanvas.utils.text import TextStyle

logger = logging.getLogger(__name__)

CARD_SIZE = 720
MARGIN = 55
HEADLINE_SIZE = 38
ACCENT_LINE_HEIGHT = 4
AVATAR_STROKE_WIDTH = 5

TITLE_TEXT = "News"
SUBTITLE_TEXT = "News and Nonsense"
DISCLAIMER_TEXT = "Note: This is purely a work of satire"


@dataclass
class SatireNewsCard:
    """
    A 720x720 satire news card.

    Attributes:
        headline: Claim made in the headline.
        name: Who makes the claim; the headline reads "{name} claims that {headline}".
        avatar: Image shown in the circular badge.
        background: Background image; the avatar is used when None.
    """

    headline: str
    name: str
    avatar: ImageSource
    background: ImageSource | None = None

    @property
    def headline_text(self) -> str:
        return f"{self.name} claims that {self.headline}"

    def render(self, canvas: CanvasSurface) -> LayoutResult:
        """
        Draw the card onto a surface.

        Args:
            canvas: Surface to draw on, normally CARD_SIZE x CARD_SIZE.

        Returns:
            Layout of the headline block.
        """
        background = self.background if self.background is not None else self.avatar

        canvas.draw_image(
            background,
            canvas.left,
            canvas.top,
            width=canvas.width,
            height=canvas.height,
            fit="cover",
        )

        # Dim the lower part so the headline stays legible
        shade = create_rect(canvas.width, canvas.height / 1.1, left=0, bottom=canvas.bottom)
        canvas.draw_box(Explicit(shade), canvas.create_dim(shade, color="rgba(0,0,0,1)"))

        headline_rect = create_rect(
            canvas.width - MARGIN * 2, 100, left=MARGIN, top=canvas.bottom - 200
        )
        headline = canvas.draw_text(
            TextStyle(
                text=self.headline_text,
                x=headline_rect.left,
                y=headline_rect.bottom,
                size=HEADLINE_SIZE,
                font_type="bold",
                fill="white",
                align="left",
                v_align="top",
                baseline="middle",
                break_to="top",
                break_max_width=headline_rect.width,
                y_margin=4,
            )
        )
        logger.debug(f"Headline laid out in {len(headline.lines)} line(s): {headline.rect}")

        self._draw_avatar(canvas, headline)
        self._draw_masthead(canvas, headline_rect.bottom)
        return headline

    def _draw_avatar(self, canvas: CanvasSurface, headline: LayoutResult) -> None:
        diameter = (canvas.width - MARGIN * 2) / 3
        box = create_rect(
            diameter,
            diameter,
            left=canvas.left + MARGIN,
            bottom=headline.rect.top - headline.line_height / 2,
        )
        radius = diameter / 2

        canvas.draw_image(
            self.avatar,
            box.left,
            box.top,
            width=diameter,
            height=diameter,
            clip_to=circle_path(box.center, radius),
            fit="cover",
        )
        canvas.draw_circle(box.center, radius, stroke=ACCENT_PRIMARY, stroke_width=AVATAR_STROKE_WIDTH)

    def _draw_masthead(self, canvas: CanvasSurface, headline_bottom: float) -> None:
        line_width = canvas.width - MARGIN * 2
        line_top = headline_bottom + 20

        line_a = create_rect(line_width / 2, ACCENT_LINE_HEIGHT, left=MARGIN, top=line_top)
        line_b = create_rect(line_width / 2, ACCENT_LINE_HEIGHT, left=MARGIN + line_width / 2, top=line_top)
        canvas.draw_box(Explicit(line_a), ACCENT_PRIMARY)
        canvas.draw_box(Explicit(line_b), ACCENT_SECONDARY)

        logo = create_rect(line_width, 20, left=canvas.left + MARGIN, top=line_a.bottom + 10)

        canvas.draw_text(
            TextStyle(
                text=TITLE_TEXT,
                x=logo.left,
                y=logo.bottom,
                size=logo.height,
                font_type="bold",
                fill="cyan",
                align="left",
                v_align="top",
            )
        )
        canvas.draw_text(
            TextStyle(
                text=SUBTITLE_TEXT,
                x=logo.left,
                y=logo.bottom + 2,
                size=10,
                font_type="normal",
                fill="white",
                align="left",
                v_align="bottom",
            )
        )
        canvas.draw_text(
            TextStyle(
                text=DISCLAIMER_TEXT,
                x=logo.right,
                y=logo.bottom,
                size=15,
                font_type="normal",
                fill="rgba(255,255,255,0.6)",
                align="right",
                v_align="top",
                baseline="middle",
            )
        )

    def to_png(self, loader: ImageLoaderFunc | None = None) -> bytes:
        """
        Render the card on a fresh surface and encode it.

        Args:
            loader: Image loader for the avatar and background sources.

        Returns:
            PNG bytes.
        """
        canvas = CanvasSurface(CARD_SIZE, CARD_SIZE, loader=loader)
        self.render(canvas)
        return canvas.to_png()
