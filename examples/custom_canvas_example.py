#!/usr/bin/env python3
"""
Custom Canvas Example

Build a layout directly on a CanvasSurface: a dimmed background, a wrapped
caption, and a badge positioned relative to where the caption ended.
"""

from pathlib import Path

from PIL import Image

from cardcanvas import CanvasSurface, TextStyle, create_rect
from cardcanvas.utils.geometry import Explicit, circle_path

# Stand-in images; replace with URLs or file paths
background = Image.new("RGB", (1600, 900), (40, 80, 200))
badge = Image.new("RGB", (300, 300), (200, 40, 40))

canvas = CanvasSurface(1080, 1080)
canvas.draw_image(background, 0, 0, width=canvas.width, height=canvas.height, fit="cover")

shade = create_rect(canvas.width, canvas.height / 2, left=0, bottom=canvas.bottom)
canvas.draw_box(Explicit(shade), canvas.create_dim(shade, fade_start=0.2, color="rgba(0, 0, 0, 0.85)"))

caption = canvas.draw_text(
    TextStyle(
        text="Breaking: local developer discovers that every layout is just rectangles all the way down",
        x=80,
        y=canvas.bottom - 120,
        size=52,
        font_type="bold",
        align="left",
        v_align="top",
        break_to="top",
        break_max_width=canvas.width - 160,
        y_margin=6,
    )
)

# Badge sits just above the caption block
box = create_rect(160, 160, left=80, bottom=caption.rect.top - 20)
canvas.draw_image(badge, box.left, box.top, width=box.width, height=box.height, clip_to=circle_path(box.center, 80), fit="cover")
canvas.draw_circle(box.center, 80, stroke="white", stroke_width=6)

Path("custom_canvas.png").write_bytes(canvas.to_png())
print(f"✓ Caption wrapped into {len(caption.lines)} lines; saved to custom_canvas.png")
