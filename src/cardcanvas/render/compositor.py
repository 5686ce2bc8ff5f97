"""Image compositing math: cover fit, source sampling and clip masks."""

from dataclasses import dataclass

from PIL import Image, ImageDraw

from cardcanvas.utils.geometry import CirclePath, ClipPath, RectPath

# Oversampling factor for antialiased circle masks
MASK_SUPERSAMPLE = 4


@dataclass(frozen=True)
class SourceRect:
    """Region of a source image to sample, in source pixel coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def box(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.left + self.width, self.top + self.height)


def cover_source_rect(
    natural_width: float, natural_height: float, dest_width: float, dest_height: float
) -> SourceRect:
    """
    Source region for an aspect-preserving fill of the destination.

    The image is scaled so it covers the destination completely; the overflowing
    axis is cropped evenly on both sides.

    Args:
        natural_width: Source image width.
        natural_height: Source image height.
        dest_width: Destination width.
        dest_height: Destination height.

    Returns:
        Centered SourceRect to sample.
    """
    scale = max(dest_width / natural_width, dest_height / natural_height)
    # Float error can push the covered axis a hair past the natural size
    source_width = min(dest_width / scale, natural_width)
    source_height = min(dest_height / scale, natural_height)
    return SourceRect(
        left=max(0.0, (natural_width - source_width) / 2),
        top=max(0.0, (natural_height - source_height) / 2),
        width=source_width,
        height=source_height,
    )


def sample_image(image: Image.Image, source: SourceRect, dest_size: tuple[int, int]) -> Image.Image:
    """Resample a source region of an image to the destination size."""
    dest_width, dest_height = (max(1, d) for d in dest_size)
    left, top, right, bottom = source.box
    box = (
        max(0.0, left),
        max(0.0, top),
        min(float(image.width), right),
        min(float(image.height), bottom),
    )
    return image.resize((dest_width, dest_height), Image.Resampling.LANCZOS, box=box)


def path_mask(path: ClipPath, size: tuple[int, int]) -> Image.Image:
    """
    Render a clip path as an "L" mask of the given canvas size.

    Rectangles are pixel aligned; circles are supersampled for smooth edges.
    """
    mask = Image.new("L", size, 0)

    if isinstance(path, RectPath):
        rect = path.rect
        box = (round(rect.left), round(rect.top), round(rect.right) - 1, round(rect.bottom) - 1)
        if box[2] >= box[0] and box[3] >= box[1]:
            ImageDraw.Draw(mask).rectangle(box, fill=255)
        return mask

    if isinstance(path, CirclePath):
        bounds = path.bounds
        left, top = int(bounds.left) - 1, int(bounds.top) - 1
        width, height = int(bounds.width) + 3, int(bounds.height) + 3

        big = Image.new("L", (width * MASK_SUPERSAMPLE, height * MASK_SUPERSAMPLE), 0)
        ImageDraw.Draw(big).ellipse(
            [
                (bounds.left - left) * MASK_SUPERSAMPLE,
                (bounds.top - top) * MASK_SUPERSAMPLE,
                (bounds.right - left) * MASK_SUPERSAMPLE,
                (bounds.bottom - top) * MASK_SUPERSAMPLE,
            ],
            fill=255,
        )
        mask.paste(big.resize((width, height), Image.Resampling.BOX), (left, top))
        return mask

    raise TypeError(f"Unsupported clip path: {type(path).__name__}")
