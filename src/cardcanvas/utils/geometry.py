"""Rectangle geometry resolved from partial anchor information."""

from dataclasses import dataclass, fields
from numbers import Real
from typing import Union

from cardcanvas.errors import ConfigError
from cardcanvas.types import Point


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Rect:
    """
    Absolute rectangle with every edge and center populated.

    Always build through `create_rect` so the derived fields stay consistent:
    right = left + width, bottom = top + height, and centers at the midpoints.
    """

    width: float
    height: float
    left: float
    top: float
    right: float
    bottom: float
    center_x: float
    center_y: float

    @property
    def center(self) -> Point:
        return (self.center_x, self.center_y)

    @property
    def box(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom), the form Pillow takes for shapes and crops."""
        return (self.left, self.top, self.right, self.bottom)


def create_rect(
    width: float | None = None,
    height: float | None = None,
    *,
    left: float | None = None,
    top: float | None = None,
    right: float | None = None,
    bottom: float | None = None,
    center_x: float | None = None,
    center_y: float | None = None,
) -> Rect:
    """
    Resolve a rectangle from its size and any sufficient set of anchors.

    Horizontal position is taken from `left`, else `center_x`, else `right`.
    Vertical position is taken from `top`, else `center_y`, else `bottom`.

    Args:
        width: Rectangle width in pixels.
        height: Rectangle height in pixels.
        left, top, right, bottom, center_x, center_y: Positioning hints.

    Returns:
        Rect with all fields populated.

    Raises:
        ConfigError: If width/height are not numbers or a position can't be resolved.
    """
    if not _is_number(width) or not _is_number(height):
        raise ConfigError("create_rect: width and height must be provided as numbers.")

    if _is_number(left):
        x = left
    elif _is_number(center_x):
        x = center_x - width / 2
    elif _is_number(right):
        x = right - width
    else:
        x = None

    if _is_number(top):
        y = top
    elif _is_number(center_y):
        y = center_y - height / 2
    elif _is_number(bottom):
        y = bottom - height
    else:
        y = None

    if x is None or y is None:
        raise ConfigError(
            "create_rect: insufficient data to calculate position. "
            "Provide at least (center_x/center_y), (right/bottom), or (left/top)."
        )

    return Rect(
        width=width,
        height=height,
        left=x,
        top=y,
        right=x + width,
        bottom=y + height,
        center_x=x + width / 2,
        center_y=y + height / 2,
    )


@dataclass(frozen=True)
class AnchorSpec:
    """Partial rectangle description: size plus whichever anchors the caller has."""

    width: float
    height: float
    left: float | None = None
    top: float | None = None
    right: float | None = None
    bottom: float | None = None
    center_x: float | None = None
    center_y: float | None = None

    def resolve(self) -> Rect:
        anchors = {f.name: getattr(self, f.name) for f in fields(self)}
        return create_rect(**anchors)


@dataclass(frozen=True)
class Explicit:
    """Box target given as an already resolved rectangle."""

    rect: Rect


@dataclass(frozen=True)
class Anchored:
    """Box target given as an anchor spec, resolved at draw time."""

    spec: AnchorSpec


BoxTarget = Union[Explicit, Anchored]


def resolve_target(target: Union[BoxTarget, Rect, AnchorSpec]) -> Rect:
    """
    Turn any accepted box target into a Rect.

    Bare Rect and AnchorSpec values are accepted as shorthand for the tagged forms.

    Raises:
        ConfigError: If the target is of an unknown kind or can't be resolved.
    """
    if isinstance(target, Explicit):
        return target.rect
    if isinstance(target, Anchored):
        return target.spec.resolve()
    if isinstance(target, Rect):
        return target
    if isinstance(target, AnchorSpec):
        return target.resolve()
    raise ConfigError(f"Unsupported box target: {type(target).__name__}")


@dataclass(frozen=True)
class RectPath:
    """Rectangular clip path."""

    rect: Rect


@dataclass(frozen=True)
class CirclePath:
    """Circular clip path."""

    center: Point
    radius: float

    @property
    def bounds(self) -> Rect:
        cx, cy = self.center
        return create_rect(self.radius * 2, self.radius * 2, center_x=cx, center_y=cy)


ClipPath = Union[RectPath, CirclePath]


def rect_path(rect: Rect) -> RectPath:
    return RectPath(rect)


def circle_path(center: Point, radius: float) -> CirclePath:
    return CirclePath(center=(center[0], center[1]), radius=radius)
