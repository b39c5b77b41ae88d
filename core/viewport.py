"""
Viewport fitting: padded bounding box and Y-flip transform.

PRG coordinates grow upward while SVG coordinates grow downward, so content is
mirrored about the centre of its own bounding box.
"""
from dataclasses import dataclass
from core.commands import Program
from utils.numbers import format_number

DEFAULT_PADDING = 1.0


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self):
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2


@dataclass(frozen=True)
class Viewport:
    view_box: str
    transform: str


def compute_bounding_box(program: Program, padding: float = DEFAULT_PADDING) -> BoundingBox:
    """
    Box over every point referenced by any command, expanded by ``padding``.

    A program without points is treated as a single point at the origin, so
    the result is always finite.
    """
    points = program.points()
    if not points:
        return BoundingBox(-padding, -padding, padding, padding)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoundingBox(min(xs) - padding, min(ys) - padding,
                       max(xs) + padding, max(ys) + padding)


def fit_viewport(box: BoundingBox) -> Viewport:
    """Build the SVG viewBox string and the Y-flip transform for a box."""
    view_box = " ".join(format_number(v) for v in
                        (box.min_x, box.min_y, box.width, box.height))

    cx, cy = box.center
    transform = (f"translate({format_number(cx)}, {format_number(cy)}) "
                 f"scale(1, -1) "
                 f"translate({format_number(-cx)}, {format_number(-cy)})")
    return Viewport(view_box, transform)
