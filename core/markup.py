"""
SVG markup assembly for finalized PRG paths.
"""
import logging
from dataclasses import dataclass
from typing import List
import svgwrite
from core.commands import Program
from core.geometry import ArcTo, GeometryRenderer, LineTo, MoveTo, PathRecord
from core.viewport import compute_bounding_box, fit_viewport
from utils.numbers import format_number

logger = logging.getLogger(__name__)

PRINTING_COLOR = '#2563eb'  # Blue: shutter open
RAPID_COLOR = '#dc2626'     # Red: shutter closed
RAPID_THICKNESS_RATIO = 0.7
DEFAULT_LINE_THICKNESS = 0.05


@dataclass(frozen=True)
class RenderOptions:
    width: float = 800
    height: float = 600
    line_thickness: float = DEFAULT_LINE_THICKNESS


def path_data(record: PathRecord) -> str:
    """SVG ``d`` attribute for a path record."""
    parts = []
    for op in record.ops:
        x, y = format_number(op.point.x), format_number(op.point.y)
        if isinstance(op, MoveTo):
            parts.append(f"M {x} {y}")
        elif isinstance(op, LineTo):
            parts.append(f"L {x} {y}")
        elif isinstance(op, ArcTo):
            r = format_number(op.radius)
            parts.append(f"A {r} {r} 0 {op.large_arc} {op.sweep} {x} {y}")
    return " ".join(parts)


def stroke_style(printing: bool, line_thickness: float) -> dict:
    """Stroke attributes for the printing or rapid style."""
    if printing:
        color, width = PRINTING_COLOR, line_thickness
    else:
        color, width = RAPID_COLOR, line_thickness * RAPID_THICKNESS_RATIO
    return {
        'stroke': color,
        'stroke_width': format_number(width),
        'fill': 'none',
        'stroke_linecap': 'round',
        'stroke_linejoin': 'round',
    }


def assemble_svg(paths: List[PathRecord], program: Program,
                 options: RenderOptions) -> str:
    """Wrap path records in a viewport-fitted, Y-flipped SVG document."""
    viewport = fit_viewport(compute_bounding_box(program))

    drawing = svgwrite.Drawing(size=(format_number(options.width),
                                     format_number(options.height)),
                               debug=False)
    drawing['viewBox'] = viewport.view_box

    group = drawing.g(transform=viewport.transform)
    for record in paths:
        group.add(drawing.path(d=path_data(record),
                               **stroke_style(record.printing, options.line_thickness)))
    drawing.add(group)

    return drawing.tostring()


def render(program: Program, options: RenderOptions = RenderOptions(),
           error_collector=None) -> str:
    """Render a parsed program to an SVG document string."""
    paths = GeometryRenderer().build_paths(program, error_collector)
    logger.debug("Rendering %d paths", len(paths))
    return assemble_svg(paths, program, options)
