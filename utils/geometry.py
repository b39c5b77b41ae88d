"""
Utility functions for geometric calculations, primarily for ARC2 arcs.

An ARC2 move is given by its end point and the signed included angle of the
arc. SVG arcs need a radius and two flags instead, so these helpers rebuild
them from the chord.
"""
import math

TINY = 1e-12


def calculate_arc_data(x1, y1, x2, y2, angle):
    """
    Calculates SVG arc parameters for an ARC2 move.

    Returns (radius, large_arc_flag, sweep_flag), or None when the arc is
    degenerate: no angle, a zero-length chord, or an angle whose half-sine
    vanishes (0 or a full turn).
    """
    if angle is None or not math.isfinite(angle):
        return None

    chord = math.hypot(x2 - x1, y2 - y1)
    if chord < TINY:
        return None

    half_sine = math.sin(abs(angle) / 2.0)
    if abs(half_sine) < TINY:
        return None

    radius = chord / (2.0 * half_sine)
    large_arc = 1 if abs(angle) > math.pi else 0
    sweep = 1 if angle >= 0 else 0
    return abs(radius), large_arc, sweep


def arc_length(radius, angle):
    """Length of a circular arc with the given radius and included angle."""
    return abs(radius * angle)
