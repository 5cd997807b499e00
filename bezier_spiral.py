#!/usr/bin/env python3
"""
Bézier Spiral — cubic Bézier approximation of an Archimedean spiral.

Pipeline architecture:
    spiral_point_at(angle)  →  SpiralPoint (normalized spiral, radius = angle)
                 ↓
    segment_between(p0, p3)  →  Segment (control points, normalized space)
                 ↓
    spiral_segments(start, end, step)  →  [Segment, ..., closing Segment]
                 ↓
    to_curve(segment, center, turn_separation)  →  Curve (output space)

generate() runs the whole pipeline and is the only entry point most callers
need. The formatters at the bottom turn a Curve list into path commands and
an SVG `d` string; they know nothing about the spiral.
"""
import math
from collections import namedtuple


Point = namedtuple('Point', ['x', 'y'])

# A point on the normalized spiral with its analytic tangent direction.
SpiralPoint = namedtuple('SpiralPoint', ['angle', 'tangent_angle', 'point'])

# One spiral arc in normalized space; start/end keep their angle metadata.
Segment = namedtuple('Segment', ['start', 'control1', 'control2', 'end'])

Curve = namedtuple('Curve', ['p0', 'p1', 'p2', 'p3'])

TWO_PI = 2 * math.pi


# ═══════════════════════════════════════════════════════════════════════════════
#  Spiral geometry: points and tangents on the normalized spiral
# ═══════════════════════════════════════════════════════════════════════════════

def tangent_vector_at(angle):
    """Derivative of (a·cos a, a·sin a) with respect to a."""
    return Point(math.cos(angle) - angle * math.sin(angle),
                 math.sin(angle) + angle * math.cos(angle))


def spiral_point_at(angle):
    """Evaluate the normalized Archimedean spiral at `angle` (radians).

    The radius equals the angle, so one full turn grows the radius by 2π.
    Defined for every finite angle: the spiral passes through the origin at
    0 and negative angles trace the mirrored spiral.
    """
    vector = tangent_vector_at(angle)
    return SpiralPoint(
        angle=angle,
        tangent_angle=math.atan2(vector.y, vector.x),
        point=Point(angle * math.cos(angle), angle * math.sin(angle)),
    )


# ═══════════════════════════════════════════════════════════════════════════════
#  Segment construction: tangent-preserving control points
# ═══════════════════════════════════════════════════════════════════════════════

def control_point_offset(angle_span):
    """Handle length factor 4/3·tan(Δ/4) for an arc spanning `angle_span`."""
    return 4 * math.tan(angle_span / 4) / 3


def segment_between(p0, p3):
    """Build the cubic Bézier segment between two points on the spiral.

    The first control point leaves p0 along its tangent, the second arrives
    at p3 along its tangent (hence the reversed direction, θ - π). Handle
    lengths use the circular-arc factor 4/3·tan(Δ/4) scaled by each
    endpoint's own radius, which on the normalized spiral is its angle.

    Args:
        p0: SpiralPoint at the start of the segment.
        p3: SpiralPoint at the end of the segment.

    p0.angle must be strictly less than p3.angle; the result is undefined
    otherwise. Equal angles are tolerated in the sense that the handles
    collapse onto the endpoints.
    """
    offset = control_point_offset(p3.angle - p0.angle)
    start_length = offset * p0.angle
    end_length = offset * p3.angle
    end_direction = p3.tangent_angle - math.pi
    return Segment(
        start=p0,
        control1=Point(math.cos(p0.tangent_angle) * start_length + p0.point.x,
                       math.sin(p0.tangent_angle) * start_length + p0.point.y),
        control2=Point(math.cos(end_direction) * end_length + p3.point.x,
                       math.sin(end_direction) * end_length + p3.point.y),
        end=p3,
    )


# ═══════════════════════════════════════════════════════════════════════════════
#  Segment generation across an angular range
# ═══════════════════════════════════════════════════════════════════════════════

def validate_range(start_angle, end_angle, angle_step):
    """Raise ValueError unless the range can be split into segments."""
    for name, value in (('start_angle', start_angle),
                        ('end_angle', end_angle),
                        ('angle_step', angle_step)):
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")
    if angle_step <= 0:
        raise ValueError(f"angle_step must be positive, got {angle_step!r}")
    if end_angle <= start_angle:
        raise ValueError(
            f"end_angle ({end_angle!r}) must be greater than "
            f"start_angle ({start_angle!r})")


def spiral_segments(start_angle, end_angle, angle_step):
    """Split [start_angle, end_angle] into normalized spiral segments.

    Full steps end at start_angle + k·angle_step and are kept while that end
    angle is strictly below end_angle. One closing segment always follows,
    running from the last full-step boundary (or start_angle) to end_angle.
    Neighbouring segments share the SpiralPoint at their common boundary.

    Returns:
        List[Segment] in increasing angle order, never empty.
    """
    validate_range(start_angle, end_angle, angle_step)

    segments = []
    start = spiral_point_at(start_angle)
    k = 1
    while True:
        angle = start_angle + k * angle_step
        if angle >= end_angle:
            break
        end = spiral_point_at(angle)
        segments.append(segment_between(start, end))
        start = end
        k += 1

    segments.append(segment_between(start, spiral_point_at(end_angle)))
    return segments


# ═══════════════════════════════════════════════════════════════════════════════
#  Output space: center offset and turn separation
# ═══════════════════════════════════════════════════════════════════════════════

def to_output(point, center, turn_separation):
    """Map a normalized-spiral point into output coordinates.

    The center is added before scaling by turn_separation / 2π, so the
    center offset is scaled along with the spiral.
    """
    return Point((point[0] + center[0]) * turn_separation / TWO_PI,
                 (point[1] + center[1]) * turn_separation / TWO_PI)


def to_curve(segment, center, turn_separation):
    """Strip angle metadata from a Segment and move it to output space."""
    return Curve(
        p0=to_output(segment.start.point, center, turn_separation),
        p1=to_output(segment.control1, center, turn_separation),
        p2=to_output(segment.control2, center, turn_separation),
        p3=to_output(segment.end.point, center, turn_separation),
    )


def generate(center, start_angle, end_angle, angle_step, turn_separation):
    """Approximate an Archimedean spiral with cubic Bézier curves.

    Args:
        center: (x, y) center, in normalized units (see to_output).
        start_angle: First angle of the spiral, radians.
        end_angle: Last angle of the spiral, radians; must exceed start_angle.
        angle_step: Angular width of each full segment, radians; must be > 0.
        turn_separation: Output distance between consecutive windings.

    Returns:
        List[Curve]: contiguous curves, curves[i].p3 == curves[i + 1].p0.

    Raises:
        ValueError: on a non-positive step, an empty or inverted range, or
        non-finite angles.
    """
    return [to_curve(segment, center, turn_separation)
            for segment in spiral_segments(start_angle, end_angle, angle_step)]


# ═══════════════════════════════════════════════════════════════════════════════
#  Formatters: curves → path commands → SVG `d`
# ═══════════════════════════════════════════════════════════════════════════════

def curves_to_commands(curves):
    """Convert contiguous curves to absolute path commands.

    Returns:
        List[Tuple[str, List[float]]]: e.g. [('M', [x, y]), ('C', [x1,y1,x2,y2,x,y]), ...]
    """
    if not curves:
        return []
    first = curves[0].p0
    commands = [('M', [first.x, first.y])]
    for c in curves:
        commands.append(('C', [c.p1.x, c.p1.y, c.p2.x, c.p2.y, c.p3.x, c.p3.y]))
    return commands


def format_svg_d(commands, decimals=3):
    """Format path commands as an SVG `d` attribute string.

    Args:
        commands: Output of curves_to_commands().
        decimals: Decimal places for rounding coordinates.
    """
    parts = []
    for cmd, args in commands:
        rounded = [str(round(a, decimals)) for a in args]
        parts.append(f"{cmd} {' '.join(rounded)}" if rounded else cmd)
    return " ".join(parts)


def handle_lines(curves):
    """Control handles of every curve as (start, end, role) triples.

    Role 'start' is the outgoing handle p0 → p1, role 'end' the incoming
    handle p3 → p2.
    """
    lines = []
    for c in curves:
        lines.append((c.p0, c.p1, 'start'))
        lines.append((c.p3, c.p2, 'end'))
    return lines


def curve_points(curves):
    """All control points, four per curve, in curve order."""
    return [p for c in curves for p in c]
