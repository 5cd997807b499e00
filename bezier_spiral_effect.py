#!/usr/bin/env python3
"""
Bézier Spiral — Inkscape extension that draws an Archimedean spiral.

The spiral is built by bezier_spiral.generate() and written into the current
layer as a single cubic path:

    <g id="bezier-spiral">
        <path id="bezier-spiral-path" d="M ... C ..."/>
        <g id="bezier-spiral-handles"> <line/> ... </g>   (optional)
        <g id="bezier-spiral-points"> <circle/> ... </g>  (optional)
    </g>

Angles are entered in degrees in the dialog and converted to radians here;
the core module never sees degrees.
"""
import math

import inkex

from bezier_spiral import (
    generate,
    curves_to_commands,
    format_svg_d,
    handle_lines,
    curve_points,
)


SPIRAL_GROUP_ID = 'bezier-spiral'
SPIRAL_PATH_ID = 'bezier-spiral-path'
HANDLES_GROUP_ID = 'bezier-spiral-handles'
POINTS_GROUP_ID = 'bezier-spiral-points'

# Handle line and marker colors per role
HANDLE_COLORS = {'start': '#0000FF', 'end': '#008000'}
POINT_COLOR = '#FF0000'

# Above a quarter turn a single cubic drifts visibly from the spiral
MAX_ACCURATE_STEP_DEG = 90.0


class BezierSpiralEffect(inkex.EffectExtension):
    SVG_NS = '{http://www.w3.org/2000/svg}'
    INKSCAPE_NS = '{http://www.inkscape.org/namespaces/inkscape}'

    def add_arguments(self, pars):
        pars.add_argument("--active_tab", type=str, default="tab_spiral")
        pars.add_argument("--center_x", type=float, default=0.0)
        pars.add_argument("--center_y", type=float, default=0.0)
        pars.add_argument("--start_angle", type=float, default=0.0)
        pars.add_argument("--end_angle", type=float, default=1800.0)
        pars.add_argument("--angle_step", type=float, default=90.0)
        pars.add_argument("--turn_separation", type=float, default=10.0)
        pars.add_argument("--stroke_width", type=float, default=1.0)
        pars.add_argument("--show_handles", type=inkex.Boolean, default=False)
        pars.add_argument("--show_points", type=inkex.Boolean, default=False)
        pars.add_argument("--round_decimals", type=int, default=3)

    def effect(self):
        opts = self.options
        if opts.turn_separation <= 0:
            raise inkex.AbortExtension(
                f"Turn separation must be positive, got {opts.turn_separation}.")
        if opts.angle_step > MAX_ACCURATE_STEP_DEG:
            inkex.errormsg(
                f"Angle step {opts.angle_step}° is larger than "
                f"{MAX_ACCURATE_STEP_DEG:.0f}°; the curves will drift from the spiral.")

        try:
            curves = generate(
                center=(opts.center_x, opts.center_y),
                start_angle=math.radians(opts.start_angle),
                end_angle=math.radians(opts.end_angle),
                angle_step=math.radians(opts.angle_step),
                turn_separation=opts.turn_separation,
            )
        except ValueError as err:
            raise inkex.AbortExtension(
                f"Cannot draw the spiral:\n\n{err}\n\n"
                "Check that the end angle is past the start angle and the step is positive."
            ) from err

        self.remove_existing(SPIRAL_GROUP_ID)
        layer = self.svg.get_current_layer()
        group = inkex.etree.SubElement(layer, f'{self.SVG_NS}g', attrib={
            'id': SPIRAL_GROUP_ID,
            f'{self.INKSCAPE_NS}label': 'Bézier Spiral',
        })
        self.draw_spiral(group, curves)
        if opts.show_handles:
            self.draw_handles(group, curves)
        if opts.show_points:
            self.draw_points(group, curves)

    def remove_existing(self, element_id):
        """Drop an element left by a previous run, if any."""
        for elem in self.svg.descendants():
            if elem.get('id') == element_id:
                elem.getparent().remove(elem)
                break

    def _fmt(self, value):
        return str(round(value, self.options.round_decimals))

    def draw_spiral(self, parent, curves):
        d = format_svg_d(curves_to_commands(curves), self.options.round_decimals)
        inkex.etree.SubElement(parent, f'{self.SVG_NS}path', attrib={
            'id': SPIRAL_PATH_ID,
            'd': d,
            'style': f'fill:none;stroke:#000000;stroke-width:{self.options.stroke_width}',
        })

    def draw_handles(self, parent, curves):
        """Draw each control handle as a line, colored by start/end role."""
        handles = inkex.etree.SubElement(parent, f'{self.SVG_NS}g', attrib={
            'id': HANDLES_GROUP_ID,
            f'{self.INKSCAPE_NS}label': 'Handles',
        })
        width = self.options.stroke_width / 4.0
        for i, (start, end, role) in enumerate(handle_lines(curves)):
            inkex.etree.SubElement(handles, f'{self.SVG_NS}line', attrib={
                'id': f'{HANDLES_GROUP_ID}-{i}',
                'x1': self._fmt(start.x), 'y1': self._fmt(start.y),
                'x2': self._fmt(end.x), 'y2': self._fmt(end.y),
                'style': f'stroke:{HANDLE_COLORS[role]};stroke-width:{width}',
            })

    def draw_points(self, parent, curves):
        """Mark every control point with a small filled circle."""
        points = inkex.etree.SubElement(parent, f'{self.SVG_NS}g', attrib={
            'id': POINTS_GROUP_ID,
            f'{self.INKSCAPE_NS}label': 'Control points',
        })
        radius = self.options.stroke_width / 2.0
        for i, p in enumerate(curve_points(curves)):
            inkex.etree.SubElement(points, f'{self.SVG_NS}circle', attrib={
                'id': f'{POINTS_GROUP_ID}-{i}',
                'cx': self._fmt(p.x), 'cy': self._fmt(p.y),
                'r': str(radius),
                'style': f'fill:{POINT_COLOR};stroke:none',
            })


if __name__ == '__main__':
    BezierSpiralEffect().run()
