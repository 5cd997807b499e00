"""
Tier 2: Integration Tests — run the Inkscape effect end to end (requires inkex)

The effect is driven exactly as Inkscape drives it: an input SVG file plus
--option=value arguments, with the resulting document written to a stream.
The output is parsed back with inkex and inspected element by element.
"""
import io
import math
import pytest

inkex = pytest.importorskip("inkex")

from bezier_spiral import generate
from bezier_spiral_effect import (
    BezierSpiralEffect,
    SPIRAL_GROUP_ID,
    SPIRAL_PATH_ID,
    HANDLES_GROUP_ID,
    POINTS_GROUP_ID,
)


BLANK_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg"
     xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
     xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
     width="200" height="200" viewBox="-100 -100 200 200">
  <sodipodi:namedview id="namedview1" inkscape:current-layer="layer1"/>
  <g id="layer1" inkscape:groupmode="layer" inkscape:label="Layer 1"/>
</svg>
"""


# ═══════════════════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def blank_svg(tmp_path):
    path = tmp_path / "blank.svg"
    path.write_text(BLANK_SVG)
    return path


def run_effect(svg_path, *options):
    """Run the effect on `svg_path` and return the parsed output document."""
    out = io.BytesIO()
    BezierSpiralEffect().run([str(svg_path), *options], output=out)
    return inkex.load_svg(io.BytesIO(out.getvalue())).getroot()


def expected_curve_count(start=0.0, end=1800.0, step=90.0, sep=10.0):
    return len(generate((0.0, 0.0), math.radians(start), math.radians(end),
                        math.radians(step), sep))


# ═══════════════════════════════════════════════════════════════════════════════
#  Spiral path
# ═══════════════════════════════════════════════════════════════════════════════

class TestSpiralPath:
    """Default options draw a single five-turn cubic path in the current layer."""

    def test_group_in_current_layer(self, blank_svg):
        svg = run_effect(blank_svg)
        group = svg.getElementById(SPIRAL_GROUP_ID)
        assert group is not None
        assert group.getparent().get('id') == 'layer1'

    def test_path_has_one_cubic_per_curve(self, blank_svg):
        svg = run_effect(blank_svg)
        d = svg.getElementById(SPIRAL_PATH_ID).get('d')
        assert d.startswith("M 0.0 0.0 C ")
        assert d.count("C") == expected_curve_count()

    def test_path_only_m_and_c(self, blank_svg):
        svg = run_effect(blank_svg, "--end_angle=720", "--angle_step=45")
        d = svg.getElementById(SPIRAL_PATH_ID).get('d')
        letters = {ch for ch in d if ch.isalpha()}
        assert letters == {"M", "C"}

    def test_stroke_style(self, blank_svg):
        svg = run_effect(blank_svg, "--stroke_width=0.5")
        style = svg.getElementById(SPIRAL_PATH_ID).get('style')
        assert "fill:none" in style
        assert "stroke-width:0.5" in style

    def test_end_point_matches_turn_separation(self, blank_svg):
        """Two full turns at separation 10 end 20 units right of the origin."""
        svg = run_effect(blank_svg, "--end_angle=720", "--turn_separation=10")
        d = svg.getElementById(SPIRAL_PATH_ID).get('d')
        x, y = (float(v) for v in d.split()[-2:])
        assert x == pytest.approx(20.0, abs=1e-3)
        assert y == pytest.approx(0.0, abs=1e-3)

    def test_rerun_replaces_previous_spiral(self, blank_svg, tmp_path):
        first = tmp_path / "first.svg"
        out = io.BytesIO()
        BezierSpiralEffect().run([str(blank_svg)], output=out)
        first.write_bytes(out.getvalue())
        svg = run_effect(first, "--end_angle=360")
        groups = [e for e in svg.descendants() if e.get('id') == SPIRAL_GROUP_ID]
        assert len(groups) == 1
        d = svg.getElementById(SPIRAL_PATH_ID).get('d')
        assert d.count("C") == expected_curve_count(end=360.0)


# ═══════════════════════════════════════════════════════════════════════════════
#  Handles and control points
# ═══════════════════════════════════════════════════════════════════════════════

class TestHandlesAndPoints:

    def test_hidden_by_default(self, blank_svg):
        svg = run_effect(blank_svg)
        assert svg.getElementById(HANDLES_GROUP_ID) is None
        assert svg.getElementById(POINTS_GROUP_ID) is None

    def test_handles_two_per_curve(self, blank_svg):
        svg = run_effect(blank_svg, "--show_handles=true", "--end_angle=720")
        handles = svg.getElementById(HANDLES_GROUP_ID)
        assert len(handles) == 2 * expected_curve_count(end=720.0)
        styles = [line.get('style') for line in handles]
        assert "stroke:#0000FF" in styles[0]
        assert "stroke:#008000" in styles[1]

    def test_points_four_per_curve(self, blank_svg):
        svg = run_effect(blank_svg, "--show_points=true", "--end_angle=720",
                         "--stroke_width=2")
        points = svg.getElementById(POINTS_GROUP_ID)
        assert len(points) == 4 * expected_curve_count(end=720.0)
        assert points[0].get('r') == "1.0"
        assert points[0].get('cx') == "0.0"


# ═══════════════════════════════════════════════════════════════════════════════
#  Option validation
# ═══════════════════════════════════════════════════════════════════════════════

class TestValidation:
    """Bad options abort the extension instead of looping or drawing nothing."""

    def test_empty_range_aborts(self, blank_svg, capsys):
        with pytest.raises(SystemExit):
            run_effect(blank_svg, "--start_angle=90", "--end_angle=90")
        assert "end_angle" in capsys.readouterr().err

    def test_zero_step_aborts(self, blank_svg):
        with pytest.raises(SystemExit):
            run_effect(blank_svg, "--angle_step=0")

    def test_non_positive_turn_separation_aborts(self, blank_svg, capsys):
        with pytest.raises(SystemExit):
            run_effect(blank_svg, "--turn_separation=0")
        assert "Turn separation" in capsys.readouterr().err

    def test_coarse_step_warns(self, blank_svg, capsys):
        svg = run_effect(blank_svg, "--angle_step=120")
        assert svg.getElementById(SPIRAL_PATH_ID) is not None
        assert "drift" in capsys.readouterr().err
