import xml.etree.ElementTree as ET

import pytest

from core.commands import Point, Program
from core.geometry import ArcTo, LineTo, MoveTo, PathRecord
from core.markup import (PRINTING_COLOR, RAPID_COLOR, RenderOptions, path_data,
                         render, stroke_style)
from core.parser import PRGParser

SVG_NS = "{http://www.w3.org/2000/svg}"

TWO_SQUARES = """ptp/ev (X,Y),1,1,gDblRapidSpeed
ShutterOpen
MSEG (X,Y),1,1
line (X,Y),1,5
line (X,Y),5,5
line (X,Y),5,1
line (X,Y),1,1
ENDS (X,Y)
ShutterClose
ptp/ev (X,Y),2,2,gDblRapidSpeed
MSEG (X,Y),2,2
line (X,Y),2,4
arc2 (X,Y),4,4,-1.5707963267948966
ENDS (X,Y)
"""


def parse_svg(markup):
    root = ET.fromstring(markup)
    group = root.find(f"{SVG_NS}g")
    return root, group, group.findall(f"{SVG_NS}path")


class TestPathData:
    def test_line_and_arc_commands(self):
        record = PathRecord((MoveTo(Point(0, 0)), LineTo(Point(0, 4.5)),
                             ArcTo(Point(4, 0), 2.8284271247, 0, 1, 1.5707963)), True)
        assert path_data(record) == "M 0 0 L 0 4.5 A 2.828427 2.828427 0 0 1 4 0"

    def test_styles(self):
        printing = stroke_style(True, 0.05)
        rapid = stroke_style(False, 0.05)
        assert printing['stroke'] == PRINTING_COLOR
        assert printing['stroke_width'] == "0.05"
        assert rapid['stroke'] == RAPID_COLOR
        assert rapid['stroke_width'] == "0.035"
        assert PRINTING_COLOR != RAPID_COLOR
        for style in (printing, rapid):
            assert style['fill'] == 'none'
            assert style['stroke_linecap'] == 'round'
            assert style['stroke_linejoin'] == 'round'


class TestRender:
    def test_document_structure(self):
        program = PRGParser().parse(TWO_SQUARES)
        markup = render(program, RenderOptions(width=800, height=600, line_thickness=0.1))
        root, group, paths = parse_svg(markup)

        assert root.get("viewBox") == "0 0 6 6"
        assert root.get("width") == "800"
        assert root.get("height") == "600"
        assert group.get("transform") == "translate(3, 3) scale(1, -1) translate(-3, -3)"
        assert len(paths) == 2

        first, second = paths
        assert first.get("d") == "M 1 1 L 1 5 L 5 5 L 5 1 L 1 1"
        assert first.get("stroke") == PRINTING_COLOR
        assert first.get("stroke-width") == "0.1"
        assert second.get("stroke") == RAPID_COLOR
        assert second.get("stroke-width") == "0.07"
        assert second.get("d").startswith("M 2 2 L 2 4 A 1.414214 1.414214 0 0 0 4 4")
        for path in paths:
            assert path.get("fill") == "none"
            assert path.get("stroke-linecap") == "round"
            assert path.get("stroke-linejoin") == "round"

    def test_rendering_is_deterministic(self):
        program = PRGParser().parse(TWO_SQUARES)
        options = RenderOptions(width=640, height=480, line_thickness=0.05)
        assert render(program, options) == render(program, options)

    def test_empty_program_renders_default_viewport(self):
        markup = render(PRGParser().parse(""))
        root, group, paths = parse_svg(markup)
        assert root.get("viewBox") == "-1 -1 2 2"
        assert paths == []
        assert group.get("transform") == "translate(0, 0) scale(1, -1) translate(0, 0)"

    @pytest.mark.parametrize("thickness, expected", [(1, "0.7"), (0.5, "0.35")])
    def test_rapid_thickness_ratio(self, thickness, expected):
        program = PRGParser().parse("MSEG (X,Y),0,0\nLINE (X,Y),1,1\nENDS (X,Y)")
        _, _, paths = parse_svg(render(program, RenderOptions(line_thickness=thickness)))
        assert paths[0].get("stroke-width") == expected

    def test_program_without_drawing(self):
        program = Program()
        _, _, paths = parse_svg(render(program))
        assert paths == []

    def test_overflowing_coordinates_never_reach_markup(self):
        huge = "9" * 400
        program = PRGParser().parse(
            f"MSEG (X,Y),0,0\nLINE (X,Y),{huge},1\nLINE (X,Y),2,2\nENDS (X,Y)"
        )
        markup = render(program)
        root, group, paths = parse_svg(markup)
        assert "inf" not in markup
        assert root.get("viewBox") == "-1 -1 4 4"
        assert group.get("transform") == "translate(1, 1) scale(1, -1) translate(-1, -1)"
        assert [p.get("d") for p in paths] == ["M 0 0 L 2 2"]

    def test_default_line_thickness(self):
        program = PRGParser().parse("ShutterOpen\nMSEG (X,Y),0,0\nLINE (X,Y),1,1\nENDS (X,Y)")
        _, _, paths = parse_svg(render(program))
        assert paths[0].get("stroke-width") == "0.05"
