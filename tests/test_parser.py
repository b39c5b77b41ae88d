import math

import pytest

from core.commands import CommandType, Point
from core.parser import PRGParser


@pytest.fixture
def parser():
    return PRGParser()


SAMPLE = """#0
! comment
ptp/ev (X,Y),1.00000,1.00000,gDblRapidSpeed
Start gIntSubBuffer,ShutterOpen;TILL PST(gIntSubBuffer).#RUN = 0
wait 2
MSEG (X,Y),1.00000,1.00000
line (X,Y),1.00000,5.00000
arc2 (X,Y),5.00000,5.00000,-1.5708
ENDS (X,Y)
Start gIntSubBuffer,ShutterClose;TILL PST(gIntSubBuffer).#RUN = 0
STOP
"""


class TestParse:
    def test_sample_program(self, parser):
        program = parser.parse(SAMPLE)
        types = [c.command_type for c in program.commands]
        assert types == [CommandType.PTP, CommandType.MSEG, CommandType.LINE,
                         CommandType.ARC2, CommandType.ENDS]
        assert program.shutter_flags == [False, True, True, True, True]
        assert program.skipped_lines == []

    def test_flags_match_commands(self, parser):
        program = parser.parse(SAMPLE + "garbage\nLINE no coordinates\n")
        assert len(program.commands) == len(program.shutter_flags)

    def test_empty_input(self, parser):
        program = parser.parse("")
        assert program.commands == []
        assert program.shutter_flags == []

    def test_points_and_line_numbers(self, parser):
        program = parser.parse(SAMPLE)
        line = program.commands[2]
        assert line.point == Point(1.0, 5.0)
        assert line.line_number == 7

    @pytest.mark.parametrize("prefix", ["!", "#"])
    def test_comment_and_header_lines_never_produce_commands(self, parser, prefix):
        text = "\n".join(f"{prefix}{body}" for body in [
            "LINE (X,Y),1,1", "MSEG (X,Y),0,0", "ShutterOpen", "", "anything"])
        program = parser.parse(text)
        assert program.commands == []
        assert program.skipped_lines == []

    def test_shutter_line_with_motion_text_only_toggles(self, parser):
        program = parser.parse("LINE (X,Y),9,9 ShutterOpen\nLINE (X,Y),1,1\n"
                               "PTP (X,Y),2,2 ShutterClose\nLINE (X,Y),3,3")
        assert [c.point for c in program.commands] == [Point(1, 1), Point(3, 3)]
        assert program.shutter_flags == [True, False]

    def test_shutter_defaults_closed(self, parser):
        program = parser.parse("LINE (X,Y),1,1")
        assert program.shutter_flags == [False]

    def test_case_insensitive_keywords(self, parser):
        program = parser.parse("mseg (x,y),1,2\nLiNe (X,Y),3,4\nends (x,y)")
        assert [c.command_type for c in program.commands] == [
            CommandType.MSEG, CommandType.LINE, CommandType.ENDS]


class TestParameters:
    @pytest.mark.parametrize("keyword", ["MSEG", "LINE", "ARC2", "PTP"])
    def test_point_required(self, parser, keyword):
        program = parser.parse(f"{keyword} (X,Y)")
        assert program.commands == []
        assert len(program.skipped_lines) == 1
        assert program.skipped_lines[0].line_number == 1

    def test_ends_without_point(self, parser):
        program = parser.parse("ENDS (X,Y)\nENDS")
        assert [c.command_type for c in program.commands] == [CommandType.ENDS] * 2
        assert all(c.point is None for c in program.commands)

    def test_ends_with_point(self, parser):
        program = parser.parse("ENDS (X,Y),2,3")
        assert program.commands[0].point == Point(2, 3)

    def test_signed_and_decimal_numbers(self, parser):
        program = parser.parse("LINE (X,Y), -1.5 , +.25\nLINE (X,Y),3.,-0")
        assert program.commands[0].point == Point(-1.5, 0.25)
        assert program.commands[1].point == Point(3.0, 0.0)

    def test_arc_angle(self, parser):
        program = parser.parse("ARC2 (X,Y),4,0,1.5707963")
        arc = program.commands[0]
        assert arc.angle == pytest.approx(math.pi / 2, rel=1e-6)
        assert arc.speed is None

    def test_arc_without_angle_is_kept(self, parser):
        program = parser.parse("ARC2 (X,Y),4,0")
        assert len(program.commands) == 1
        assert program.commands[0].angle is None

    def test_ptp_speed(self, parser):
        program = parser.parse("ptp/ev (X,Y),1,2,250\nptp/ev (X,Y),1,2,gDblRapidSpeed")
        assert program.commands[0].speed == 250.0
        assert program.commands[0].angle is None
        assert program.commands[1].speed is None

    def test_unrecognized_lines_are_reported(self, parser):
        program = parser.parse("MOVE somewhere\nLINE (X,Y),1,1")
        assert len(program.commands) == 1
        skipped = program.skipped_lines
        assert [(s.line_number, s.text) for s in skipped] == [(1, "MOVE somewhere")]
        assert skipped[0].reason == "Unrecognized line"

    def test_parser_is_reusable(self, parser):
        first = parser.parse("ShutterOpen\nLINE (X,Y),1,1")
        second = parser.parse("LINE (X,Y),1,1")
        assert first.shutter_flags == [True]
        assert second.shutter_flags == [False]

    def test_overflowing_coordinates_are_skipped(self, parser):
        huge = "9" * 400
        program = parser.parse(f"MSEG (X,Y),0,0\nLINE (X,Y),{huge},1\nENDS (X,Y)")
        assert [c.command_type for c in program.commands] == [CommandType.MSEG,
                                                             CommandType.ENDS]
        assert len(program.shutter_flags) == 2
        skipped = program.skipped_lines
        assert [s.line_number for s in skipped] == [2]
        assert skipped[0].reason == "LINE requires finite (X,Y) coordinates"

    def test_overflowing_third_value_is_dropped(self, parser):
        program = parser.parse(f"ARC2 (X,Y),1,1,-{'9' * 400}")
        assert program.commands[0].point == Point(1, 1)
        assert program.commands[0].angle is None
