"""
PRG parser for turning classified lines into a shutter-annotated program.
"""
import logging
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from core.commands import Command, CommandType, Point, Program, SkippedLine
from core.lexer import PRGLexer, Token, TokenType, SILENT_TOKEN_TYPES

logger = logging.getLogger(__name__)


@dataclass
class _ParseState:
    """Accumulator carried through the fold over lines."""
    shutter_open: bool = False
    commands: List[Command] = field(default_factory=list)
    flags: List[bool] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)


class PRGParser:
    """
    Parses PRG text into a ``Program``.

    Parsing is permissive: lines that cannot be understood are dropped and
    reported in ``Program.skipped_lines``, never raised. The parser keeps no
    per-call state on the instance, so it can be reused freely.
    """

    NUMBER = r'[+-]?(?:\d+\.?\d*|\.\d+)'

    # (X,Y),<x>,<y>[,<third>]
    PARAMETER_PATTERN = re.compile(
        r'\(\s*X\s*,\s*Y\s*\)\s*,\s*(' + NUMBER + r')\s*,\s*(' + NUMBER + r')'
        r'(?:\s*,\s*(' + NUMBER + r'))?',
        re.IGNORECASE
    )

    # Commands that are dropped when their coordinates are missing
    POINT_REQUIRED = frozenset({
        CommandType.MSEG, CommandType.LINE, CommandType.ARC2, CommandType.PTP,
    })

    def __init__(self, lexer: Optional[PRGLexer] = None):
        self.lexer = lexer or PRGLexer()

    def parse(self, prg_text: str) -> Program:
        """Parse PRG text into commands and their shutter flags."""
        state = _ParseState()
        for token in self.lexer.tokenize(prg_text):
            self._step(state, token)

        logger.debug("Parsed %d commands, skipped %d lines",
                     len(state.commands), len(state.skipped))
        return Program(state.commands, state.flags, state.skipped)

    def _step(self, state: _ParseState, token: Token):
        """Fold a single token into the accumulator."""
        if token.type in SILENT_TOKEN_TYPES:
            return

        if token.type == TokenType.SHUTTER_OPEN:
            state.shutter_open = True
            return
        if token.type == TokenType.SHUTTER_CLOSE:
            state.shutter_open = False
            return

        if token.type == TokenType.UNKNOWN:
            state.skipped.append(SkippedLine(token.line_number, token.text,
                                             "Unrecognized line"))
            return

        command = self.parse_motion(token)
        if command is None:
            state.skipped.append(SkippedLine(
                token.line_number, token.text,
                f"{token.keyword} requires finite (X,Y) coordinates"
            ))
            return

        state.commands.append(command)
        state.flags.append(state.shutter_open)

    def parse_motion(self, token: Token) -> Optional[Command]:
        """Build a command from a motion token, or None if it must be dropped."""
        command_type = token.command_type
        point, third = self.extract_parameters(token.text)

        if point is None and command_type in self.POINT_REQUIRED:
            return None

        angle = third if command_type == CommandType.ARC2 else None
        speed = third if command_type == CommandType.PTP else None
        return Command(command_type, point, angle=angle, speed=speed,
                       line_number=token.line_number)

    def extract_parameters(self, text: str) -> Tuple[Optional[Point], Optional[float]]:
        """
        Extract the (x, y) point and the optional third number from a line.

        Values that do not fit in a float are treated as missing.
        """
        match = self.PARAMETER_PATTERN.search(text)
        if not match:
            return None, None

        x, y = float(match.group(1)), float(match.group(2))
        # Overlong digit runs overflow to inf
        point = Point(x, y) if math.isfinite(x) and math.isfinite(y) else None
        third = float(match.group(3)) if match.group(3) is not None else None
        if third is not None and not math.isfinite(third):
            third = None
        return point, third
