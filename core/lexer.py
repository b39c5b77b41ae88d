"""
PRG lexer for classifying raw program text line by line.
"""
import re
from enum import Enum
from dataclasses import dataclass
from typing import List, Optional
from core.commands import CommandType


class TokenType(Enum):
    # Ignored lines
    BLANK = "BLANK"
    COMMENT = "COMMENT"
    HEADER = "HEADER"
    CONTROL = "CONTROL"

    # Shutter toggles
    SHUTTER_OPEN = "SHUTTER_OPEN"
    SHUTTER_CLOSE = "SHUTTER_CLOSE"

    # Motion commands
    MOTION = "MOTION"

    # Anything else
    UNKNOWN = "UNKNOWN"


# Lines of these kinds never produce a command and are not worth reporting
SILENT_TOKEN_TYPES = frozenset({
    TokenType.BLANK, TokenType.COMMENT, TokenType.HEADER, TokenType.CONTROL,
})


@dataclass
class Token:
    """Represents a single classified line of PRG text."""
    type: TokenType
    text: str
    line_number: int
    command_type: Optional[CommandType] = None
    keyword: Optional[str] = None

    def __str__(self):
        return f"{self.type.value}:{self.text}"


class PRGLexer:
    """Tokenizes PRG text into one classified token per line."""

    COMMENT_MARKER = '!'
    HEADER_MARKER = '#'

    # IF/END/STOP/TILL/WAIT; END must not swallow the ENDS motion keyword
    CONTROL_PATTERN = re.compile(r'^(IF|END(?!S)|STOP|TILL|WAIT)', re.IGNORECASE)

    SHUTTER_OPEN_MARKER = 'SHUTTEROPEN'
    SHUTTER_CLOSE_MARKER = 'SHUTTERCLOSE'

    # Order of attempt matters: first match wins
    MOTION_KEYWORDS = (
        ('MSEG', CommandType.MSEG),
        ('ENDS', CommandType.ENDS),
        ('LINE', CommandType.LINE),
        ('ARC2', CommandType.ARC2),
        ('PTP', CommandType.PTP),
    )

    def tokenize(self, prg_text: str) -> List[Token]:
        """Tokenize the entire PRG text."""
        return [self.tokenize_line(line, line_num)
                for line_num, line in enumerate(prg_text.split('\n'), 1)]

    def tokenize_line(self, line: str, line_number: int) -> Token:
        """Classify a single line of PRG text."""
        text = line.strip()
        if not text:
            return Token(TokenType.BLANK, text, line_number)

        if text.startswith(self.COMMENT_MARKER):
            return Token(TokenType.COMMENT, text, line_number)
        if text.startswith(self.HEADER_MARKER):
            return Token(TokenType.HEADER, text, line_number)

        control_match = self.CONTROL_PATTERN.match(text)
        if control_match:
            return Token(TokenType.CONTROL, text, line_number,
                         keyword=control_match.group(1).upper())

        # Shutter toggles win over any motion keyword on the same line
        upper = text.upper()
        if self.SHUTTER_OPEN_MARKER in upper:
            return Token(TokenType.SHUTTER_OPEN, text, line_number)
        if self.SHUTTER_CLOSE_MARKER in upper:
            return Token(TokenType.SHUTTER_CLOSE, text, line_number)

        for keyword, command_type in self.MOTION_KEYWORDS:
            if upper.startswith(keyword):
                return Token(TokenType.MOTION, text, line_number,
                             command_type=command_type, keyword=keyword)

        return Token(TokenType.UNKNOWN, text, line_number)
