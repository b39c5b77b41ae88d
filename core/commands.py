"""
Defines the PRG motion commands and the parsed program container.

These are small, plain data classes. The parser's sole purpose is to convert
PRG text into a list of these commands; the renderer only reads them. This
keeps a clean separation between text handling and geometry.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CommandType(Enum):
    PTP = "ptp"      # Point-to-point rapid move
    LINE = "line"    # Linear draw
    ARC2 = "arc2"    # Arc draw by end point and included angle
    MSEG = "mseg"    # Begin explicit motion segment
    ENDS = "ends"    # End explicit motion segment


@dataclass(frozen=True)
class Point:
    """A point in program units."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return (dx * dx + dy * dy) ** 0.5


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Command:
    """A single recognized motion command."""
    command_type: CommandType
    point: Optional[Point] = None
    angle: Optional[float] = None  # ARC2 only, radians, sign gives direction
    speed: Optional[float] = None  # PTP only, never used geometrically
    line_number: int = 0


@dataclass(frozen=True)
class SkippedLine:
    """A source line that was dropped without producing a command."""
    line_number: int
    text: str
    reason: str


@dataclass
class Program:
    """
    Parser output: commands paired index-for-index with shutter flags.

    ``shutter_flags[i]`` is the shutter state in effect when ``commands[i]``
    was recognized.
    """
    commands: List[Command] = field(default_factory=list)
    shutter_flags: List[bool] = field(default_factory=list)
    skipped_lines: List[SkippedLine] = field(default_factory=list)

    def __len__(self):
        return len(self.commands)

    def is_consistent(self) -> bool:
        return len(self.commands) == len(self.shutter_flags)

    def pairs(self):
        """Iterate over (command, shutter_flag) pairs."""
        return zip(self.commands, self.shutter_flags)

    def points(self) -> List[Point]:
        """Every point referenced by any command."""
        return [command.point for command in self.commands if command.point is not None]

    def count_by_type(self, command_type: CommandType) -> int:
        return sum(1 for command in self.commands if command.command_type == command_type)
