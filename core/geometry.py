"""
Geometry building for PRG programs.
Walks the shutter-annotated command stream once and produces finalized,
printing/rapid-tagged path records.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from core.commands import Command, CommandType, ORIGIN, Point, Program
from utils.errors import ErrorCollector, ErrorType, ProgramInvariantError
from utils.geometry import arc_length, calculate_arc_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class ArcTo:
    """Circular arc to ``point``; no axis rotation."""
    point: Point
    radius: float
    large_arc: int
    sweep: int
    angle: float


PathOp = Union[MoveTo, LineTo, ArcTo]


@dataclass(frozen=True)
class PathRecord:
    """A finalized drawable path tagged printing or rapid."""
    ops: Tuple[PathOp, ...]
    printing: bool

    def points(self) -> List[Point]:
        """Every point the path visits, in drawing order."""
        return [op.point for op in self.ops]

    def calculate_length(self) -> float:
        """Length of the drawn geometry."""
        length = 0.0
        previous = None
        for op in self.ops:
            if isinstance(op, ArcTo):
                length += arc_length(op.radius, op.angle)
            elif isinstance(op, LineTo):
                length += previous.distance_to(op.point)
            previous = op.point
        return length


@dataclass
class ActivePath:
    """An open, append-only path buffer."""
    ops: List[PathOp] = field(default_factory=list)
    opened_explicitly: bool = False

    def draws(self) -> bool:
        return len(self.ops) > 1


class _PathBuilder:
    """Working state of a single pass over a program."""

    def __init__(self, error_collector: Optional[ErrorCollector]):
        self.error_collector = error_collector
        self.cursor = ORIGIN
        self.active: Optional[ActivePath] = None
        self.paths: List[PathRecord] = []

        self.handlers = {
            CommandType.MSEG: self.handle_mseg,
            CommandType.ENDS: self.handle_ends,
            CommandType.LINE: self.handle_line,
            CommandType.ARC2: self.handle_arc2,
            CommandType.PTP: self.handle_ptp,
        }

    def run(self, program: Program) -> List[PathRecord]:
        for command, shutter_open in program.pairs():
            self.handlers[command.command_type](command, shutter_open)

        # A path left open at the end is rapid by convention
        self.finalize(False)
        return self.paths

    def finalize(self, printing: bool):
        """Close the active path; record it only if it draws something."""
        if self.active is not None and self.active.draws():
            self.paths.append(PathRecord(tuple(self.active.ops), printing))
        self.active = None

    def open_path(self, start: Point, explicit: bool):
        self.active = ActivePath([MoveTo(start)], opened_explicitly=explicit)

    def handle_mseg(self, command: Command, shutter_open: bool):
        """MSEG - begin an explicit segment. A cut-off path is never printing."""
        self.finalize(False)
        self.open_path(command.point, explicit=True)
        self.cursor = command.point

    def handle_ends(self, command: Command, shutter_open: bool):
        """ENDS - end the segment; its shutter flag decides the colour."""
        self.finalize(shutter_open)

    def handle_line(self, command: Command, shutter_open: bool):
        if self.active is None:
            self.open_path(self.cursor, explicit=False)
        self.active.ops.append(LineTo(command.point))
        self.cursor = command.point

    def handle_arc2(self, command: Command, shutter_open: bool):
        start, end = self.cursor, command.point
        arc_data = calculate_arc_data(start.x, start.y, end.x, end.y, command.angle)
        if arc_data is None:
            self._warn(command, "Degenerate ARC2 skipped "
                                f"(angle={command.angle}, end=({end.x}, {end.y}))")
            return

        radius, large_arc, sweep = arc_data
        if self.active is None:
            self.open_path(self.cursor, explicit=False)
        self.active.ops.append(ArcTo(end, radius, large_arc, sweep, command.angle))
        self.cursor = end

    def handle_ptp(self, command: Command, shutter_open: bool):
        """PTP - rapid jump. The jump itself is never drawn."""
        self.finalize(shutter_open)
        self.cursor = command.point

    def _warn(self, command: Command, message: str):
        logger.debug("Line %d: %s", command.line_number, message)
        if self.error_collector is not None:
            self.error_collector.add_error(command.line_number, message,
                                           ErrorType.GEOMETRY)


class GeometryRenderer:
    """Builds path records from a parsed program. Holds no per-call state."""

    def build_paths(self, program: Program,
                    error_collector: Optional[ErrorCollector] = None) -> List[PathRecord]:
        """
        Walk the program once and return its finalized paths.

        Args:
            program: Parsed program; commands and flags must have equal length
            error_collector: Optional sink for skipped-arc warnings

        Raises:
            ProgramInvariantError: if the program's sequences disagree in length
        """
        if not program.is_consistent():
            raise ProgramInvariantError(
                f"Program has {len(program.commands)} commands but "
                f"{len(program.shutter_flags)} shutter flags"
            )
        return _PathBuilder(error_collector).run(program)
