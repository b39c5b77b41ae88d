"""
Main PRG processor interface.
This is the primary entry point for turning PRG text into SVG.
"""
import logging
from typing import List, Dict, Any, Optional
from config.render_config import ConfigManager, RenderConfig
from core.commands import CommandType, Program
from core.geometry import GeometryRenderer, PathRecord
from core.markup import assemble_svg
from core.parser import PRGParser
from core.viewport import BoundingBox, compute_bounding_box
from utils.errors import Diagnostic, ErrorCollector, ErrorType

logger = logging.getLogger(__name__)


class PRGProcessor:
    """
    Main interface for PRG processing.
    Provides a simple API for the editor, the SVG viewer and the CLI.

    Keeps the result of the last call, so one instance must not be shared
    between threads.
    """

    def __init__(self):
        self.parser = PRGParser()
        self.renderer = GeometryRenderer()
        self.error_collector = ErrorCollector()
        self._program = Program()
        self._paths: List[PathRecord] = []
        self._last_processed_text = ""

    def process_program(self, prg_text: str) -> Program:
        """
        Parse PRG text and build its path geometry.

        Args:
            prg_text: Raw PRG program text

        Returns:
            The parsed program; skipped lines and degenerate geometry are
            reported through the diagnostics, never raised
        """
        self.error_collector.clear()
        self._last_processed_text = prg_text

        self._program = self.parser.parse(prg_text)
        for skipped in self._program.skipped_lines:
            self.error_collector.add_error(
                skipped.line_number, f"{skipped.reason}: {skipped.text}",
                ErrorType.SYNTAX
            )

        self._paths = self.renderer.build_paths(self._program, self.error_collector)
        logger.info("Processed %d commands into %d paths (%d diagnostics)",
                    len(self._program), len(self._paths),
                    len(self.error_collector.errors))
        return self._program

    def render_svg(self, config: Optional[RenderConfig] = None) -> str:
        """Render the last processed program to an SVG document."""
        config = config or ConfigManager.screen()
        return assemble_svg(self._paths, self._program, config.to_options())

    def save_svg(self, filepath: str, config: Optional[RenderConfig] = None):
        """Render the last processed program and write it to a file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(self.render_svg(config))
        logger.info("Saved SVG: %s", filepath)

    # Error handling methods for editor integration

    def get_errors_for_line(self, line_number: int) -> List[Diagnostic]:
        """Get all diagnostics for a specific line number."""
        return self.error_collector.get_errors_for_line(line_number)

    def get_all_errors(self) -> List[Diagnostic]:
        """Get all diagnostics from the last processing."""
        return self.error_collector.get_all_errors()

    # Geometry methods for the viewer

    def get_program(self) -> Program:
        return self._program

    def get_paths(self) -> List[PathRecord]:
        """Get all finalized paths."""
        return list(self._paths)

    def get_printing_paths(self) -> List[PathRecord]:
        return [path for path in self._paths if path.printing]

    def get_rapid_paths(self) -> List[PathRecord]:
        return [path for path in self._paths if not path.printing]

    def get_bounding_box(self) -> BoundingBox:
        """Get the padded bounding box of every point in the program."""
        return compute_bounding_box(self._program)

    def get_statistics(self) -> Dict[str, Any]:
        """Get processing and geometry statistics."""
        printing = self.get_printing_paths()
        rapid = self.get_rapid_paths()
        box = self.get_bounding_box()

        return {
            'processing': {
                'total_lines': len(self._last_processed_text.split('\n')),
                'total_commands': len(self._program),
                'skipped_lines': len(self._program.skipped_lines),
                'diagnostics': len(self.error_collector.errors),
            },
            'commands': {
                command_type.name: self._program.count_by_type(command_type)
                for command_type in CommandType
            },
            'geometry': {
                'total_paths': len(self._paths),
                'printing_paths': len(printing),
                'rapid_paths': len(rapid),
                'printing_length': sum(p.calculate_length() for p in printing),
                'rapid_length': sum(p.calculate_length() for p in rapid),
                'bounding_box': {
                    'min': [box.min_x, box.min_y],
                    'max': [box.max_x, box.max_y],
                    'size': [box.width, box.height],
                },
            },
        }

    def get_last_processed_text(self) -> str:
        return self._last_processed_text

    def reset(self):
        """Reset processor to initial state."""
        self.error_collector.clear()
        self._program = Program()
        self._paths = []
        self._last_processed_text = ""
