"""
Error definitions and diagnostics for the PRG parser and renderer.
"""
from enum import Enum
from dataclasses import dataclass
from typing import List


class PRGError(Exception):
    """Base class for all PRG processing errors."""


class ProgramInvariantError(PRGError, ValueError):
    """Raised when a program's command and shutter sequences disagree."""


class ConfigError(PRGError, ValueError):
    """Raised when a render configuration holds invalid values."""


class ErrorType(Enum):
    SYNTAX = "syntax"
    GEOMETRY = "geometry"


@dataclass
class Diagnostic:
    """A non-fatal finding tied to a line of program text."""
    line_number: int
    message: str
    error_type: ErrorType

    def __str__(self):
        return f"Line {self.line_number}: {self.message}"


class ErrorCollector:
    """Collects diagnostics produced while processing a program."""

    def __init__(self):
        self.errors: List[Diagnostic] = []

    def add_error(self, line_number: int, message: str, error_type: ErrorType):
        """Add a diagnostic to the collection."""
        self.errors.append(Diagnostic(line_number, message, error_type))

    def get_errors_for_line(self, line_number: int) -> List[Diagnostic]:
        """Get all diagnostics for a specific line."""
        return [error for error in self.errors if error.line_number == line_number]

    def clear(self):
        """Clear all diagnostics."""
        self.errors.clear()

    def get_all_errors(self) -> List[Diagnostic]:
        """Get all diagnostics sorted by line number."""
        return sorted(self.errors, key=lambda e: e.line_number)
