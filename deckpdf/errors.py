"""
Exceptions raised by the export pipeline.

Every error is fatal to the run. Each carries the process exit code the CLI
reports for it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from deckpdf.export_schema import SlideCoordinate


class ExportError(Exception):
    exit_code = 1


class ConfigurationError(ExportError):
    """Invalid dimensions, preset or timing, detected before any browser launch."""

    exit_code = 2


class InputNotFound(ExportError):
    exit_code = 3

    def __init__(self, location: str):
        super().__init__(f"Input file '{location}' not found")
        self.location = location


class UnsupportedDocument(ExportError):
    """The loaded page has no recognised deck controller (reveal.js)."""

    exit_code = 4


class CaptureFailed(ExportError):
    exit_code = 5

    def __init__(self, coordinate: SlideCoordinate, index: int, reason: str):
        super().__init__(f"Capture of slide {index + 1} ({coordinate}) failed: {reason}")
        self.coordinate = coordinate
        self.index = index


class AssemblyFailed(ExportError):
    exit_code = 6

    def __init__(self, index: Optional[int], reason: str):
        if index is None:
            super().__init__(f"Could not assemble document: {reason}")
        else:
            super().__init__(f"Could not merge page {index + 1}: {reason}")
        self.index = index


class OutputWriteFailed(ExportError):
    exit_code = 7

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path


class RendererFailed(ExportError):
    """Browser launch, document load or media emulation failed."""

    exit_code = 8
