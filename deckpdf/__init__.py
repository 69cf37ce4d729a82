"""
deckpdf: export reveal.js presentations to PDF, one page per slide.

Drives headless Chromium (Playwright) through every slide of a deck, prints
each one to a single-page PDF and merges the pages in slide order.
"""

from deckpdf.config import DEFAULT_HEIGHT, DEFAULT_WIDTH, RenderSettings
from deckpdf.errors import (
    AssemblyFailed,
    CaptureFailed,
    ConfigurationError,
    ExportError,
    InputNotFound,
    OutputWriteFailed,
    RendererFailed,
    UnsupportedDocument,
)
from deckpdf.export_schema import (
    CapturedPage,
    ExportRequest,
    ExportResult,
    SlideCoordinate,
    SlideManifest,
)
from deckpdf.pipeline import export_deck

__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "RenderSettings",
    "ExportError",
    "ConfigurationError",
    "InputNotFound",
    "UnsupportedDocument",
    "CaptureFailed",
    "AssemblyFailed",
    "OutputWriteFailed",
    "RendererFailed",
    "SlideCoordinate",
    "SlideManifest",
    "CapturedPage",
    "ExportRequest",
    "ExportResult",
    "export_deck",
]
