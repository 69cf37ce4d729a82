"""
Export pipeline: load the deck, enumerate its slides, capture each one, merge.

Runs strictly in sequence against a single renderer session. The session
holds exactly one current slide, so captures are never interleaved. Every
failure aborts the run; the output file is only written after the last slide
has been merged, so a failed run never leaves a partial document behind.
"""

from __future__ import annotations

import logging
import tempfile
from enum import Enum
from pathlib import Path
from typing import Callable, ContextManager, Optional

from deckpdf.assembler import DocumentAssembler
from deckpdf.capture import capture_slide
from deckpdf.config import RenderSettings
from deckpdf.errors import InputNotFound
from deckpdf.export_schema import ExportRequest, ExportResult
from deckpdf.renderer import RendererSession, open_session
from deckpdf.slides import RevealDeck, enumerate_slides

log = logging.getLogger(__name__)

SessionFactory = Callable[[int, int, RenderSettings], ContextManager[RendererSession]]


class Stage(Enum):
    IDLE = "idle"
    SESSION_OPENED = "session opened"
    DOCUMENT_LOADED = "document loaded"
    MEDIA_EMULATED = "media emulated"
    ENUMERATED = "enumerated"
    CAPTURING = "capturing"
    ASSEMBLING = "assembling"
    SERIALIZED = "serialized"
    CLOSED = "closed"


def _enter(stage: Stage) -> Stage:
    log.debug("stage -> %s", stage.value)
    return stage


def check_input(request: ExportRequest) -> None:
    """Fail fast on a missing local input, before any browser is launched."""
    path = request.input_path
    if path is not None and not path.is_file():
        raise InputNotFound(request.input_location)


def export_deck(
    request: ExportRequest,
    settings: Optional[RenderSettings] = None,
    session_factory: Optional[SessionFactory] = None,
) -> ExportResult:
    """Export the reveal.js deck at ``request.input_location`` to a PDF.

    Args:
        request: Input/output locations and the page size in pixels.
        settings: Settle delays, load timeout and headless mode.
        session_factory: Callable returning a context manager that yields a
            renderer session; defaults to a Playwright Chromium session.

    Returns:
        ExportResult with the output path, page count and slide manifest.
    """
    settings = settings or RenderSettings()
    session_factory = session_factory or open_session
    width, height = request.width, request.height

    check_input(request)
    log.info("Converting %s to PDF at %dx%d...", request.input_location, width, height)

    stage = _enter(Stage.IDLE)
    try:
        with tempfile.TemporaryDirectory(prefix="deckpdf-") as tmp_dir, \
                session_factory(width, height, settings) as session:
            workdir = Path(tmp_dir)
            stage = _enter(Stage.SESSION_OPENED)

            session.set_viewport(width, height)
            session.navigate(request.input_url)
            stage = _enter(Stage.DOCUMENT_LOADED)

            # Print media would apply the deck's print stylesheet, not the screen layout
            session.emulate_media("screen")
            session.wait(settings.init_delay_ms)
            stage = _enter(Stage.MEDIA_EMULATED)

            deck = RevealDeck(session)
            manifest = enumerate_slides(deck)
            stage = _enter(Stage.ENUMERATED)

            log.info("Generating PDF by rendering each slide...")
            assembler = DocumentAssembler(request.output_location)
            stage = _enter(Stage.CAPTURING)
            for i, coordinate in enumerate(manifest):
                log.info(
                    "Rendering slide %d/%d (%s)...", i + 1, manifest.total_count, coordinate
                )
                page = capture_slide(
                    deck, coordinate, i, width, height, workdir, settings.slide_delay_ms
                )
                assembler.append(page)

            stage = _enter(Stage.ASSEMBLING)
            page_count = assembler.page_count
            output_path = assembler.save()
            stage = _enter(Stage.SERIALIZED)
    except Exception:
        log.debug("run aborted in stage %s", stage.value)
        raise
    finally:
        _enter(Stage.CLOSED)

    log.info("Successfully created %s (%d pages)", output_path, page_count)
    return ExportResult(output_path=output_path, page_count=page_count, manifest=manifest)
