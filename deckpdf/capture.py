"""
Single-slide capture: navigate, settle, print the viewport to a one-page PDF.
"""

from __future__ import annotations

import logging
from pathlib import Path

from deckpdf.errors import CaptureFailed, RendererFailed
from deckpdf.export_schema import CapturedPage, SlideCoordinate
from deckpdf.slides import RevealDeck

log = logging.getLogger(__name__)


def capture_slide(
    deck: RevealDeck,
    coordinate: SlideCoordinate,
    index: int,
    width: int,
    height: int,
    workdir: Path,
    settle_ms: int,
) -> CapturedPage:
    """Render the slide at *coordinate* into ``workdir/slide_<index>.pdf``.

    There is no completion signal for transitions or MathJax typesetting, so
    the page is given a fixed *settle_ms* after navigation before printing.
    Any failure removes the partial artifact and raises ``CaptureFailed``.
    """
    session = deck.session
    path = workdir / f"slide_{index:04d}.pdf"
    try:
        deck.go_to(coordinate)
        session.wait(settle_ms)
        session.print_viewport(width, height, path)
        if not path.is_file():
            raise OSError(f"renderer produced no file at {path}")
    except (RendererFailed, OSError) as e:
        path.unlink(missing_ok=True)
        raise CaptureFailed(coordinate, index, str(e)) from e

    log.debug("Captured %s -> %s", coordinate, path.name)
    return CapturedPage(
        index=index,
        coordinate=coordinate,
        path=path,
        width_px=width,
        height_px=height,
    )
