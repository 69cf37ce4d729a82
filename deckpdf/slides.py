"""
Slide discovery for reveal.js decks.

reveal.js lays slides out as a horizontal row of ``<section>`` stacks; a stack
with nested ``<section>`` children holds vertical slides. Every leaf slide is
addressed by ``Reveal.slide(h, v)``.
"""

from __future__ import annotations

import logging

from deckpdf.errors import UnsupportedDocument
from deckpdf.export_schema import SlideCoordinate, SlideManifest

log = logging.getLogger(__name__)

# ── Deck controller queries (evaluated inside the page) ─────────────
HAS_REVEAL_JS = "() => typeof Reveal !== 'undefined'"
TOTAL_SLIDES_JS = "() => Reveal.getTotalSlides()"
HORIZONTAL_COUNT_JS = "() => Reveal.getHorizontalSlides().length"
VERTICAL_COUNT_JS = (
    "(h) => Reveal.getHorizontalSlides()[h].querySelectorAll('section').length"
)
GOTO_JS = "({h, v}) => { Reveal.slide(h, v); }"


class RevealDeck:
    """The reveal.js API of the loaded page, reached through ``session.evaluate``."""

    def __init__(self, session):
        self.session = session

    def is_present(self) -> bool:
        return bool(self.session.evaluate(HAS_REVEAL_JS))

    def total_slides(self) -> int:
        return int(self.session.evaluate(TOTAL_SLIDES_JS))

    def horizontal_count(self) -> int:
        return int(self.session.evaluate(HORIZONTAL_COUNT_JS))

    def vertical_count(self, h: int) -> int:
        return int(self.session.evaluate(VERTICAL_COUNT_JS, h))

    def go_to(self, coordinate: SlideCoordinate) -> None:
        self.session.evaluate(GOTO_JS, {"h": coordinate.h, "v": coordinate.v})


def enumerate_slides(deck: RevealDeck) -> SlideManifest:
    """Build the ordered traversal plan for every leaf slide of *deck*.

    Coordinates come out in (h, v) order. The controller's reported total is
    kept for progress reporting only; if it disagrees with the enumerated
    list, the list wins and a warning is logged.
    """
    if not deck.is_present():
        raise UnsupportedDocument("reveal.js not detected in the loaded document")

    total = deck.total_slides()
    coordinates: list[SlideCoordinate] = []
    for h in range(deck.horizontal_count()):
        stack = deck.vertical_count(h)
        if stack > 1:
            coordinates.extend(SlideCoordinate(h, v) for v in range(stack))
        else:
            coordinates.append(SlideCoordinate(h, 0))

    if not coordinates:
        raise UnsupportedDocument("reveal.js deck contains no slides")

    manifest = SlideManifest(total_count=total, coordinates=tuple(coordinates))
    if manifest.mismatch:
        log.warning(
            "reveal.js reports %d slides but %d were enumerated; exporting %d",
            total, len(manifest), len(manifest),
        )
    log.info("Detected reveal.js presentation with %d slides", len(manifest))
    return manifest
