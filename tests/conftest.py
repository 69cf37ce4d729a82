"""
Shared test fixtures.

The browser is replaced by FakeRevealSession, an in-process model of a
reveal.js deck that answers the same page queries as Chromium and prints
real one-page PDFs with pypdf.
"""

from contextlib import contextmanager
from pathlib import Path

import pytest
from pypdf import PdfWriter

from deckpdf import slides
from deckpdf.config import PT_PER_PX, RenderSettings
from deckpdf.errors import RendererFailed
from deckpdf.export_schema import CapturedPage, SlideCoordinate


def write_single_page_pdf(path: Path, width_px: int, height_px: int) -> Path:
    writer = PdfWriter()
    writer.add_blank_page(width=width_px * PT_PER_PX, height=height_px * PT_PER_PX)
    with open(path, "wb") as f:
        writer.write(f)
    return path


class FakeRevealSession:
    """Renderer session showing a reveal.js deck with the given vertical stacks.

    ``stacks[h]`` is the number of nested sections under horizontal slide h;
    0 or 1 both mean a plain single slide.
    """

    def __init__(self, stacks, has_reveal=True, reported_total=None, fail_on=None, load_error=None,
                 corrupt_output=False):
        self.stacks = list(stacks)
        self.has_reveal = has_reveal
        self.reported_total = reported_total
        self.fail_on = fail_on
        self.load_error = load_error
        self.corrupt_output = corrupt_output
        self.current = None
        self.viewport = None
        self.url = None
        self.media = None
        self.waits: list[int] = []
        self.visited: list[SlideCoordinate] = []
        self.printed: list[tuple[SlideCoordinate, Path]] = []

    def set_viewport(self, width, height):
        self.viewport = (width, height)

    def navigate(self, url):
        if self.load_error:
            raise RendererFailed(f"navigate failed: {self.load_error}")
        self.url = url

    def emulate_media(self, media):
        self.media = media

    def wait(self, duration_ms):
        self.waits.append(duration_ms)

    def evaluate(self, script, arg=None):
        if script == slides.HAS_REVEAL_JS:
            return self.has_reveal
        if not self.has_reveal:
            raise RendererFailed("ReferenceError: Reveal is not defined")
        if script == slides.TOTAL_SLIDES_JS:
            if self.reported_total is not None:
                return self.reported_total
            return sum(max(n, 1) for n in self.stacks)
        if script == slides.HORIZONTAL_COUNT_JS:
            return len(self.stacks)
        if script == slides.VERTICAL_COUNT_JS:
            return self.stacks[arg]
        if script == slides.GOTO_JS:
            coordinate = SlideCoordinate(arg["h"], arg["v"])
            if coordinate == self.fail_on:
                raise RendererFailed("evaluate failed: navigation timed out")
            self.current = coordinate
            self.visited.append(coordinate)
            return None
        raise AssertionError(f"unexpected script: {script}")

    def print_viewport(self, width, height, path):
        if self.corrupt_output:
            path.write_bytes(b"<html>not a pdf</html>")
        else:
            write_single_page_pdf(path, width, height)
        self.printed.append((self.current, path))


class FakeRenderer:
    """Session factory handing out FakeRevealSessions; counts launches and closes."""

    def __init__(self, stacks=(1,), **deck_kwargs):
        self.stacks = stacks
        self.deck_kwargs = deck_kwargs
        self.sessions: list[FakeRevealSession] = []
        self.launches = 0
        self.closes = 0

    @contextmanager
    def __call__(self, width, height, settings):
        self.launches += 1
        session = FakeRevealSession(self.stacks, **self.deck_kwargs)
        self.sessions.append(session)
        try:
            yield session
        finally:
            self.closes += 1

    @property
    def session(self) -> FakeRevealSession:
        return self.sessions[-1]


@pytest.fixture
def deck_html(tmp_path):
    path = tmp_path / "deck.html"
    path.write_text("<html><body><div class='reveal'></div></body></html>", encoding="utf-8")
    return path


@pytest.fixture
def fast_settings():
    return RenderSettings(init_delay_ms=0, slide_delay_ms=0, load_timeout_ms=1000)


@pytest.fixture
def make_page(tmp_path):
    """Write a captured one-page PDF and wrap it in a CapturedPage."""

    def _make(index, width=1920, height=1080, coordinate=None):
        path = write_single_page_pdf(tmp_path / f"captured_{index}.pdf", width, height)
        return CapturedPage(
            index=index,
            coordinate=coordinate or SlideCoordinate(index, 0),
            path=path,
            width_px=width,
            height_px=height,
        )

    return _make
