"""Tests for single-slide capture."""

import pytest
from pypdf import PdfReader

from deckpdf.capture import capture_slide
from deckpdf.config import PT_PER_PX
from deckpdf.errors import CaptureFailed
from deckpdf.export_schema import SlideCoordinate
from deckpdf.slides import RevealDeck
from tests.conftest import FakeRevealSession


def test_capture_writes_one_page_at_requested_size(tmp_path):
    session = FakeRevealSession([2])
    page = capture_slide(RevealDeck(session), SlideCoordinate(0, 1), 1, 1920, 1080, tmp_path, 250)

    assert page.path.is_file()
    assert page.path.parent == tmp_path
    assert (page.width_px, page.height_px) == (1920, 1080)
    assert page.coordinate == SlideCoordinate(0, 1)
    assert page.index == 1

    reader = PdfReader(page.path)
    assert len(reader.pages) == 1
    assert float(reader.pages[0].mediabox.width) == pytest.approx(1920 * PT_PER_PX)
    assert float(reader.pages[0].mediabox.height) == pytest.approx(1080 * PT_PER_PX)


def test_capture_navigates_then_settles_then_prints(tmp_path):
    session = FakeRevealSession([1, 1])
    capture_slide(RevealDeck(session), SlideCoordinate(1, 0), 1, 800, 600, tmp_path, 500)

    assert session.visited == [SlideCoordinate(1, 0)]
    assert session.waits == [500]
    assert session.printed[0][0] == SlideCoordinate(1, 0)


def test_navigation_failure_raises_capture_failed(tmp_path):
    session = FakeRevealSession([1, 1], fail_on=SlideCoordinate(1, 0))
    with pytest.raises(CaptureFailed) as exc_info:
        capture_slide(RevealDeck(session), SlideCoordinate(1, 0), 1, 800, 600, tmp_path, 0)

    assert exc_info.value.coordinate == SlideCoordinate(1, 0)
    assert exc_info.value.index == 1
    assert exc_info.value.exit_code == 5
    assert session.printed == []
    assert list(tmp_path.iterdir()) == []


def test_write_failure_removes_partial_artifact(tmp_path):
    class BrokenPrinter(FakeRevealSession):
        def print_viewport(self, width, height, path):
            path.write_bytes(b"%PDF-1.7 trunc")
            raise OSError("No space left on device")

    session = BrokenPrinter([1])
    with pytest.raises(CaptureFailed, match="No space left"):
        capture_slide(RevealDeck(session), SlideCoordinate(0, 0), 0, 800, 600, tmp_path, 0)
    assert list(tmp_path.iterdir()) == []


def test_missing_output_is_capture_failure(tmp_path):
    class SilentPrinter(FakeRevealSession):
        def print_viewport(self, width, height, path):
            pass

    with pytest.raises(CaptureFailed, match="no file"):
        capture_slide(RevealDeck(SilentPrinter([1])), SlideCoordinate(0, 0), 0, 800, 600, tmp_path, 0)
