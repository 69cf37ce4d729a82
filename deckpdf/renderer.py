"""
Chromium renderer session built on Playwright's sync API.

One browser, one page, reused for every slide. The page is the only mutable
renderer state: whatever slide it shows is what ``print_viewport`` encodes.
Playwright errors are re-raised as ``RendererFailed`` so the pipeline stages
never depend on Playwright's exception types.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from deckpdf.config import LOAD_STATE, LOAD_TIMEOUT_MS, RenderSettings
from deckpdf.errors import RendererFailed

log = logging.getLogger(__name__)

_ZERO_MARGIN = {"top": "0", "right": "0", "bottom": "0", "left": "0"}


def _translate_errors(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except PlaywrightError as e:
            raise RendererFailed(f"{method.__name__} failed: {e.message}") from e

    return wrapper


class RendererSession:
    """Capabilities of a live browser page, as used by the export pipeline."""

    def __init__(self, page: Page, load_timeout_ms: int = LOAD_TIMEOUT_MS):
        self._page = page
        self._load_timeout_ms = load_timeout_ms

    @_translate_errors
    def set_viewport(self, width: int, height: int) -> None:
        self._page.set_viewport_size({"width": width, "height": height})

    @_translate_errors
    def navigate(self, url: str) -> None:
        log.info("Loading %s...", url)
        self._page.goto(url, wait_until=LOAD_STATE, timeout=self._load_timeout_ms)

    @_translate_errors
    def emulate_media(self, media: str) -> None:
        self._page.emulate_media(media=media)

    @_translate_errors
    def evaluate(self, script: str, arg: Any = None) -> Any:
        return self._page.evaluate(script, arg)

    @_translate_errors
    def wait(self, duration_ms: int) -> None:
        self._page.wait_for_timeout(duration_ms)

    @_translate_errors
    def print_viewport(self, width: int, height: int, path: Path) -> None:
        """Encode the currently displayed viewport as a one-page PDF at *path*."""
        self._page.pdf(
            path=str(path),
            width=f"{width}px",
            height=f"{height}px",
            print_background=True,
            prefer_css_page_size=False,
            margin=_ZERO_MARGIN,
        )


@contextmanager
def open_session(width: int, height: int, settings: RenderSettings) -> Iterator[RendererSession]:
    """Launch Chromium with a *width* x *height* viewport and close it on exit.

    The browser is closed on every exit path, including headed (debug) runs.
    """
    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(headless=settings.headless)
        except PlaywrightError as e:
            raise RendererFailed(
                f"Could not launch Chromium: {e.message}. "
                "Run: playwright install chromium"
            ) from e

        try:
            page = browser.new_page(viewport={"width": width, "height": height})
            yield RendererSession(page, load_timeout_ms=settings.load_timeout_ms)
        except PlaywrightError as e:
            raise RendererFailed(f"Browser session failed: {e.message}") from e
        finally:
            try:
                browser.close()
            except PlaywrightError as e:
                log.warning("Browser did not close cleanly: %s", e.message)
