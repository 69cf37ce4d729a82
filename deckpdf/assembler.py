"""
Merge captured single-page PDFs into the final document with pypdf.

Chromium can only print whole documents, so each captured slide arrives as a
separate one-page PDF and its first page is copied into the output.
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from deckpdf.config import PT_PER_PX
from deckpdf.errors import AssemblyFailed, OutputWriteFailed
from deckpdf.export_schema import CapturedPage

log = logging.getLogger(__name__)

_SIZE_TOLERANCE_PT = 1.0


class DocumentAssembler:
    """Builds the output PDF page by page, in the order pages are appended."""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self._writer = PdfWriter()
        self._saved = False

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def append(self, page: CapturedPage) -> None:
        """Copy the single page of *page* into the output, then discard its file."""
        try:
            try:
                data = page.path.read_bytes()
                reader = PdfReader(io.BytesIO(data))
                if len(reader.pages) == 0:
                    raise AssemblyFailed(page.index, "captured document has no pages")
                source = reader.pages[0]
            except (PyPdfError, OSError, ValueError) as e:
                raise AssemblyFailed(page.index, str(e)) from e

            self._check_size(page, float(source.mediabox.width), float(source.mediabox.height))
            self._writer.add_page(source)
        finally:
            page.discard()

    def _check_size(self, page: CapturedPage, width_pt: float, height_pt: float) -> None:
        want_w = page.width_px * PT_PER_PX
        want_h = page.height_px * PT_PER_PX
        if abs(width_pt - want_w) > _SIZE_TOLERANCE_PT or abs(height_pt - want_h) > _SIZE_TOLERANCE_PT:
            log.warning(
                "Slide %d (%s) is %.1fx%.1fpt, expected %.1fx%.1fpt",
                page.index + 1, page.coordinate, width_pt, height_pt, want_w, want_h,
            )

    def save(self) -> Path:
        """Write the document to ``output_path``, replacing whatever was there.

        The bytes go to a temporary sibling first, so a failed write leaves any
        existing file untouched.
        """
        if self._saved:
            raise RuntimeError("DocumentAssembler.save() called twice")
        if self.page_count == 0:
            raise AssemblyFailed(None, "no pages to write")

        buf = io.BytesIO()
        try:
            self._writer.write(buf)
        except (PyPdfError, ValueError) as e:
            raise AssemblyFailed(None, f"could not serialise PDF: {e}") from e

        target = self.output_path
        partial = target.with_name(f".{target.name}.part")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            partial.write_bytes(buf.getvalue())
            os.replace(partial, target)
        except OSError as e:
            with contextlib.suppress(OSError):
                partial.unlink(missing_ok=True)
            raise OutputWriteFailed(target, str(e)) from e

        self._saved = True
        self._writer = PdfWriter()
        log.info("Wrote %s", target)
        return target
