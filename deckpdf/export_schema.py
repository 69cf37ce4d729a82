"""
Data classes passed between the stages of the export pipeline.

SlideManifest is produced once by the enumerator, CapturedPage once per slide
by the capture step, and ExportRequest is fixed for the whole run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from deckpdf.config import DEFAULT_HEIGHT, DEFAULT_WIDTH
from deckpdf.errors import ConfigurationError

_URL_SCHEMES = ("http://", "https://", "file://")


@dataclass(frozen=True, order=True)
class SlideCoordinate:
    h: int  # horizontal stack index
    v: int = 0  # vertical index within the stack

    def __post_init__(self) -> None:
        if self.h < 0 or self.v < 0:
            raise ValueError(f"Slide indices must be non-negative, got ({self.h}, {self.v})")

    def __str__(self) -> str:
        return f"h:{self.h}, v:{self.v}"


@dataclass(frozen=True)
class SlideManifest:
    total_count: int  # as reported by the deck controller; advisory
    coordinates: tuple[SlideCoordinate, ...] = ()

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self) -> Iterator[SlideCoordinate]:
        return iter(self.coordinates)

    @property
    def mismatch(self) -> bool:
        return self.total_count != len(self.coordinates)


@dataclass
class CapturedPage:
    """A single-page PDF written by the capture step, consumed by the assembler."""

    index: int
    coordinate: SlideCoordinate
    path: Path
    width_px: int
    height_px: int

    def discard(self) -> None:
        self.path.unlink(missing_ok=True)


def _parse_dimension(name: str, value) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    if isinstance(value, str):
        try:
            value = int(value.strip(), 10)
        except ValueError:
            raise ConfigurationError(
                f"{name} must be a positive integer, got {value!r}"
            ) from None
    if not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


@dataclass(frozen=True)
class ExportRequest:
    input_location: str
    output_location: Path
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_location", Path(self.output_location))
        object.__setattr__(self, "width", _parse_dimension("Width", self.width))
        object.__setattr__(self, "height", _parse_dimension("Height", self.height))

    @classmethod
    def from_cli(
        cls,
        input_location: str,
        output_location: str,
        width: Optional[str] = None,
        height: Optional[str] = None,
    ) -> ExportRequest:
        """Build a request from raw command-line strings.

        Width and height must be given together; omitting both selects the
        default 3840x2160.
        """
        if (width is None) != (height is None):
            raise ConfigurationError("Width and height must be given together")
        if width is None:
            return cls(input_location, Path(output_location))
        return cls(input_location, Path(output_location), width, height)

    @property
    def is_remote(self) -> bool:
        return self.input_location.startswith(("http://", "https://"))

    @property
    def input_path(self) -> Optional[Path]:
        """Local filesystem path of the input, or None for http(s) URLs."""
        if self.is_remote:
            return None
        if self.input_location.startswith("file://"):
            return Path(url2pathname(urlparse(self.input_location).path))
        return Path(self.input_location)

    @property
    def input_url(self) -> str:
        if self.input_location.startswith(_URL_SCHEMES):
            return self.input_location
        return self.input_path.resolve().as_uri()


@dataclass
class ExportResult:
    output_path: Path
    page_count: int
    manifest: SlideManifest = field(default_factory=lambda: SlideManifest(0))
