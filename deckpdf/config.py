"""
Resolution and timing constants for the deck exporter.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import partial

from deckpdf.errors import ConfigurationError

# ── Output resolution (16:9, 4K by default) ──────────────────────────
DEFAULT_WIDTH = 3840
DEFAULT_HEIGHT = 2160

RESOLUTION_PRESETS: dict[str, tuple[int, int]] = {
    "1080p": (1920, 1080),
    "1440p": (2560, 1440),
    "4k": (3840, 2160),
}

# Chromium prints at 96 CSS px per inch, PDF user space is 72 pt per inch
PT_PER_PX = 72 / 96


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


# ── Browser timing ───────────────────────────────────────────────────
# Built-in defaults; DECKPDF_*_MS overrides are read when RenderSettings is built
INIT_DELAY_MS = 2000  # reveal.js boot + math typesetting
SLIDE_DELAY_MS = 500  # slide transition
LOAD_TIMEOUT_MS = 60000
LOAD_STATE = "networkidle"


@dataclass(frozen=True)
class RenderSettings:
    """Knobs for the browser session that are not part of the export request."""

    init_delay_ms: int = field(
        default_factory=partial(_env_int, "DECKPDF_INIT_DELAY_MS", INIT_DELAY_MS)
    )
    slide_delay_ms: int = field(
        default_factory=partial(_env_int, "DECKPDF_SLIDE_DELAY_MS", SLIDE_DELAY_MS)
    )
    load_timeout_ms: int = field(
        default_factory=partial(_env_int, "DECKPDF_LOAD_TIMEOUT_MS", LOAD_TIMEOUT_MS)
    )
    headless: bool = True  # False shows the browser window; it is still closed at the end

    def __post_init__(self) -> None:
        if self.init_delay_ms < 0 or self.slide_delay_ms < 0:
            raise ConfigurationError("Settle delays must not be negative")
        if self.load_timeout_ms <= 0:
            raise ConfigurationError("Load timeout must be positive")


def resolve_preset(name: str) -> tuple[int, int]:
    """Return (width, height) for a named resolution preset."""
    try:
        return RESOLUTION_PRESETS[name.lower()]
    except KeyError:
        choices = ", ".join(RESOLUTION_PRESETS)
        raise ConfigurationError(f"Unknown preset {name!r} (choose from: {choices})") from None
