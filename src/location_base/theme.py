"""
Light and dark themes.

Palettes are static configuration shipped as package data
(assets/colors.json and assets/colorsDark.json), mapping a semantic
color role to a color value.
"""

import json
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Mapping

APP_TITLE = "My Location BASE"

LIGHT_PALETTE_FILE = "colors.json"
DARK_PALETTE_FILE = "colorsDark.json"


@lru_cache(maxsize=2)
def _read_palette(filename: str) -> Mapping[str, str]:
    raw = resources.files("location_base.assets").joinpath(filename).read_text(encoding="utf-8")
    return MappingProxyType(json.loads(raw)["colors"])


def load_palette(dark: bool) -> dict[str, str]:
    """Return a copy of the light or dark palette."""
    return dict(_read_palette(DARK_PALETTE_FILE if dark else LIGHT_PALETTE_FILE))


@dataclass(frozen=True)
class Theme:
    """Active theme: the dark-mode flag and the palette that goes with it."""
    dark: bool = False
    colors: Mapping[str, str] = field(default_factory=lambda: _read_palette(LIGHT_PALETTE_FILE))

    @classmethod
    def for_mode(cls, dark: bool) -> "Theme":
        return cls(dark=dark, colors=_read_palette(DARK_PALETTE_FILE if dark else LIGHT_PALETTE_FILE))

    def toggled(self) -> "Theme":
        return Theme.for_mode(not self.dark)
