"""Text width measurement backed by Pillow fonts."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Optional

from PIL import ImageFont

from .errors import MeasurementUnavailable

BOLD_WEIGHT = 600

# (text, font size, font weight) -> width in px
Measure = Callable[[str, float, int], float]


class FontMeasure:
    """Measure strings with a TrueType font, falling back to Pillow's default font.

    Instances are callable and match the ``Measure`` signature.
    """

    def __init__(self, font_path: Optional[str] = None, bold_font_path: Optional[str] = None):
        self.font_path = font_path
        self.bold_font_path = bold_font_path or font_path
        self._font = lru_cache(maxsize=256)(self._load_font)

    def _load_font(self, path: Optional[str], size: float):
        try:
            if path is None:
                return ImageFont.load_default(size=size)
            return ImageFont.truetype(path, size)
        except (OSError, ValueError) as exc:
            raise MeasurementUnavailable(f"cannot load font {path or '<default>'}: {exc}") from exc

    def __call__(self, text: str, font_size: float, font_weight: int = 400) -> float:
        if font_size <= 0:
            raise MeasurementUnavailable(f"invalid font size {font_size}")
        path = self.bold_font_path if font_weight >= BOLD_WEIGHT else self.font_path
        font = self._font(path, round(float(font_size), 2))
        try:
            return float(font.getlength(text))
        except (OSError, ValueError) as exc:
            raise MeasurementUnavailable(f"cannot measure {text!r}: {exc}") from exc
