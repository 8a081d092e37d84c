"""Segment colors."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Tuple

import numpy as np
from matplotlib.colors import to_hex, to_rgb
from skimage import color  # interpolate colors in Lab space for perceptual uniformity

from .records import Sex

male_color = "#4A90E2"
female_color = "#FF6EC7"
unknown_color = "#9E9E9E"

deceased_young_fill = "#E0E0E0"
direct_line_colors = ("#C0392B", "#27AE60")

# Base color pairs (dark to light) for the gradient around the chart
color_families = {
    "Blue": ["#a8bedb", "#dbe9f6"],
    "Green": ["#a5d0b9", "#d9f2e6"],
    "Orange": ["#f8bd8d", "#ffe7cc"],
    "Magenta": ["#e3a7c6", "#f7dbef"],
}


def interpolate_colors_lab(start_hex: str, end_hex: str, n: int) -> List[str]:
    start_rgb = np.array(to_rgb(start_hex)).reshape(1, 1, 3)
    end_rgb = np.array(to_rgb(end_hex)).reshape(1, 1, 3)

    start_lab = color.rgb2lab(start_rgb)[0, 0]
    end_lab = color.rgb2lab(end_rgb)[0, 0]

    labs = np.linspace(start_lab, end_lab, n)
    rgbs = color.lab2rgb(labs.reshape(n, 1, 3)).reshape(n, 3)
    hex_colors = [to_hex(np.clip(rgb, 0, 1)) for rgb in rgbs]
    return hex_colors


@lru_cache(maxsize=None)
def palette(shades: int = 8) -> Tuple[str, ...]:
    """All families, ``shades`` colors each, dark to light."""
    colors = []
    for start, end in color_families.values():
        colors.extend(interpolate_colors_lab(start, end, shades))
    return tuple(colors)


def gradient_color(x: float, depth: int, shades: int = 8) -> str:
    """Gradient fill of a segment at partition position ``x``.

    The family is picked by the angular position, deeper rings get lighter.
    """
    colors = palette(shades)
    family = min(int(max(x, 0.0) * len(color_families)), len(color_families) - 1)
    shade = min(max(depth - 1, 0), shades - 1)
    return colors[family * shades + shade]


def get_colors(sex: Sex) -> Tuple[str, str]:
    """Returns (fill_color, stroke_color) based on the sex."""
    if sex is Sex.MALE:
        return "#E3F2FD", male_color  # light blue / blue
    if sex is Sex.FEMALE:
        return "#FCE4EC", female_color  # light pink / pink
    return "#F5F5F5", unknown_color
