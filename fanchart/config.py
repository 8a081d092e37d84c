"""Chart configuration.

The host validates user input against the same bounds, but every render pass
checks the record once more before any tree work starts and rejects (never
clamps) values outside of them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ConfigurationOutOfRange

MIN_GENERATIONS = 2
MAX_GENERATIONS = 30
DEFAULT_GENERATIONS = 6

MIN_FAN_DEGREE = 180
MAX_FAN_DEGREE = 360
DEFAULT_FAN_DEGREE = 360

MIN_FONT_SCALE = 10
MAX_FONT_SCALE = 200
DEFAULT_FONT_SCALE = 100

MIN_INNER_ARCS = 0
MAX_INNER_ARCS = 5
DEFAULT_INNER_ARCS = 3

# Padding between the rings when parent marriage dates are drawn into it
MARRIAGE_CIRCLE_PADDING = 40


class FilterMode(str, enum.Enum):
    ALL = "all"
    ONLY_MALE = "onlyMaleDescendants"
    ONLY_FEMALE = "onlyFemaleDescendants"
    ONLY_MALE_PLUS = "onlyMaleDescendantsPlus"


# query parameter name -> field name
_PARAMETERS = {
    "generations": "generations",
    "fanDegree": "fan_degree",
    "fontScale": "font_scale",
    "innerArcs": "inner_arcs",
    "descendantsOptions": "filter_mode",
    "showParentMarriageDates": "show_parent_marriage_dates",
    "highlightDeceasedYoung": "highlight_deceased_young",
    "showColorGradients": "show_color_gradients",
    "hideEmptySegments": "hide_empty_segments",
}

_BOOLEANS = {
    "show_parent_marriage_dates",
    "highlight_deceased_young",
    "show_color_gradients",
    "hide_empty_segments",
}


def check_generations(value: int) -> int:
    """Reject a generation cap outside of MIN_GENERATIONS..MAX_GENERATIONS."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationOutOfRange("generations", value, "an integer")
    if not MIN_GENERATIONS <= value <= MAX_GENERATIONS:
        raise ConfigurationOutOfRange(
            "generations", value, f"{MIN_GENERATIONS}..{MAX_GENERATIONS}"
        )
    return value


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class ChartConfig:
    generations: int = DEFAULT_GENERATIONS
    fan_degree: int = DEFAULT_FAN_DEGREE
    inner_arcs: int = DEFAULT_INNER_ARCS
    font_scale: int = DEFAULT_FONT_SCALE
    filter_mode: FilterMode = FilterMode.ALL
    show_parent_marriage_dates: bool = False
    highlight_deceased_young: bool = False
    show_color_gradients: bool = False
    hide_empty_segments: bool = False

    # Drawing constants (SVG px units)
    center_circle_radius: float = 100.0
    inner_arc_height: float = 200.0
    outer_arc_height: float = 200.0
    color_arc_width: float = 5.0
    text_padding: float = 8.0
    pad_angle: float = 0.03
    segment_gap: float = 2.0
    font_size: float = 15.0
    min_font_size: float = 5.0
    max_font_size: float = 48.0
    font_size_step: float = 1.0
    date_locale: str = "de"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ChartConfig":
        """Create a validated config from form/query values (camelCase or field names)."""
        kwargs = {}
        for key, value in values.items():
            name = _PARAMETERS.get(key, key)
            if name not in cls.__dataclass_fields__:
                continue
            if name == "filter_mode":
                try:
                    value = FilterMode(value)
                except ValueError:
                    raise ConfigurationOutOfRange(
                        name, value, ", ".join(m.value for m in FilterMode)
                    ) from None
            elif name in _BOOLEANS:
                value = _to_bool(value)
            elif name in ("generations", "fan_degree", "font_scale", "inner_arcs"):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise ConfigurationOutOfRange(name, value, "an integer") from None
            kwargs[name] = value
        return cls(**kwargs).validate()

    def validate(self) -> "ChartConfig":
        bounds = [
            ("generations", self.generations, MIN_GENERATIONS, MAX_GENERATIONS),
            ("fan_degree", self.fan_degree, MIN_FAN_DEGREE, MAX_FAN_DEGREE),
            ("font_scale", self.font_scale, MIN_FONT_SCALE, MAX_FONT_SCALE),
            ("inner_arcs", self.inner_arcs, MIN_INNER_ARCS, MAX_INNER_ARCS),
        ]
        for name, value, low, high in bounds:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationOutOfRange(name, value, "an integer")
            if not low <= value <= high:
                raise ConfigurationOutOfRange(name, value, f"{low}..{high}")

        if not isinstance(self.filter_mode, FilterMode):
            raise ConfigurationOutOfRange(
                "filter_mode", self.filter_mode, ", ".join(m.value for m in FilterMode)
            )

        for name in ("center_circle_radius", "inner_arc_height", "outer_arc_height"):
            if getattr(self, name) <= 0:
                raise ConfigurationOutOfRange(name, getattr(self, name), "> 0")
        if self.min_font_size <= 0 or self.font_size_step <= 0:
            raise ConfigurationOutOfRange("min_font_size", self.min_font_size, "> 0")

        return self

    @property
    def circle_padding(self) -> float:
        return MARRIAGE_CIRCLE_PADDING if self.show_parent_marriage_dates else 0.0

    @property
    def pad_radius(self) -> float:
        return self.circle_padding * 10

    @property
    def pad_distance(self) -> float:
        return self.pad_angle * self.pad_radius

    @property
    def inner_ring_height(self) -> float:
        if self.show_parent_marriage_dates:
            return self.circle_padding + 110
        return self.inner_arc_height

    @property
    def outer_ring_height(self) -> float:
        if self.show_parent_marriage_dates:
            return self.circle_padding + 110
        return self.outer_arc_height

    @property
    def scale_factor(self) -> float:
        return self.font_scale / 100.0

    @property
    def base_font_size(self) -> float:
        return self.font_size * self.scale_factor

    @property
    def min_label_font_size(self) -> float:
        return self.min_font_size * self.scale_factor
