"""Angle and radius math of the fan chart.

Angles are in radians, 0 points to 12 o'clock and grow clockwise. The
normalized partition coordinate x in [0, 1] is spread over the configured fan
degree, centered on the top. All coordinates are relative to the chart center.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .config import ChartConfig

MATH_DEG2RAD = math.pi / 180
MATH_RAD2DEG = 180 / math.pi

ORIGIN = (0.0, 0.0)


def polar_to_cartesian(
    radius: float, angle_degrees: float, center_point: Tuple[float, float] = ORIGIN
) -> Tuple[float, float]:
    """Convert polar coordinates (radius, angle) to cartesian coordinates relative to center."""
    x = center_point[0] + radius * math.cos(math.radians(angle_degrees))
    y = center_point[1] + radius * math.sin(math.radians(angle_degrees))
    return (x, y)


def chart_point(radius: float, angle: float) -> Tuple[float, float]:
    """Point at a chart angle (radians, 0 = top, clockwise)."""
    return polar_to_cartesian(radius, angle * MATH_RAD2DEG - 90)


def calculate_gap_angle(gap_size: float, radius: float) -> float:
    """Calculate the angle offset (radians) needed to create a gap of specified size at a given radius."""
    if radius <= 0:
        return 0.0
    # arc_length = radius * angle_in_radians
    return gap_size / radius


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".") if value else "0"


def _point(point: Tuple[float, float]) -> str:
    return f"{_fmt(point[0])},{_fmt(point[1])}"


class Geometry:
    def __init__(self, config: ChartConfig):
        self._config = config

    @property
    def start_pi(self) -> float:
        return -(self._config.fan_degree / 2 * MATH_DEG2RAD)

    @property
    def end_pi(self) -> float:
        return self._config.fan_degree / 2 * MATH_DEG2RAD

    def scale(self, value: float) -> float:
        return self.start_pi + value * (self.end_pi - self.start_pi)

    def calc_angle(self, value: float) -> float:
        return max(self.start_pi, min(self.end_pi, self.scale(value)))

    def start_angle(self, depth: int, x0: float) -> float:
        return self.calc_angle(x0)

    def end_angle(self, depth: int, x1: float) -> float:
        return self.calc_angle(x1)

    def ring_height(self, depth: int) -> float:
        if depth == 0:
            return self._config.center_circle_radius
        if depth <= self._config.inner_arcs:
            return self._config.inner_ring_height
        return self._config.outer_ring_height

    def inner_radius(self, depth: int) -> float:
        if depth == 0:
            return 0.0

        # every ring is preceded by the circle padding
        config = self._config
        inner_rings = min(depth - 1, config.inner_arcs)
        outer_rings = max(depth - 1 - config.inner_arcs, 0)

        return (
            config.center_circle_radius
            + inner_rings * (config.inner_ring_height + config.circle_padding)
            + outer_rings * (config.outer_ring_height + config.circle_padding)
            + config.circle_padding
        )

    def outer_radius(self, depth: int) -> float:
        if depth == 0:
            return self._config.center_circle_radius
        return self.inner_radius(depth) + self.ring_height(depth)

    def center_radius(self, depth: int) -> float:
        if depth == 0:
            return 0.0
        return (self.inner_radius(depth) + self.outer_radius(depth)) / 2

    def relative_radius(self, depth: int, position: float) -> float:
        """Radius at ``position`` percent of the ring (0 = inner, 100 = outer edge)."""
        outer = self.outer_radius(depth)
        return outer - ((100 - position) * (outer - self.inner_radius(depth)) / 100)

    def arc_length(self, node, position: float) -> float:
        """Arc length of the node's wedge at ``position`` percent of its ring."""
        angle = self.end_angle(node.depth, node.x1) - self.start_angle(node.depth, node.x0)
        return angle * self.relative_radius(node.depth, position)

    def mid_angle(self, node) -> float:
        return (self.start_angle(node.depth, node.x0) + self.end_angle(node.depth, node.x1)) / 2

    def is_position_flipped(self, depth: int, x0: float, x1: float) -> bool:
        """Whether arc labels of a 360 degree chart must be flipped to stay readable."""
        if self._config.fan_degree != 360 or depth == 0:
            return False

        mid_angle = (self.start_angle(depth, x0) + self.end_angle(depth, x1)) / 2

        return (90 * MATH_DEG2RAD <= mid_angle <= 180 * MATH_DEG2RAD) or (
            -180 * MATH_DEG2RAD <= mid_angle <= -90 * MATH_DEG2RAD
        )

    def text_arc_path(
        self, radius: float, start_angle: float, end_angle: float, flipped: bool = False
    ) -> str:
        """SVG arc along which a label line runs; reversed when flipped."""
        pad = calculate_gap_angle(self._config.pad_distance / 2, radius)
        if end_angle - start_angle > 2 * pad:
            start_angle += pad
            end_angle -= pad

        large_arc_flag = 1 if (end_angle - start_angle) > math.pi else 0
        if flipped:
            start, end, sweep = chart_point(radius, end_angle), chart_point(radius, start_angle), 0
        else:
            start, end, sweep = chart_point(radius, start_angle), chart_point(radius, end_angle), 1

        r = _fmt(radius)
        return f"M {_point(start)} A {r},{r} 0 {large_arc_flag},{sweep} {_point(end)}"

    def circle_path(self, radius: float) -> str:
        top = _point(chart_point(radius, 0))
        bottom = _point(chart_point(radius, math.pi))
        r = _fmt(radius)
        return f"M {top} A {r},{r} 0 1,1 {bottom} A {r},{r} 0 1,1 {top} Z"

    def segment_path(self, node, gap_size: Optional[float] = None) -> Optional[str]:
        """Outline of a ring segment with rays, arcs and gaps between segments.

        Returns None for wedges too narrow to draw.
        """
        if node.depth == 0:
            return self.circle_path(self._config.center_circle_radius)

        gap_size = self._config.segment_gap if gap_size is None else gap_size
        inner_radius = self.inner_radius(node.depth)
        outer_radius = self.outer_radius(node.depth)
        start_angle = self.start_angle(node.depth, node.x0)
        end_angle = self.end_angle(node.depth, node.x1)
        span = end_angle - start_angle
        if span <= 0:
            return None

        # the gap never eats more than a quarter of the wedge
        inner_gap_angle = min(calculate_gap_angle(gap_size, inner_radius), span / 4)
        outer_gap_angle = min(calculate_gap_angle(gap_size, outer_radius), span / 4)

        inner_start = chart_point(inner_radius, start_angle + inner_gap_angle)
        inner_end = chart_point(inner_radius, end_angle - inner_gap_angle)
        outer_start = chart_point(outer_radius, start_angle + outer_gap_angle)
        outer_end = chart_point(outer_radius, end_angle - outer_gap_angle)

        large_arc_flag = 1 if span > math.pi else 0
        outer, inner = _fmt(outer_radius), _fmt(inner_radius)

        path = f"M {_point(inner_start)} "
        path += f"L {_point(outer_start)} "
        path += f"A {outer},{outer} 0 {large_arc_flag},1 {_point(outer_end)} "
        path += f"L {_point(inner_end)} "
        path += f"A {inner},{inner} 0 {large_arc_flag},0 {_point(inner_start)} Z"

        return path
