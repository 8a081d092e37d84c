"""Drawable label primitives: text runs, baseline paths and transforms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from .config import ChartConfig
from .geometry import MATH_RAD2DEG, Geometry
from .partition import LayoutNode
from .text import CENTER_LINE_SPACING, LabelPlan, LabelRun, LabelStrategy, spread_offsets

MARRIAGE_SYMBOL = "⚭"


@dataclass(frozen=True)
class PathDefinition:
    id: str
    d: str


class PathPool:
    """Path definitions shared by all labels of one render pass."""

    def __init__(self):
        self._paths: Dict[str, PathDefinition] = {}

    def add(self, path_id: str, create: Callable[[], str]) -> str:
        # existing definitions are kept, the path is only computed once
        if path_id not in self._paths:
            self._paths[path_id] = PathDefinition(path_id, create())
        return path_id

    def __contains__(self, path_id: str) -> bool:
        return path_id in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[PathDefinition]:
        return iter(self._paths.values())


@dataclass(frozen=True)
class TextLine:
    runs: List[LabelRun]
    font_size: float
    path_id: Optional[str] = None
    start_offset: Optional[str] = None
    transform: Optional[str] = None
    dy: Optional[float] = None
    css_class: Optional[str] = None


@dataclass
class Label:
    node_id: int
    element_id: str
    strategy: Optional[LabelStrategy]
    lines: List[TextLine] = field(default_factory=list)


def element_id(node: LayoutNode) -> str:
    return f"person-{node.id}"


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".") if value else "0"


class LabelRenderer:
    def __init__(self, config: ChartConfig, geometry: Geometry, pool: PathPool):
        self._config = config
        self._geometry = geometry
        self._pool = pool

    def render(self, node: LayoutNode, plan: LabelPlan) -> Label:
        parent_id = element_id(node)
        label = Label(node.id, parent_id, plan.strategy)
        count = len(plan.lines)

        if plan.is_along_arc:
            for index, line in enumerate(plan.lines):
                path_id = self.create_path_definition(parent_id, index, node, line.text_offset)
                label.lines.append(
                    TextLine(line.runs, plan.font_size, path_id=path_id, start_offset="50%")
                )
            return label

        transforms = self.transforms(node, count, plan.font_size)
        for line, transform in zip(plan.lines, transforms):
            label.lines.append(
                TextLine(line.runs, plan.font_size, transform=transform, dy=plan.font_size / 3)
            )
        return label

    def create_path_definition(
        self, parent_id: str, index: int, node: LayoutNode, text_offset: float
    ) -> str:
        """Register the baseline arc of line ``index`` and return its id."""
        path_id = f"path-{parent_id}-{index}"

        def create() -> str:
            flipped = self._geometry.is_position_flipped(node.depth, node.x0, node.x1)
            radius = self._geometry.relative_radius(node.depth, text_offset)
            return self._geometry.text_arc_path(
                radius,
                self._geometry.start_angle(node.depth, node.x0),
                self._geometry.end_angle(node.depth, node.x1),
                flipped,
            )

        return self._pool.add(path_id, create)

    def rotation_offsets(self, node: LayoutNode, count: int, font_size: float) -> List[float]:
        """Per-line offsets: degrees around the mid angle, font sizes for the center."""
        if node.depth == 0:
            return spread_offsets(count, CENTER_LINE_SPACING)

        config = self._config
        offset_radius = (node.depth - 0.5) * config.inner_ring_height + config.center_circle_radius
        offset = font_size * 1.6 / offset_radius * MATH_RAD2DEG
        return spread_offsets(count, offset)

    def transforms(self, node: LayoutNode, count: int, font_size: float) -> List[str]:
        offsets = self.rotation_offsets(node, count, font_size)

        # Name of center person should not be rotated in any way
        if node.depth == 0:
            return [f"translate(0 {_fmt(font_size * offset)})" for offset in offsets]

        angle = self._geometry.scale(node.mid) * MATH_RAD2DEG
        result = []
        for offset in offsets:
            rotate = angle - (offset * (-1 if angle > 0 else 1))
            translate = self._geometry.center_radius(node.depth) - self._config.color_arc_width / 2.0

            if angle > 0:
                rotate -= 90
            else:
                translate = -translate
                rotate += 90

            result.append(f"rotate({_fmt(rotate)}) translate({_fmt(translate)})")
        return result

    def marriage_label(self, node: LayoutNode, font_size: Optional[float] = None) -> Optional[Label]:
        """Marriage date of the parents, on an arc in the padding below the segment."""
        date = node.node.data.marriage_date_of_parents
        if node.depth < 1 or not date or node.is_degenerate or not self._config.circle_padding:
            return None

        parent_id = element_id(node)
        path_id = f"path-{parent_id}-marriage"
        radius = self._geometry.inner_radius(node.depth) - self._config.circle_padding / 2
        flipped = self._geometry.is_position_flipped(node.depth, node.x0, node.x1)

        self._pool.add(
            path_id,
            lambda: self._geometry.text_arc_path(
                radius,
                self._geometry.start_angle(node.depth, node.x0),
                self._geometry.end_angle(node.depth, node.x1),
                flipped,
            ),
        )
        size = font_size or self._config.base_font_size * 0.7
        run = LabelRun(f"{MARRIAGE_SYMBOL} {date}", is_date=True)
        return Label(
            node.id,
            f"{parent_id}-marriage",
            None,
            [TextLine([run], size, path_id=path_id, start_offset="50%", css_class="marriage")],
        )
