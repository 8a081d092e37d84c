"""One render pass: person records in, drawable primitives out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from . import palette
from .config import ChartConfig
from .errors import DegenerateGeometry, InvalidRoot
from .geometry import Geometry
from .labels import Label, LabelRenderer, PathDefinition, PathPool, element_id
from .measure import Measure
from .partition import LayoutNode, layout
from .records import PersonRecord
from .text import TextFitter
from .tree import Node, TreeBuilder

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    node_id: int
    element_id: str
    xref: str
    depth: int
    d: str
    fill: str
    stroke: str
    classes: Tuple[str, ...] = ()
    url: str = ""


@dataclass
class Drawing:
    radius: float
    fan_degree: int
    center_radius: float = 0.0
    segments: List[Segment] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    definitions: List[PathDefinition] = field(default_factory=list)
    nodes: List[LayoutNode] = field(default_factory=list)


class FanChart:
    """Renders descendant fan charts.

    Each call starts from scratch; the latest finished pass is kept in
    ``drawing`` and fully replaces the previous one.
    """

    def __init__(
        self,
        config: ChartConfig,
        measure: Measure,
        direct_lines: Tuple[Optional[str], Optional[str]] = (None, None),
    ):
        self.config = config
        self.measure = measure
        self.direct_lines = direct_lines
        self.drawing: Optional[Drawing] = None

    def build(self, root: Optional[PersonRecord]) -> Node:
        return self._build(self.config.validate(), root)

    def render(self, root: Optional[PersonRecord]) -> Drawing:
        config = self.config.validate()
        return self._render(config, self._build(config, root))

    def render_tree(self, tree: Node) -> Drawing:
        return self._render(self.config.validate(), tree)

    def _build(self, config: ChartConfig, root: Optional[PersonRecord]) -> Node:
        tree = TreeBuilder(
            config.generations,
            config.filter_mode,
            self.direct_lines,
            config.date_locale,
        ).build(root)
        if tree is None:
            raise InvalidRoot("no root person to build the chart from")
        return tree

    def _render(self, config: ChartConfig, tree: Node) -> Drawing:
        geometry = Geometry(config)
        pool = PathPool()
        fitter = TextFitter(config, geometry, self.measure)
        renderer = LabelRenderer(config, geometry, pool)

        nodes = layout(tree, config.generations)
        max_depth = max(node.depth for node in nodes)
        drawing = Drawing(
            radius=geometry.outer_radius(max_depth),
            fan_degree=config.fan_degree,
            center_radius=config.center_circle_radius,
            nodes=nodes,
        )

        skipped = 0
        for node in nodes:
            segment = self.segment(geometry, node)
            if segment is None:
                skipped += 1
                continue
            drawing.segments.append(segment)

            try:
                plan = fitter.fit(node)
            except DegenerateGeometry as exc:
                log.warning("skipping label of %s: %s", node.node.data.xref or node.id, exc)
                continue
            drawing.labels.append(renderer.render(node, plan))

            if config.show_parent_marriage_dates:
                marriage = renderer.marriage_label(node)
                if marriage is not None:
                    drawing.labels.append(marriage)

        drawing.definitions = list(pool)
        log.debug(
            "rendered %d segments, %d labels, %d paths (%d skipped)",
            len(drawing.segments),
            len(drawing.labels),
            len(drawing.definitions),
            skipped,
        )

        self.drawing = drawing
        return drawing

    def segment(self, geometry: Geometry, node: LayoutNode) -> Optional[Segment]:
        data = node.node.data
        if self.config.hide_empty_segments and not data.xref:
            return None

        if node.depth > 0 and node.is_degenerate:
            log.warning("skipping segment of %s: no angular width", data.xref or node.id)
            return None
        d = geometry.segment_path(node)
        if d is None:
            return None

        fill, stroke = palette.get_colors(data.sex)
        classes = ["person", f"depth-{node.depth}", f"sex-{data.sex.value.lower()}"]

        if self.config.show_color_gradients and node.depth > 0:
            fill = palette.gradient_color(node.mid, node.depth)
        if self.config.highlight_deceased_young and data.is_deceased_young:
            fill = palette.deceased_young_fill
            classes.append("deceased-young")
        if node.node.is_direct_line1:
            stroke = palette.direct_line_colors[0]
            classes.append("direct-line-1")
        if node.node.is_direct_line2:
            if not node.node.is_direct_line1:
                stroke = palette.direct_line_colors[1]
            classes.append("direct-line-2")

        return Segment(
            node_id=node.id,
            element_id=element_id(node),
            xref=data.xref,
            depth=node.depth,
            d=d,
            fill=fill,
            stroke=stroke,
            classes=tuple(classes),
            url=data.url,
        )
