"""Label content, layout strategy and font size of a single chart segment.

Every person label is a list of lines, every line a list of runs (given
names, last names, lifespan, birthplace). Depending on the space of the
segment the lines either follow the arc of the segment or run radially
outwards, and the largest font size still fitting the segment is searched.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Sequence

from .config import ChartConfig
from .errors import DegenerateGeometry, MeasurementUnavailable
from .geometry import Geometry
from .measure import BOLD_WEIGHT, Measure
from .partition import LayoutNode
from .records import NodeData

log = logging.getLogger(__name__)

# Arc length thresholds (px at 1% of the ring) of the radial layouts
VERY_NARROW = 30
NARROW = 50
MEDIUM = 70

# Height of a text line relative to the font size
LINE_HEIGHT = 1.7

# Line distance (in font sizes) of the labels in the center circle
CENTER_LINE_SPACING = 1.7

MAX_SEARCH_ITERATIONS = 32


class LabelStrategy(str, enum.Enum):
    CENTER = "center"
    ALONG_ARC = "along-arc"
    SINGLE_LINE = "single-line"
    TWO_LINES = "two-lines"
    THREE_LINES = "three-lines"
    FULL = "full"

    @property
    def is_radial(self) -> bool:
        return self not in (LabelStrategy.CENTER, LabelStrategy.ALONG_ARC)


@dataclass(frozen=True)
class LabelRun:
    label: str
    is_preferred: bool = False
    is_last_name: bool = False
    is_date: bool = False
    is_place: bool = False
    is_rtl: bool = False

    @property
    def is_name(self) -> bool:
        return not (self.is_date or self.is_place)

    @property
    def classes(self) -> List[str]:
        flags = [
            ("preferred", self.is_preferred),
            ("lastName", self.is_last_name),
            ("date", self.is_date),
            ("place", self.is_place),
        ]
        return [name for name, enabled in flags if enabled]


@dataclass(frozen=True)
class LabelLine:
    runs: List[LabelRun]
    available_width: float = 0.0
    # percent of the ring height (along-arc lines only)
    text_offset: Optional[float] = None

    @property
    def text(self) -> str:
        return " ".join(run.label for run in self.runs)


@dataclass(frozen=True)
class LabelPlan:
    node_id: int
    depth: int
    strategy: LabelStrategy
    lines: List[LabelLine]
    font_size: float
    flipped: bool = False

    @property
    def is_along_arc(self) -> bool:
        return self.strategy is LabelStrategy.ALONG_ARC


def create_names_data(data: NodeData) -> List[List[LabelRun]]:
    """Split the full name into a given name group and a last name group.

    Each token is looked up in the full name behind the previous hit, so the
    groups come out in the order they appear in the name.
    """
    name = data.name
    firstnames: Dict[int, LabelRun] = {}
    offset = 0

    for token in data.first_names:
        pos = name.find(token, offset) if token else -1
        if pos == -1:
            continue
        offset = pos + len(token)
        firstnames[pos] = LabelRun(
            token, is_preferred=token == data.preferred_name, is_rtl=data.is_name_rtl
        )

    lastnames: Dict[int, LabelRun] = {}
    offset = 0

    for token in data.last_names:
        pos = name.find(token, offset) if token else -1
        # first name equal to the last name
        while pos != -1 and pos in firstnames:
            pos = name.find(token, pos + len(token))
        if pos == -1:
            continue
        offset = pos + len(token)
        lastnames[pos] = LabelRun(token, is_last_name=True, is_rtl=data.is_name_rtl)

    groups = [group for group in (firstnames, lastnames) if group]
    groups.sort(key=min)
    names = [[group[pos] for pos in sorted(group)] for group in groups]

    if not names and name.strip():
        names = [[LabelRun(name.strip(), is_rtl=data.is_name_rtl)]]

    return names


def abbreviate(label: str) -> str:
    return label[:1] + "."


def is_abbreviated(label: str) -> bool:
    return len(label) <= 1 or label == abbreviate(label)


def truncate_names(
    runs: Sequence[LabelRun],
    width_of: Callable[[Sequence[LabelRun]], float],
    available_width: float,
) -> List[LabelRun]:
    """Abbreviate names from the end of the line until it fits.

    Plain given names go first, then the preferred name, last names last.
    Dates and places are never touched.
    """
    runs = list(runs)
    passes = (
        lambda run: run.is_name and not run.is_preferred and not run.is_last_name,
        lambda run: run.is_preferred,
        lambda run: run.is_last_name,
    )

    for selects in passes:
        for index in reversed(range(len(runs))):
            run = runs[index]
            if not selects(run) or is_abbreviated(run.label):
                continue
            if width_of(runs) > available_width:
                runs[index] = replace(run, label=abbreviate(run.label))

    return runs


def search_font_size(
    fits: Callable[[float], bool],
    low: float,
    high: float,
    step: float = 1.0,
    max_iterations: int = MAX_SEARCH_ITERATIONS,
) -> float:
    """Largest size in ``low, low + step, ..., high`` for which ``fits`` holds.

    Binary search assuming ``fits`` is monotonic; returns ``low`` when even
    that does not fit.
    """
    high = max(high, low)
    steps = int(math.floor((high - low) / step + 1e-9))

    if not fits(low):
        return low

    lo, hi = 0, steps
    for _ in range(max_iterations):
        if lo >= hi:
            break
        mid = (lo + hi + 1) // 2
        if fits(low + mid * step):
            lo = mid
        else:
            hi = mid - 1

    return round(low + lo * step, 4)


def spread_offsets(count: int, spread: float) -> List[float]:
    """Offsets of ``count`` lines, ``spread`` apart and centered on zero."""
    if count <= 1:
        return [0.0] * count
    first = -spread * (count - 1) / 2
    return [first + index * spread for index in range(count)]


def choose_radial_strategy(arc_length: float) -> LabelStrategy:
    if arc_length <= VERY_NARROW:
        return LabelStrategy.SINGLE_LINE
    if arc_length <= NARROW:
        return LabelStrategy.TWO_LINES
    if arc_length <= MEDIUM:
        return LabelStrategy.THREE_LINES
    return LabelStrategy.FULL


def label_groups(data: NodeData, strategy: LabelStrategy) -> List[List[LabelRun]]:
    names = create_names_data(data)
    timespan, place = [], []
    if data.timespan:
        timespan.append(LabelRun(data.timespan, is_date=True, is_rtl=data.is_name_rtl))
    if data.birth_place:
        place.append(LabelRun(data.birth_place, is_place=True, is_rtl=data.is_name_rtl))

    first = names[0] if names else []
    rest = [run for group in names[1:] for run in group]

    if strategy is LabelStrategy.SINGLE_LINE:
        groups = [first + rest + timespan + place]
    elif strategy is LabelStrategy.TWO_LINES:
        groups = [first + rest, timespan + place]
    elif strategy is LabelStrategy.THREE_LINES:
        groups = names + [timespan + place]
    else:
        groups = names + [timespan, place]

    return [group for group in groups if group]


class TextFitter:
    def __init__(self, config: ChartConfig, geometry: Geometry, measure: Measure):
        self._config = config
        self._geometry = geometry
        self._measure = measure

    def fit(self, node: LayoutNode) -> LabelPlan:
        if node.depth > 0 and node.is_degenerate:
            raise DegenerateGeometry(f"segment {node.id} has no angular width")

        strategy = self.strategy(node)
        flipped = self._geometry.is_position_flipped(node.depth, node.x0, node.x1)
        groups = label_groups(node.node.data, strategy)
        count = len(groups)
        along_arc = strategy is LabelStrategy.ALONG_ARC

        lines = [
            LabelLine(
                runs,
                self.available_width(node, strategy, index, count),
                self.text_offset(flipped, index, count) if along_arc else None,
            )
            for index, runs in enumerate(groups)
        ]

        font_size = self._config.min_label_font_size
        if lines:
            try:
                fitted = lines
                if strategy is LabelStrategy.ALONG_ARC:
                    fitted = self.truncate(lines, self._config.base_font_size)
                font_size = self.font_size(node, strategy, fitted)
                lines = fitted
            except MeasurementUnavailable as exc:
                log.warning(
                    "text measurement failed for %s, using minimum font size: %s",
                    node.node.data.xref or node.id,
                    exc,
                )

        return LabelPlan(
            node_id=node.id,
            depth=node.depth,
            strategy=strategy,
            lines=lines,
            font_size=font_size,
            flipped=flipped,
        )

    def strategy(self, node: LayoutNode) -> LabelStrategy:
        if node.depth == 0:
            return LabelStrategy.CENTER
        if self.is_label_along_arc(node):
            return LabelStrategy.ALONG_ARC
        return choose_radial_strategy(self._geometry.arc_length(node, 1))

    def is_label_along_arc(self, node: LayoutNode) -> bool:
        """Wide segments get labels along the arc, narrow ones radial labels."""
        return node.depth > 0 and (
            self._geometry.arc_length(node, 50) > self._geometry.ring_height(node.depth)
        )

    @staticmethod
    def text_offset(flipped: bool, index: int, count: int) -> float:
        """Radial position (0 = inner, 100 = outer edge) of an along-arc line."""
        if flipped:
            return 100 / (count + 1) * (index + 1) + 5
        return 100 - (100 / (count + 1) * (index + 1)) - 5

    def available_width(
        self, node: LayoutNode, strategy: LabelStrategy, index: int, count: int
    ) -> float:
        config = self._config
        padding = config.text_padding * 2

        outer_arc = strategy is LabelStrategy.ALONG_ARC and node.depth > config.inner_arcs
        if strategy.is_radial or outer_arc:
            return self._geometry.ring_height(node.depth) - padding - config.circle_padding

        if strategy is LabelStrategy.CENTER:
            # slightly narrower than the circle, keeps the text off the edge
            width = config.center_circle_radius * 2 - config.center_circle_radius * 0.15
        else:
            flipped = self._geometry.is_position_flipped(node.depth, node.x0, node.x1)
            width = self._geometry.arc_length(node, self.text_offset(flipped, index, count))

        return width - padding - config.pad_distance / 2

    def line_width(self, runs: Sequence[LabelRun], font_size: float) -> float:
        """Width of the runs joined by spaces, last names are set in bold."""
        if not runs:
            return 0.0
        width = sum(
            self._measure(run.label, font_size, BOLD_WEIGHT if run.is_last_name else 400)
            for run in runs
        )
        return width + (len(runs) - 1) * self._measure(" ", font_size, 400)

    def truncate(self, lines: List[LabelLine], font_size: float) -> List[LabelLine]:
        def width_of(runs):
            return self.line_width(runs, font_size)

        return [
            replace(line, runs=truncate_names(line.runs, width_of, line.available_width))
            for line in lines
        ]

    def available_box(self, node: LayoutNode, strategy: LabelStrategy):
        """(width, height) a label may take up inside its segment."""
        padding = self._config.text_padding * 2
        ring_height = self._geometry.ring_height(node.depth)

        if strategy is LabelStrategy.ALONG_ARC:
            return self._geometry.arc_length(node, 20) - padding, ring_height
        return ring_height - padding, self._geometry.arc_length(node, 50)

    def is_text_within_circle(self, lines: Sequence[LabelLine], font_size: float) -> bool:
        radius = self._config.center_circle_radius - self._config.text_padding
        offsets = spread_offsets(len(lines), CENTER_LINE_SPACING)

        for line, offset in zip(lines, offsets):
            text_offset = (abs(offset) + 0.5) * font_size
            text_length = self.line_width(line.runs, font_size)
            if text_offset ** 2 + (text_length / 2) ** 2 > radius ** 2:
                return False

        return True

    def font_size(self, node: LayoutNode, strategy: LabelStrategy, lines: Sequence[LabelLine]) -> float:
        config = self._config
        low = config.min_label_font_size

        if strategy is LabelStrategy.CENTER:
            def fits(size):
                return self.is_text_within_circle(lines, size)
        else:
            width, height = self.available_box(node, strategy)

            def fits(size):
                widest = max(self.line_width(line.runs, size) for line in lines)
                return widest < width and len(lines) * LINE_HEIGHT * size < height

        return search_font_size(fits, low, config.max_font_size, config.font_size_step)
