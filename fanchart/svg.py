"""Draw a finished chart onto an svgwrite drawing."""

from __future__ import annotations

import logging
import math

import svgwrite

from .chart import Drawing, Segment
from .labels import Label, TextLine

log = logging.getLogger(__name__)

text_font = "Georgia, 'Times New Roman', Times, serif"

MARGIN = 10

stylesheet = """
.person { stroke-width: 1.5; }
.direct-line-1, .direct-line-2 { stroke-width: 3; }
.deceased-young { fill-opacity: 0.85; }
.preferred { text-decoration: underline; }
.lastName { font-weight: 600; }
.date, .place { fill: #555555; }
.marriage { fill: #666666; }
"""


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".") if value else "0"


def view_box(drawing: Drawing):
    """(min_x, min_y, width, height) around the drawn part of the fan."""
    radius = drawing.radius + MARGIN
    half = drawing.fan_degree / 2

    # lowest point of the outer ring, the center circle is always fully visible
    bottom = max(-drawing.radius * math.cos(math.radians(half)), drawing.center_radius)
    bottom = min(bottom, drawing.radius) + MARGIN

    return (-radius, -radius, 2 * radius, radius + bottom)


class SvgWriter:
    def __init__(self, font_family: str = text_font, css: str = stylesheet):
        self.font_family = font_family
        self.css = css

    def draw(self, drawing: Drawing, filename: str = "fanchart.svg") -> svgwrite.Drawing:
        min_x, min_y, width, height = view_box(drawing)
        # tspans inside textPath are valid SVG but rejected by the svgwrite validator
        dwg = svgwrite.Drawing(filename, size=(f"{_fmt(width)}px", f"{_fmt(height)}px"), debug=False)
        dwg.viewbox(min_x, min_y, width, height)
        dwg.defs.add(dwg.style(self.css))

        for definition in drawing.definitions:
            dwg.defs.add(dwg.path(d=definition.d, id=definition.id, fill="none", stroke="none"))

        segments = dwg.g(id="segments")
        for segment in drawing.segments:
            self.add_segment(dwg, segments, segment)
        dwg.add(segments)

        labels = dwg.g(id="labels", font_family=self.font_family)
        for label in drawing.labels:
            self.add_label(dwg, labels, label)
        dwg.add(labels)

        log.debug("svg has %d segments and %d labels", len(drawing.segments), len(drawing.labels))
        return dwg

    def add_segment(self, dwg, parent, segment: Segment):
        path = dwg.path(
            d=segment.d,
            fill=segment.fill,
            stroke=segment.stroke,
            id=segment.element_id,
            class_=" ".join(segment.classes),
        )
        # add link
        if segment.url:
            link = dwg.a(segment.url, target="_blank")
            link.add(path)
            parent.add(link)
        else:
            parent.add(path)

    def add_label(self, dwg, parent, label: Label):
        group = dwg.g(id=f"label-{label.element_id}")
        for line in label.lines:
            group.add(self.create_text(dwg, line))
        parent.add(group)

    def create_text(self, dwg, line: TextLine):
        attributes = {
            "font_size": f"{_fmt(line.font_size)}px",
            "text_anchor": "middle",
        }
        if line.css_class:
            attributes["class_"] = line.css_class
        if any(run.is_rtl for run in line.runs):
            attributes["direction"] = "rtl"

        if line.path_id:
            text = dwg.text("", **attributes)
            container = dwg.textPath(f"#{line.path_id}", "", startOffset=line.start_offset or "50%")
            text.add(container)
        else:
            text = dwg.text("", transform=line.transform, dy=[_fmt(line.dy or 0)], **attributes)
            container = text

        last = len(line.runs) - 1
        for index, run in enumerate(line.runs):
            label = run.label if index == last else run.label + " "
            classes = run.classes
            if classes:
                container.add(dwg.tspan(label, class_=" ".join(classes)))
            else:
                container.add(dwg.tspan(label))

        return text

    def save(self, drawing: Drawing, filename: str, pretty: bool = False) -> str:
        dwg = self.draw(drawing, filename)
        dwg.save(pretty=pretty)
        log.info("SVG file created: %s", filename)
        return filename

    def tostring(self, drawing: Drawing) -> str:
        return self.draw(drawing).tostring()
