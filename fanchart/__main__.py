import argparse
import json
import logging
import sys
from pathlib import Path

from . import config as defaults
from .chart import FanChart
from .config import ChartConfig, FilterMode
from .errors import FanChartError
from .measure import FontMeasure
from .sources import load_csv
from .svg import SvgWriter
from .tree import Node


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fanchart", description="Render a descendant fan chart to an SVG file."
    )
    parser.add_argument("input", type=Path, help="CSV genealogy or JSON descendant tree.")
    parser.add_argument("--root", help="Id of the root person (CSV input).")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("fanchart.svg"),
        help="Path to output SVG file (default: fanchart.svg).",
    )
    parser.add_argument("--generations", type=int, default=defaults.DEFAULT_GENERATIONS)
    parser.add_argument("--fan-degree", type=int, default=defaults.DEFAULT_FAN_DEGREE)
    parser.add_argument(
        "--font-scale", type=int, default=defaults.DEFAULT_FONT_SCALE, help="Percent."
    )
    parser.add_argument("--inner-arcs", type=int, default=defaults.DEFAULT_INNER_ARCS)
    parser.add_argument(
        "--filter",
        dest="filter_mode",
        choices=[mode.value for mode in FilterMode],
        default=FilterMode.ALL.value,
    )
    parser.add_argument(
        "--direct-line",
        action="append",
        default=[],
        metavar="ID",
        help="Mark the line from the root to this person (at most twice).",
    )
    parser.add_argument("--marriage-dates", action="store_true")
    parser.add_argument("--highlight-deceased-young", action="store_true")
    parser.add_argument("--color-gradients", action="store_true")
    parser.add_argument("--hide-empty-segments", action="store_true")
    parser.add_argument("--font", help="TrueType font used to measure label widths.")
    parser.add_argument("--locale", default="de", help="Locale of the displayed dates.")
    parser.add_argument("--url", help="Link template of a person, e.g. https://example.org/{xref}")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    if len(args.direct_line) > 2:
        parser.error("--direct-line may be given at most twice")
    if args.input.suffix.lower() != ".json" and not args.root:
        parser.error("--root is required for CSV input")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    direct_lines = (args.direct_line + [None, None])[:2]

    try:
        config = ChartConfig(
            generations=args.generations,
            fan_degree=args.fan_degree,
            inner_arcs=args.inner_arcs,
            font_scale=args.font_scale,
            filter_mode=FilterMode(args.filter_mode),
            show_parent_marriage_dates=args.marriage_dates,
            highlight_deceased_young=args.highlight_deceased_young,
            show_color_gradients=args.color_gradients,
            hide_empty_segments=args.hide_empty_segments,
            date_locale=args.locale,
        )
        chart = FanChart(config, FontMeasure(args.font), tuple(direct_lines))

        if args.input.suffix.lower() == ".json":
            data = json.loads(args.input.read_text(encoding="utf-8"))
            # the chart endpoint wraps the tree into {"data": ...}
            if "data" in data and "children" not in data and "data" in (data["data"] or {}):
                data = data["data"]
            drawing = chart.render_tree(Node.from_json(data))
        else:
            people = load_csv(args.input, url_template=args.url)
            drawing = chart.render(people.get(args.root))

        SvgWriter().save(drawing, str(args.output))
    except FanChartError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
