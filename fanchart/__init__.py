"""Radial descendant fan chart."""

from .chart import Drawing, FanChart, Segment
from .config import ChartConfig, FilterMode
from .errors import (
    ConfigurationOutOfRange,
    DegenerateGeometry,
    FanChartError,
    InvalidRoot,
    MeasurementUnavailable,
)
from .measure import FontMeasure
from .records import FamilyRecord, PersonRecord, Sex
from .tree import Node, TreeBuilder

__version__ = "0.1.0"

__all__ = [
    "ChartConfig",
    "ConfigurationOutOfRange",
    "DegenerateGeometry",
    "Drawing",
    "FamilyRecord",
    "FanChart",
    "FanChartError",
    "FilterMode",
    "FontMeasure",
    "InvalidRoot",
    "MeasurementUnavailable",
    "Node",
    "PersonRecord",
    "Segment",
    "Sex",
    "TreeBuilder",
]
