from __future__ import annotations

__all__ = [
    "AssetRow",
    "ChartGeometry",
    "NavChart",
    "NavPoint",
    "ParsedReport",
    "RawOperation",
    "Trade",
    "FetchError",
    "DocumentError",
    "ReportImportError",
    "build_nav_chart",
    "load_nav_points",
    "parse_report",
    "run_import",
]

from report_import.chart import ChartGeometry, NavChart, build_nav_chart
from report_import.exceptions import DocumentError, FetchError, ReportImportError
from report_import.history import NavPoint, load_nav_points
from report_import.parser import AssetRow, ParsedReport, RawOperation, Trade, parse_report
from report_import.pipeline import run_import
