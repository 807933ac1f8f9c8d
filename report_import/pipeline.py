from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from report_import import net
from report_import.chart import ChartGeometry, build_nav_chart
from report_import.config import ImportConfig
from report_import.document import output_filename, render_document
from report_import.history import load_nav_points
from report_import.parser import parse_report
from report_import.util import slug_date

logger = logging.getLogger(__name__)

DATE_PLACEHOLDER = "{YYYYMMDD}"


@dataclass(frozen=True)
class ImportResult:
    path: Path
    source_url: str
    title_date: str
    assets: int
    operations: int
    nav_points: int


def build_report_url(template: str, date_arg: str) -> str:
    return template.replace(DATE_PLACEHOLDER, date_arg)


def chart_geometry(config: ImportConfig) -> ChartGeometry:
    c = config.chart
    return ChartGeometry(width=c.width, height=c.height, padding=c.padding, window_size=c.window_size)


def run_import(
    *,
    date_arg: str,
    config: ImportConfig,
    fetch_text: Callable[[str], str] | None = None,
    fetch_json: Callable[[str], Any] | None = None,
) -> ImportResult:
    """
    Fetch the day's report and NAV history, render the MDX page and write it to
    `config.out_dir`.

    Transport failures propagate (FetchError) and nothing is written.
    """
    slug = slug_date(date_arg)
    report_date = dt.date.fromisoformat(slug)
    url = build_report_url(config.url_template, date_arg)
    fetch_text = fetch_text or (lambda u: net.fetch_text(u, timeout_s=config.timeout_s))
    fetch_json = fetch_json or (lambda u: net.fetch_json(u, timeout_s=config.timeout_s))

    logger.info("Fetching report %s", url)
    raw_text = fetch_text(url)
    report = parse_report(raw_text, fallback_date=slug)

    logger.info("Fetching NAV history %s", config.history_url)
    history = fetch_json(config.history_url)
    points = load_nav_points(history, report_date=report_date)
    chart = build_nav_chart(points, chart_geometry(config))
    if chart.is_empty:
        logger.warning("No NAV history on or before %s; chart left empty", slug)

    document = render_document(report, chart, slug=slug, source_url=url, tags=config.tags)

    out_dir = Path(config.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / output_filename(slug)
    out_path.write_text(document, encoding="utf-8")

    result = ImportResult(
        path=out_path,
        source_url=url,
        title_date=report.title_date,
        assets=len(report.assets),
        operations=len(report.operations),
        nav_points=len(chart.points),
    )
    logger.info(
        "Saved %s (assets=%d operations=%d nav_points=%d)",
        result.path,
        result.assets,
        result.operations,
        result.nav_points,
    )
    return result
