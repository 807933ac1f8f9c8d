from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pydantic import ValidationError

from report_import.chart import NavChart
from report_import.exceptions import DocumentError
from report_import.parser import ParsedReport, RawOperation
from report_import.schemas import ReportFrontMatter
from report_import.util import SENTINEL, plain_number

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

TITLE_PREFIX = "每日收益快照"
DESCRIPTION = "自动同步生成的每日报告。"
DEFAULT_TAGS = ["martingale", "daily"]


def output_filename(slug: str) -> str:
    return f"{slug}.mdx"


def build_front_matter(
    report: ParsedReport,
    *,
    source_url: str,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """
    Front matter for the `reports` collection; validated before it is returned.
    """
    try:
        pub_date = dt.date.fromisoformat(report.title_date)
    except ValueError as e:
        raise DocumentError(f"Report date is not YYYY-MM-DD: {report.title_date!r}") from e
    data: dict[str, Any] = {
        "title": f"{TITLE_PREFIX} · {report.title_date}",
        "description": DESCRIPTION,
        "pubDate": pub_date,
        "sourceUrl": source_url,
        "tags": list(tags if tags is not None else DEFAULT_TAGS),
    }
    try:
        ReportFrontMatter.model_validate(data)
    except ValidationError as e:
        raise DocumentError(f"Front matter does not match the reports schema: {e}") from e
    return data


def dump_front_matter(data: dict[str, Any]) -> str:
    body = yaml.safe_dump(data, allow_unicode=True, sort_keys=False, default_flow_style=None, width=1000)
    return f"---\n{body}---\n"


def operation_cells(op: Any) -> list[str]:
    if isinstance(op, RawOperation):
        return [op.raw] + [SENTINEL] * 6
    return [op.time, op.symbol, op.side, op.size, op.price, op.amount, op.profit]


def _env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["fixed2"] = lambda v: f"{float(v):.2f}"
    env.filters["num"] = plain_number
    env.filters["jsx_string"] = lambda v: json.dumps(str(v), ensure_ascii=False)
    return env


def render_document(
    report: ParsedReport,
    chart: NavChart,
    *,
    slug: str,
    source_url: str,
    tags: list[str] | None = None,
) -> str:
    front_matter = build_front_matter(report, source_url=source_url, tags=tags)
    tpl = _env().get_template("report.mdx.j2")
    body = tpl.render(
        report=report,
        m=report.metric,
        chart=chart,
        chart_id=f"nav-{slug.replace('-', '')}",
        assets=report.assets,
        operations=[operation_cells(op) for op in report.operations],
        raw_text_literal=json.dumps(report.raw_text, ensure_ascii=False),
    )
    return dump_front_matter(front_matter) + "\n" + body
