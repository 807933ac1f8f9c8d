from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Union

from report_import.sections import ReportSections, extract_metrics, normalize_lines, split_sections
from report_import.util import SENTINEL, find_iso_date

logger = logging.getLogger(__name__)

HEADER_MARKER = "【每日收益快照】"
AGGREGATE_PREFIX = "Simple Earn"
AGGREGATE_SYMBOL = "Simple Earn USDT"

BUY = "买入"
SELL = "卖出"

_TOTAL_RE = re.compile(r"total=([0-9.,]+)")
_SIZE_RE = re.compile(r"size=(\S+)")
_AVG_RE = re.compile(r"avg=(\S+)")
_PRICE_RE = re.compile(r"price=(\S+)")
_VALUE_RE = re.compile(r"value=(\S+)")
_PNL_RE = re.compile(r"浮盈\s+([-\d.]+)")
_PNL_RATE_RE = re.compile(r"\(([-\d.]+%)\)")
_TRADE_RE = re.compile(
    r"^-\s+(\d{4}-\d{2}-\d{2})\s+(\d{2}:\d{2})\s+(\S+)\s+(买入|卖出)\s+([0-9.]+)@([0-9.]+)"
    r"\s+成交额\s+([0-9.]+)(?:\s+利润\s+([0-9.\-]+))?"
)


@dataclass(frozen=True)
class AssetRow:
    symbol: str
    size: str = SENTINEL
    avg: str = SENTINEL
    price: str = SENTINEL
    pnl: str = SENTINEL
    pnl_rate: str = SENTINEL
    value: str = SENTINEL

    @property
    def is_aggregate(self) -> bool:
        return self.symbol == AGGREGATE_SYMBOL


@dataclass(frozen=True)
class Trade:
    time: str
    symbol: str
    side: str
    size: str
    price: str
    amount: str
    profit: str = SENTINEL

    @property
    def is_buy(self) -> bool:
        return self.side == BUY


@dataclass(frozen=True)
class RawOperation:
    """An operation line that did not match the trade grammar, kept verbatim."""

    raw: str


OperationRow = Union[Trade, RawOperation]


@dataclass
class ParsedReport:
    raw_text: str
    title_date: str
    metrics: dict[str, str] = field(default_factory=dict)
    sections: ReportSections = field(default_factory=ReportSections)
    assets: list[AssetRow] = field(default_factory=list)
    operations: list[OperationRow] = field(default_factory=list)

    @property
    def basis_lines(self) -> list[str]:
        return self.sections.basis

    @property
    def fields_lines(self) -> list[str]:
        return self.sections.fields

    def metric(self, key: str) -> str:
        return self.metrics.get(key, SENTINEL)


def _capture(pattern: re.Pattern[str], line: str) -> str:
    m = pattern.search(line)
    return m.group(1) if m else SENTINEL


def parse_asset_line(line: str) -> AssetRow:
    if line.startswith(AGGREGATE_PREFIX):
        return AssetRow(symbol=AGGREGATE_SYMBOL, value=_capture(_TOTAL_RE, line))
    return AssetRow(
        symbol=line.split(" ")[0],
        size=_capture(_SIZE_RE, line),
        avg=_capture(_AVG_RE, line),
        price=_capture(_PRICE_RE, line),
        pnl=_capture(_PNL_RE, line),
        pnl_rate=_capture(_PNL_RATE_RE, line),
        value=_capture(_VALUE_RE, line),
    )


def parse_operation_line(line: str) -> OperationRow:
    m = _TRADE_RE.match(line)
    if not m:
        logger.debug("Operation line kept raw: %s", line)
        return RawOperation(raw=line[2:] if line.startswith("- ") else line)
    date, time, symbol, side, size, price, amount, profit = m.groups()
    return Trade(
        time=f"{date} {time}",
        symbol=symbol,
        side=side,
        size=size,
        price=price,
        amount=amount,
        profit=profit if profit is not None else SENTINEL,
    )


def find_title_date(lines: list[str], fallback: str) -> str:
    for line in lines:
        if line.startswith(HEADER_MARKER):
            return find_iso_date(line) or fallback
    return fallback


def parse_report(raw_text: str, *, fallback_date: str) -> ParsedReport:
    """
    Best-effort parse of a daily report.

    Never raises on unexpected text: missing sections come back empty, missing
    fields as the "-" sentinel and unrecognised operation lines as RawOperation.
    """
    lines = normalize_lines(raw_text)
    sections = split_sections(lines)
    report = ParsedReport(
        raw_text=raw_text,
        title_date=find_title_date(lines, fallback_date),
        metrics=extract_metrics(lines),
        sections=sections,
        assets=[parse_asset_line(line) for line in sections.assets],
        operations=[parse_operation_line(line) for line in sections.operations],
    )
    logger.debug(
        "Parsed report %s: %d metrics, %d assets, %d operations",
        report.title_date,
        len(report.metrics),
        len(report.assets),
        len(report.operations),
    )
    return report
