from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any

SENTINEL = "-"

_DATE_ARG_RE = re.compile(r"^\d{8}$")
_ISO_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")


def parse_date_arg(value: Any) -> dt.date | None:
    if not isinstance(value, str) or not _DATE_ARG_RE.match(value):
        return None
    try:
        return dt.datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        return None


def is_date_arg(value: Any) -> bool:
    return parse_date_arg(value) is not None


def slug_date(date_arg: str) -> str:
    """
    `20250131` -> `2025-01-31`. Raises ValueError unless the argument is an
    8-digit calendar date.
    """
    d = parse_date_arg(date_arg)
    if d is None:
        raise ValueError(f"Expected a YYYYMMDD calendar date, got {date_arg!r}")
    return d.isoformat()


def parse_date(value: Any) -> dt.date | None:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return dt.date.fromisoformat(s[:10])
    except ValueError:
        return None


def parse_number(value: Any) -> float | None:
    """
    Numbers arrive either as JSON numbers or numeric strings ("1.0234").
    Booleans, NaN and infinities are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(x):
        return None
    return x


def find_iso_date(text: str) -> str | None:
    m = _ISO_DATE_RE.search(text or "")
    return m.group(1) if m else None


def plain_number(value: float) -> str:
    """Whole numbers print without a trailing ".0" (SVG attributes, path baselines)."""
    return str(int(value)) if float(value).is_integer() else str(value)
