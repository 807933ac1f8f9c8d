from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any

from report_import.util import parse_date, parse_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavPoint:
    date: dt.date
    nav: float


def load_nav_points(payload: Any, *, report_date: dt.date) -> list[NavPoint]:
    """
    Turn the history feed (`{"entries": [{"date": ..., "nav": ...}]}`) into NAV
    points dated on or before `report_date`, sorted ascending.

    Entries with a missing/invalid date or a non-numeric nav are dropped.
    """
    entries = payload.get("entries") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        logger.warning("History feed has no entries list; chart will be empty")
        return []

    out: list[NavPoint] = []
    dropped = 0
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("date") or entry.get("nav") is None:
            dropped += 1
            continue
        d = parse_date(entry.get("date"))
        nav = parse_number(entry.get("nav"))
        if d is None or nav is None:
            dropped += 1
            continue
        if d > report_date:
            continue
        out.append(NavPoint(date=d, nav=nav))
    if dropped:
        logger.debug("Dropped %d malformed history entries", dropped)
    out.sort(key=lambda p: p.date)
    return out


def window(points: list[NavPoint], size: int) -> list[NavPoint]:
    if size <= 0:
        return []
    return points[-size:]
