"""
Sparkline geometry for the NAV history.

Coordinates are computed for a fixed SVG canvas; larger NAV values render
higher (smaller y).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from report_import.history import NavPoint, window
from report_import.util import plain_number


@dataclass(frozen=True)
class ChartGeometry:
    width: float = 360
    height: float = 120
    padding: float = 10
    window_size: int = 30

    @property
    def baseline(self) -> float:
        return self.height - self.padding


@dataclass(frozen=True)
class NavTick:
    value: float
    label: str
    y: float


@dataclass
class NavChart:
    geometry: ChartGeometry
    points: list[tuple[float, float]] = field(default_factory=list)
    line_path: str = ""
    area_path: str = ""
    ticks: list[NavTick] = field(default_factory=list)
    nav_min: float | None = None
    nav_max: float | None = None
    last_nav: float | None = None

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def last_x(self) -> float:
        return self.points[-1][0] if self.points else self.geometry.padding

    @property
    def last_y(self) -> float:
        return self.points[-1][1] if self.points else self.geometry.height / 2

    @property
    def last_label(self) -> str:
        return format_nav(self.last_nav) if self.last_nav is not None else ""

    @property
    def label_x(self) -> float:
        return min(self.last_x + 6, self.geometry.width - 2)

    @property
    def label_y(self) -> float:
        return max(self.last_y - 8, 12)


def format_nav(value: float) -> str:
    return f"{value:,.2f}"


def scale_x(index: int, total: int, geom: ChartGeometry) -> float:
    if total <= 1:
        return float(geom.padding)
    usable = geom.width - geom.padding * 2
    return geom.padding + (index / (total - 1)) * usable


def scale_y(value: float, nav_min: float, nav_max: float, geom: ChartGeometry) -> float:
    if nav_max == nav_min:
        return geom.height / 2
    usable = geom.height - geom.padding * 2
    return geom.padding + ((nav_max - value) / (nav_max - nav_min)) * usable


def build_nav_chart(points: list[NavPoint], geom: ChartGeometry | None = None) -> NavChart:
    """
    Scale the last `geom.window_size` points into line/area paths and three
    reference ticks (max, mid, min). Min and max come from the window only.

    An empty window yields an empty chart rather than failing on min/max.
    """
    geom = geom or ChartGeometry()
    recent = window(points, geom.window_size)
    if not recent:
        return NavChart(geometry=geom)

    navs = [p.nav for p in recent]
    lo, hi = min(navs), max(navs)
    n = len(recent)
    coords = [(scale_x(i, n, geom), scale_y(v, lo, hi, geom)) for i, v in enumerate(navs)]

    line_path = " ".join(f"{'M' if i == 0 else 'L'}{x:.2f} {y:.2f}" for i, (x, y) in enumerate(coords))
    baseline = plain_number(geom.baseline)
    area_path = f"{line_path} L {coords[-1][0]:.2f} {baseline} L {coords[0][0]:.2f} {baseline} Z"

    mid = (hi + lo) / 2
    ticks = [NavTick(value=v, label=format_nav(v), y=scale_y(v, lo, hi, geom)) for v in (hi, mid, lo)]
    return NavChart(
        geometry=geom,
        points=coords,
        line_path=line_path,
        area_path=area_path,
        ticks=ticks,
        nav_min=lo,
        nav_max=hi,
        last_nav=navs[-1],
    )
