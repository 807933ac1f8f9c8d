from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_URL_TEMPLATE = "https://logs.gleaftex.com/runs/fa888/martingale/reports/report_{YYYYMMDD}.txt"
DEFAULT_HISTORY_URL = "https://logs.gleaftex.com/runs/fa888/martingale/reports/history.json"
DEFAULT_OUT_DIR = "src/content/reports"

ENV_OVERRIDES = {
    "REPORT_URL_TEMPLATE": "url_template",
    "REPORT_HISTORY_URL": "history_url",
    "REPORT_OUT_DIR": "out_dir",
}


class ChartConfig(BaseModel):
    width: float = 360
    height: float = 120
    padding: float = 10
    window_size: int = Field(default=30, ge=1, description="Most recent NAV points drawn on the chart")


class ImportConfig(BaseModel):
    url_template: str = Field(default=DEFAULT_URL_TEMPLATE, description="Report URL; {YYYYMMDD} is substituted")
    history_url: str = Field(default=DEFAULT_HISTORY_URL, description="NAV history JSON feed")
    out_dir: Path = Field(default=Path(DEFAULT_OUT_DIR), description="Content collection folder for .mdx output")
    timeout_s: float = 30.0
    tags: list[str] = Field(default_factory=lambda: ["martingale", "daily"])
    chart: ChartConfig = Field(default_factory=ChartConfig)


def _candidate_paths() -> list[Path]:
    paths = [Path("report_import.yaml")]
    home = Path(os.path.expanduser("~"))
    paths.append(home / ".martingale" / "report_import.yaml")
    return paths


def _env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for env_key, field in ENV_OVERRIDES.items():
        v = (os.environ.get(env_key) or "").strip()
        if v:
            out[field] = v
    return out


def load_import_config(
    path: Optional[Path] = None,
    *,
    overrides: Optional[dict[str, Any]] = None,
) -> tuple[ImportConfig, Optional[str]]:
    """
    Load importer config.

    Precedence (highest first): `overrides` (CLI options), environment
    (REPORT_URL_TEMPLATE, REPORT_HISTORY_URL, REPORT_OUT_DIR), YAML, defaults.

    YAML search paths when `path` is not given (first match wins):
      - ./report_import.yaml
      - ~/.martingale/report_import.yaml
    """
    load_dotenv()
    data: dict[str, Any] = {}
    source: Optional[str] = None
    candidates = [path] if path is not None else _candidate_paths()
    for p in candidates:
        if p.exists():
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            source = str(p)
            break
    data.update(_env_overrides())
    for k, v in (overrides or {}).items():
        if v is not None:
            data[k] = v
    return ImportConfig.model_validate(data), source
