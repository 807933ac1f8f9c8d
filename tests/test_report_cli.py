from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from report_import import cli
from report_import.exceptions import FetchError
from report_import.pipeline import ImportResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for k in ("REPORT_URL_TEMPLATE", "REPORT_HISTORY_URL", "REPORT_OUT_DIR"):
        monkeypatch.delenv(k, raising=False)


@pytest.mark.parametrize("args", [["--date", "2025-01-31"], ["--date", "2025013"], []])
def test_cli_rejects_missing_or_malformed_date(args: list[str]):
    result = runner.invoke(cli.app, args)
    assert result.exit_code != 0


def test_cli_passes_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    captured = {}

    def fake_run_import(*, date_arg, config):
        captured["date_arg"] = date_arg
        captured["config"] = config
        return ImportResult(
            path=config.out_dir / "2025-01-31.mdx",
            source_url="u",
            title_date="2025-01-31",
            assets=0,
            operations=0,
            nav_points=0,
        )

    monkeypatch.setattr(cli, "run_import", fake_run_import)
    result = runner.invoke(
        cli.app,
        ["--date", "20250131", "--history-url", "https://h.test/history.json", "--out-dir", str(tmp_path / "o")],
    )
    assert result.exit_code == 0, result.output
    assert "Saved" in result.output
    assert captured["date_arg"] == "20250131"
    assert captured["config"].history_url == "https://h.test/history.json"
    assert captured["config"].out_dir == tmp_path / "o"


def test_cli_fetch_failure_exits_nonzero(monkeypatch: pytest.MonkeyPatch):
    def failing(**kwargs):
        raise FetchError("Failed to fetch https://x (500)")

    monkeypatch.setattr(cli, "run_import", failing)
    result = runner.invoke(cli.app, ["--date", "20250131"])
    assert result.exit_code == 1


def test_cli_rejects_calendar_invalid_date_before_fetching(monkeypatch: pytest.MonkeyPatch):
    calls = []
    monkeypatch.setattr(cli, "run_import", lambda **kwargs: calls.append(kwargs))
    for bad in ("20251340", "20250230", "20250000"):
        result = runner.invoke(cli.app, ["--date", bad])
        assert result.exit_code == 2
    assert calls == []


@pytest.mark.parametrize(
    "yaml_text",
    [
        "chart: [unclosed\n",
        "chart:\n  window_size: 0\n",
    ],
)
def test_cli_reports_bad_config_as_usage_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, yaml_text: str):
    calls = []
    monkeypatch.setattr(cli, "run_import", lambda **kwargs: calls.append(kwargs))
    (tmp_path / "report_import.yaml").write_text(yaml_text, encoding="utf-8")
    result = runner.invoke(cli.app, ["--date", "20250131"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, (ValueError, AttributeError))
    assert calls == []
