from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from report_import.config import load_import_config
from report_import.exceptions import ReportImportError
from report_import.pipeline import run_import
from report_import.util import is_date_arg

app = typer.Typer(add_completion=False)


@app.command()
def main(
    date: str = typer.Option(..., help="Report date (YYYYMMDD)."),
    url_template: Optional[str] = typer.Option(None, help="Report URL template containing {YYYYMMDD}."),
    history_url: Optional[str] = typer.Option(None, help="NAV history JSON URL."),
    out_dir: Optional[Path] = typer.Option(None, help="Output folder for the generated .mdx page."),
    config: Optional[Path] = typer.Option(None, help="Optional YAML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
):
    """
    Import a daily trading report and write it as an MDX page for the reports collection.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not is_date_arg(date):
        raise typer.BadParameter(f"Invalid --date: {date} (expected a YYYYMMDD calendar date)")
    if config is not None and not config.exists():
        raise typer.BadParameter(f"Config file not found: {config}")

    try:
        cfg, source = load_import_config(
            config,
            overrides={"url_template": url_template, "history_url": history_url, "out_dir": out_dir},
        )
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"Config file is not valid YAML: {e}")
    except ValidationError as e:
        raise typer.BadParameter(f"Invalid configuration: {e}")
    if source:
        logging.getLogger(__name__).debug("Loaded config from %s", source)
    try:
        result = run_import(date_arg=date, config=cfg)
    except ReportImportError as e:
        typer.echo(f"Import failed: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved {result.path}")


if __name__ == "__main__":
    app()
