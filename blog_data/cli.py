"""
Command-line interface for the blog data generator.

Uses Typer to provide a CLI with options for the main configuration
settings. Two commands are available:
- generate: write series, series index, archives and sitemap files
- check-images: report image references that point at missing files
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import AppConfig, load_config
from .runner import run_image_check, run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, log_level: str | None, log_file: bool | None) -> AppConfig:
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file
    return cfg


@app.command()
def generate(
    root: Path = typer.Option(
        Path("."), "--root", "-r", exists=True, file_okay=False, help="Site root directory."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    base_url: str | None = typer.Option(
        None, "--base-url", help="Scheme and host prepended to sitemap URLs."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Generate the data files consumed by the static site generator.

    Scans dated posts and undated pages under the site root and writes
    series.yaml, seriesIndex.yaml and archives.yaml into the data folder,
    plus sitemap.xml at the root.
    """
    cfg = _load(config, log_level, log_file)
    if base_url:
        cfg.site.base_url = base_url

    try:
        result = run_pipeline(root, cfg, show_progress=progress, console=console)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    for path in result.outputs.values():
        console.print(f"Wrote: {path}")


@app.command("check-images")
def check_images(
    root: Path = typer.Option(
        Path("."), "--root", "-r", exists=True, file_okay=False, help="Site root directory."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with a non-zero status when images are missing."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Report markdown and front-matter images that do not exist on disk."""
    cfg = _load(config, log_level, None)
    try:
        missing = run_image_check(root, cfg, console=console)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if strict and missing:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
