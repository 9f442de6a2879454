"""
Main pipeline orchestration for the blog data generator.

This module coordinates the whole single-pass batch:
1. Read front matter of dated posts
2. Read front matter of undated pages
3. Collect series and link previous/next posts
4. Group posts by year and month
5. Write series.yaml, seriesIndex.yaml, archives.yaml and sitemap.xml

Supports both progress bar and quiet modes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .archives import group_by_year_month
from .config import AppConfig
from .images import check_directory
from .logging_utils import log_event, setup_logging
from .metadata import extract_all_page_metadata, extract_all_post_metadata
from .renderer import (
    render_archives_yaml,
    render_series_index_yaml,
    render_series_yaml,
    render_sitemap,
)
from .series import collect_series, series_index_pages
from .types import GenerationResult, MissingImage

STAGE_COUNT = 5


def run_pipeline(
    root: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> GenerationResult:
    """Run the complete data file generation pipeline.

    Args:
        root: Site root containing the posts directory
        cfg: Application configuration
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        GenerationResult describing the files written and the counts seen

    Raises:
        FileNotFoundError: If the posts directory does not exist
    """
    console = console or Console()
    root = Path(root)
    logger = setup_logging(cfg.logging, root, console=console)

    log_event(logger, "Pipeline start", event="pipeline_start", root=str(root))

    if show_progress:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        )
        with progress:
            task = progress.add_task("Generate data files", total=STAGE_COUNT)
            result = _run_stages(root, cfg, logger, lambda: progress.advance(task, 1))
    else:
        result = _run_stages(root, cfg, logger, lambda: None)

    _render_summary(result, console)
    log_event(
        logger,
        "Pipeline complete",
        event="pipeline_complete",
        posts=result.posts,
        pages=result.pages,
        series=result.series,
        skipped=result.skipped,
    )
    return result


def _run_stages(root: Path, cfg: AppConfig, logger: logging.Logger, advance) -> GenerationResult:
    site = cfg.site
    data_dir = root / site.data_dir

    posts, skipped_posts = extract_all_post_metadata(root, site.posts_dir)
    advance()

    pages, skipped_pages = extract_all_page_metadata(
        root,
        site.posts_dir,
        exclude_dirs=(site.data_dir,),
        pattern=site.page_pattern,
    )
    advance()

    series = collect_series(posts, pages)
    advance()

    months = group_by_year_month(posts)
    advance()

    outputs = {
        "series": data_dir / cfg.output.series_file,
        "series_index": data_dir / cfg.output.series_index_file,
        "archives": data_dir / cfg.output.archives_file,
        "sitemap": root / cfg.output.sitemap_file,
    }
    render_series_yaml(series, outputs["series"])
    render_series_index_yaml(series_index_pages(pages), outputs["series_index"])
    render_archives_yaml(months, outputs["archives"])
    render_sitemap(posts, pages, outputs["sitemap"], site.base_url)
    for kind, path in outputs.items():
        log_event(logger, f"Wrote {path}", event="file_written", kind=kind, path=str(path))
    advance()

    return GenerationResult(
        outputs=outputs,
        posts=len(posts),
        pages=len(pages),
        series=len(series),
        skipped=skipped_posts + skipped_pages,
    )


def run_image_check(root: Path, cfg: AppConfig, console: Console | None = None) -> list[MissingImage]:
    """Check content under the site root for image references with no file."""
    console = console or Console()
    root = Path(root)
    logger = setup_logging(cfg.logging, root, console=console)
    content_dir = root / cfg.images.content_dir
    static_dir = root / cfg.images.static_dir

    log_event(logger, "Image check start", event="image_check_start", root=str(content_dir))
    missing = check_directory(content_dir, static_dir)
    console.print(f"[bold]Image check[/bold]: missing={len(missing)}")
    return missing


def _render_summary(result: GenerationResult, console: Console) -> None:
    console.print(
        "[bold]Generation summary[/bold]: "
        f"posts={result.posts}, pages={result.pages}, series={result.series}, "
        f"skipped={result.skipped}"
    )
