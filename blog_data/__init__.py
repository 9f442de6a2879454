"""
Blog Data - build-time data files for a static blog.

This package scans a blog's markdown posts and pages, parses their
front matter, and writes the derived data files a static site generator
consumes: series navigation, a series index, monthly archives and a
sitemap.

Main entry point is the CLI via `blog-data generate` command.

Example:
    $ blog-data generate --root site/
"""

__all__ = [
    "__version__",
    "AppConfig",
    "load_config",
    "PostMetadata",
    "Series",
    "collect_series",
    "group_by_year_month",
    "run_pipeline",
]
__version__ = "0.1.0"

from .archives import group_by_year_month
from .config import AppConfig, load_config
from .runner import run_pipeline
from .series import collect_series
from .types import PostMetadata, Series
