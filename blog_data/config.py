"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Source layout and canonical site URL
- OutputConfig: Names of the generated data files
- ImagesConfig: Directories searched by the image link checker
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class SiteConfig:
    """Configuration for the blog source tree.

    Attributes:
        posts_dir: Folder (relative to the site root) holding dated posts
        data_dir: Folder (relative to the site root) receiving the YAML data files
        base_url: Scheme and host prepended to permalinks in the sitemap
        page_pattern: Glob used to find undated pages under the site root
    """

    posts_dir: str = "_posts"
    data_dir: str = "_data"
    base_url: str = "https://fsharpforfunandprofit.com"
    page_pattern: str = "*.md"


@dataclass
class OutputConfig:
    """Configuration for generated file names.

    Attributes:
        series_file: Series navigation data, written under data_dir
        series_index_file: Ordered list of series landing pages, written under data_dir
        archives_file: Posts grouped by year and month, written under data_dir
        sitemap_file: Sitemap XML, written at the site root
    """

    series_file: str = "series.yaml"
    series_index_file: str = "seriesIndex.yaml"
    archives_file: str = "archives.yaml"
    sitemap_file: str = "sitemap.xml"


@dataclass
class ImagesConfig:
    """Configuration for the image link checker.

    Attributes:
        content_dir: Folder (relative to the site root) containing markdown content
        static_dir: Folder (relative to the site root) serving rooted image paths
    """

    content_dir: str = "content"
    static_dir: str = "static"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Log file path, relative to the site root
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "blog-data.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    images: ImagesConfig = field(default_factory=ImagesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> AppConfig:
    """Return a fresh AppConfig populated with defaults."""
    return AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return default_config()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(raw).__name__}")

    return _merge_config(default_config(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "site": {
            "posts_dir": cfg.site.posts_dir,
            "data_dir": cfg.site.data_dir,
            "base_url": cfg.site.base_url,
            "page_pattern": cfg.site.page_pattern,
        },
        "output": {
            "series_file": cfg.output.series_file,
            "series_index_file": cfg.output.series_index_file,
            "archives_file": cfg.output.archives_file,
            "sitemap_file": cfg.output.sitemap_file,
        },
        "images": {
            "content_dir": cfg.images.content_dir,
            "static_dir": cfg.images.static_dir,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        site=SiteConfig(**data["site"]),
        output=OutputConfig(**data["output"]),
        images=ImagesConfig(**data["images"]),
        logging=LoggingConfig(**data["logging"]),
    )
