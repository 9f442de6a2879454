from __future__ import annotations

import calendar
from pathlib import Path
from typing import Any, Iterable

import yaml
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .series import series_entries, series_filename
from .types import ArchiveMonth, PostMetadata, Series


def render_series_yaml(series_list: Iterable[Series], output_path: Path) -> None:
    data: dict[str, Any] = {}
    for series in series_list:
        posts = []
        for entry in series_entries(series):
            post = entry.post
            item: dict[str, Any] = {
                "slug": post.slug,
                "seriesOrder": post.series_order,
                "url": post.permalink,
                "title": post.title,
                "description": post.description,
            }
            if entry.prev_post is not None:
                item["prevUrl"] = entry.prev_post.permalink
                item["prevTitle"] = entry.prev_post.title
                item["prevOrder"] = str(entry.prev_post.series_order)
            if entry.next_post is not None:
                item["nextUrl"] = entry.next_post.permalink
                item["nextTitle"] = entry.next_post.title
                item["nextOrder"] = str(entry.next_post.series_order)
            posts.append(item)
        data[series.title] = {
            "title": series.title,
            "slug": series_filename(series.title),
            "permalink": series.permalink,
            "posts": posts,
        }
    _write_yaml(data, output_path)


def render_series_index_yaml(pages: Iterable[PostMetadata], output_path: Path) -> None:
    """Write the series landing pages in the given order.

    Callers pass pages already filtered and sorted by ``series_index_pages``.
    """
    data = [{"title": page.series_index_id, "permalink": page.permalink} for page in pages]
    _write_yaml(data, output_path)


def render_archives_yaml(months: Iterable[ArchiveMonth], output_path: Path) -> None:
    data = [
        {
            "year": month.year,
            "month": month.month,
            "monthName": month.month_name,
            "posts": [
                {
                    "slug": post.slug,
                    "url": f"/posts/{post.slug}/",
                    "title": post.title,
                    "date": format_archive_date(post),
                    "description": post.description,
                }
                for post in month.posts
            ],
        }
        for month in months
    ]
    _write_yaml(data, output_path)


def render_sitemap(
    posts: Iterable[PostMetadata],
    pages: Iterable[PostMetadata],
    output_path: Path,
    base_url: str,
) -> None:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )
    template = env.get_template("sitemap.xml")

    urls = [
        {"loc": base_url.rstrip("/") + item.permalink, "lastmod": item.date.strftime("%Y-%m-%d")}
        for item in [*pages, *posts]
    ]
    xml = template.render(urls=urls)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(xml, encoding="utf-8")


def format_archive_date(post: PostMetadata) -> str:
    """Format a post date as ``dd Mon yyyy``, e.g. ``01 Apr 2012``."""
    return f"{post.date.day:02d} {calendar.month_abbr[post.date.month]} {post.date.year}"


def _write_yaml(data: Any, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=1000,
        )
