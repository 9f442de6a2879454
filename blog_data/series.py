"""Series grouping and previous/next navigation."""

from __future__ import annotations

import re
from typing import Iterable

from .types import PostMetadata, Series, SeriesEntry


_FILENAME_STRIP_RE = re.compile(r"[^a-zA-Z0-9_.-]+")


def collect_series(posts: Iterable[PostMetadata], pages: Iterable[PostMetadata]) -> list[Series]:
    """Group posts by series id.

    Series appear in the order their id is first seen in ``posts``; posts
    without a series id are ignored. Each series takes the permalink of
    the first page declaring it as its ``seriesIndexId``.
    """
    pages = list(pages)
    grouped: dict[str, list[PostMetadata]] = {}
    for post in posts:
        if not post.series_id:
            continue
        grouped.setdefault(post.series_id, []).append(post)

    return [
        Series(
            title=series_id,
            permalink=find_series_permalink(series_id, pages),
            posts=sorted(members, key=lambda p: p.series_order),
        )
        for series_id, members in grouped.items()
    ]


def find_series_permalink(series_id: str, pages: Iterable[PostMetadata]) -> str:
    for page in pages:
        if page.series_index_id == series_id:
            return page.permalink
    return ""


def get_prev_post(post: PostMetadata, posts: Iterable[PostMetadata]) -> PostMetadata | None:
    return _find_by_order(posts, post.series_order - 1)


def get_next_post(post: PostMetadata, posts: Iterable[PostMetadata]) -> PostMetadata | None:
    return _find_by_order(posts, post.series_order + 1)


def _find_by_order(posts: Iterable[PostMetadata], order: int) -> PostMetadata | None:
    for candidate in posts:
        if candidate.series_order == order:
            return candidate
    return None


def series_entries(series: Series) -> list[SeriesEntry]:
    """Pair every post of a series with its neighbours by series order."""
    return [
        SeriesEntry(
            post=post,
            prev_post=get_prev_post(post, series.posts),
            next_post=get_next_post(post, series.posts),
        )
        for post in series.posts
    ]


def series_index_pages(pages: Iterable[PostMetadata]) -> list[PostMetadata]:
    """Return series landing pages sorted by their index order."""
    return sorted(
        (page for page in pages if page.series_index_id),
        key=lambda p: p.series_index_order,
    )


def series_filename(name: str) -> str:
    """Convert a series name into a URL-safe folder name.

    Examples:
        >>> series_filename("Why use F#?")
        'why-use-fsharp'
        >>> series_filename("F# for C# programmers")
        'fsharp-for-csharp-programmers'
    """
    slug = name.lower().replace(" ", "-").replace("f#", "fsharp").replace("c#", "csharp")
    return _FILENAME_STRIP_RE.sub("", slug)
