"""
Core data types for the blog data generator.

This module defines the value objects passed between pipeline stages:
- PostMetadata: Front-matter fields of one post or page
- Series: Posts sharing a series id, in reading order
- SeriesEntry: A series post with its previous/next neighbours
- ArchiveMonth: Posts published in one calendar month
- MissingImage: An image reference that resolves to no file
- GenerationResult: Summary of one generator run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


@dataclass(frozen=True)
class PostMetadata:
    """Metadata parsed from a post or page front-matter block.

    Attributes:
        slug: URL slug (filename stem without the date prefix for posts)
        date: Publication date for posts, last-modified date for pages
        layout: Layout name requested by the page
        title: Human readable title
        description: Short summary shown in listings
        series_id: Series this post belongs to, empty if none
        series_order: Position of the post inside its series
        series_index_id: Series this page is the landing page for, empty if none
        series_index_order: Position of this landing page in the series index
        permalink: Canonical URL path of the post or page
        categories: Category names listed in the front matter
        is_draft: Whether the front matter marks the file as a draft
        source: Path of the markdown file the metadata came from
    """

    slug: str
    date: date
    layout: str = ""
    title: str = ""
    description: str = ""
    series_id: str = ""
    series_order: int = 0
    series_index_id: str = ""
    series_index_order: int = 0
    permalink: str = ""
    categories: tuple[str, ...] = ()
    is_draft: bool = False
    source: Path | None = None


@dataclass
class Series:
    """A named series of posts sorted by series order.

    Attributes:
        title: The series id, also used as its display title
        permalink: URL of the series landing page, empty when there is none
        posts: Member posts sorted by series_order
    """

    title: str
    permalink: str = ""
    posts: list[PostMetadata] = field(default_factory=list)


@dataclass
class SeriesEntry:
    post: PostMetadata
    prev_post: PostMetadata | None = None
    next_post: PostMetadata | None = None


@dataclass
class ArchiveMonth:
    """Posts of a single year/month, newest first."""

    year: int
    month: int
    month_name: str
    posts: list[PostMetadata] = field(default_factory=list)


@dataclass(frozen=True)
class MissingImage:
    """An image reference whose target could not be found.

    Attributes:
        post: Markdown file containing the reference
        context: "markdown" for inline images, "frontmatter" for image: headers
        src: The image path as written in the file
    """

    post: Path
    context: str
    src: str

    def describe(self) -> str:
        post_name = f"{self.post.parent.name}/{self.post.name}"
        return f"'{post_name}': {self.context} '{self.src}'"


@dataclass
class GenerationResult:
    """Outcome of a generator run.

    Attributes:
        outputs: Files written, keyed by kind ("series", "series_index", "archives", "sitemap")
        posts: Number of published posts
        pages: Number of published pages
        series: Number of series found
        skipped: Files ignored because their name or content was malformed
    """

    outputs: dict[str, Path] = field(default_factory=dict)
    posts: int = 0
    pages: int = 0
    series: int = 0
    skipped: int = 0
