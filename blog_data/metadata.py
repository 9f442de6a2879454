"""
Post and page metadata extraction.

Dated posts live directly in the posts directory and are named
``YYYY-MM-DD-slug.md``; the date and slug come from the filename, the
rest from the front matter. Undated pages are every other markdown file
under the site root and take their date from the file's modification
time.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path

from .frontmatter import lookup, read_header, str_to_bool, str_to_int, yaml_to_list
from .types import PostMetadata


logger = logging.getLogger("blog_data.metadata")


def construct_permalink(slug: str, path: Path, root: Path, posts_dir: str = "_posts") -> str:
    """Derive the canonical URL path for a markdown file.

    Posts map to ``/posts/<slug>/``. Pages map to their root-relative
    path with ``index.md`` dropped and ``.md`` replaced by ``.html``.

    Examples:
        >>> construct_permalink("intro", Path("site/_posts/2012-04-01-intro.md"), Path("site"))
        '/posts/intro/'
        >>> construct_permalink("index", Path("site/about/index.md"), Path("site"))
        '/about/'
        >>> construct_permalink("state", Path("site/series/state.md"), Path("site"))
        '/series/state.html'
    """
    relative = Path(os.path.abspath(path)).relative_to(os.path.abspath(root))
    if posts_dir in relative.parts[:-1]:
        return f"/posts/{slug}/"
    local = "/" + relative.as_posix()
    if relative.name == "index.md":
        local = local[: -len("index.md")]
    elif relative.suffix == ".md":
        local = local[: -len(".md")] + ".html"
    return local


def create_post_metadata(
    slug: str,
    published: date,
    path: Path,
    root: Path,
    posts_dir: str = "_posts",
) -> PostMetadata:
    """Build a PostMetadata from the front matter of ``path``."""
    header = read_header(path)
    permalink = lookup(header, "Permalink") or construct_permalink(slug, path, root, posts_dir)
    return PostMetadata(
        slug=slug,
        date=published,
        layout=lookup(header, "Layout"),
        title=lookup(header, "Title"),
        description=lookup(header, "Description"),
        series_id=lookup(header, "SeriesId"),
        series_order=str_to_int(lookup(header, "SeriesOrder"), 0),
        series_index_id=lookup(header, "SeriesIndexId"),
        series_index_order=str_to_int(lookup(header, "SeriesIndexOrder"), 0),
        permalink=permalink,
        categories=tuple(yaml_to_list(lookup(header, "Categories"))),
        is_draft=str_to_bool(lookup(header, "Draft"), False),
        source=Path(path),
    )


def parse_post_filename(path: Path) -> tuple[date, str] | None:
    """Split a ``YYYY-MM-DD-slug`` filename into its date and slug.

    Returns:
        The publication date and slug, or None when the name does not
        follow the pattern or the date is not a real calendar date.
    """
    parts = Path(path).stem.split("-", 3)
    if len(parts) != 4 or not parts[3]:
        return None
    year, month, day, slug = parts
    try:
        return date(int(year), int(month), int(day)), slug
    except ValueError:
        return None


def extract_post_metadata(
    path: Path, root: Path, posts_dir: str = "_posts"
) -> PostMetadata | None:
    """Read a dated post, or warn and return None for a malformed filename."""
    parsed = parse_post_filename(path)
    if parsed is None:
        logger.warning(
            "Invalid path %s", path, extra={"event": "invalid_post_path", "path": str(path)}
        )
        return None
    published, slug = parsed
    return _read_metadata(slug, published, path, root, posts_dir)


def extract_page_metadata(
    path: Path, root: Path, posts_dir: str = "_posts"
) -> PostMetadata | None:
    """Read an undated page, dated by its last-modified time."""
    path = Path(path)
    modified = datetime.fromtimestamp(path.stat().st_mtime).date()
    return _read_metadata(path.stem, modified, path, root, posts_dir)


def _read_metadata(
    slug: str, published: date, path: Path, root: Path, posts_dir: str
) -> PostMetadata | None:
    try:
        return create_post_metadata(slug, published, path, root, posts_dir)
    except UnicodeDecodeError as exc:
        logger.warning(
            "Unreadable file %s: %s",
            path,
            exc,
            extra={"event": "unreadable_file", "path": str(path)},
        )
        return None


def extract_all_post_metadata(
    root: Path, posts_dir: str = "_posts"
) -> tuple[list[PostMetadata], int]:
    """Read every published post in ``<root>/<posts_dir>``.

    Returns:
        The published posts in filename order, and the number of files
        that were skipped because they could not be parsed.

    Raises:
        FileNotFoundError: If the posts directory does not exist
    """
    directory = Path(root) / posts_dir
    if not directory.is_dir():
        raise FileNotFoundError(f"Posts directory not found: {directory}")

    posts: list[PostMetadata] = []
    skipped = 0
    for path in sorted(p for p in directory.iterdir() if p.is_file()):
        meta = extract_post_metadata(path, root, posts_dir)
        if meta is None:
            skipped += 1
            continue
        if meta.is_draft:
            logger.debug("Skipping draft %s", path)
            continue
        posts.append(meta)
    return posts, skipped


def extract_all_page_metadata(
    root: Path,
    posts_dir: str = "_posts",
    exclude_dirs: tuple[str, ...] = (),
    pattern: str = "*.md",
) -> tuple[list[PostMetadata], int]:
    """Read every published markdown page below ``root`` outside the posts directory."""
    root = Path(root)
    excluded = {posts_dir, *exclude_dirs}
    pages: list[PostMetadata] = []
    skipped = 0
    for path in sorted(root.rglob(pattern)):
        if not path.is_file():
            continue
        if excluded.intersection(path.relative_to(root).parts[:-1]):
            continue
        meta = extract_page_metadata(path, root, posts_dir)
        if meta is None:
            skipped += 1
            continue
        if meta.is_draft:
            logger.debug("Skipping draft %s", path)
            continue
        pages.append(meta)
    return pages, skipped
