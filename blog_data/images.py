"""
Broken image link detection for markdown content.

Two kinds of references are checked:
- inline markdown images, ``![alt](src)``
- front-matter image headers, ``image: "src"``

A rooted source (``/assets/a.png``) may live in either the static
directory or the content directory; a relative source is resolved
against the folder of the post that references it.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from .types import MissingImage


logger = logging.getLogger("blog_data.images")

MARKDOWN_IMAGE_RE = re.compile(r"!\[.*?\]\((.*?)\)")
FRONTMATTER_IMAGE_RE = re.compile(r"image:\s*\"(.*?)\"")
_EXTERNAL_PREFIXES = ("http://", "https://", "//", "data:")


def make_search_paths(post: Path, src: str, static_dir: Path, content_dir: Path) -> list[Path]:
    """Return the absolute locations where ``src`` may exist."""
    if src.startswith("/"):
        local = src.lstrip("/")
        candidates = [Path(static_dir) / local, Path(content_dir) / local]
    else:
        candidates = [Path(post).parent / src]
    return [Path(os.path.abspath(candidate)) for candidate in candidates]


def try_missing_link(
    context: str, post: Path, src: str, static_dir: Path, content_dir: Path
) -> MissingImage | None:
    """Return a MissingImage when none of the search paths exists."""
    if not src or src.startswith(_EXTERNAL_PREFIXES):
        return None
    if any(p.is_file() for p in make_search_paths(post, src, static_dir, content_dir)):
        return None
    return MissingImage(post=Path(post), context=context, src=src)


def _clean_markdown_src(raw: str) -> str:
    # drop an optional title: ![alt](src "title") or ![alt](<src with spaces> "title")
    raw = raw.strip()
    if raw.startswith("<") and ">" in raw:
        return raw[1 : raw.index(">")].strip()
    parts = raw.split()
    if not parts:
        return ""
    return parts[0]


def find_missing_links(post: Path, static_dir: Path, content_dir: Path) -> list[MissingImage]:
    text = Path(post).read_text(encoding="utf-8")
    missing: list[MissingImage] = []
    for match in MARKDOWN_IMAGE_RE.finditer(text):
        result = try_missing_link(
            "markdown", post, _clean_markdown_src(match.group(1)), static_dir, content_dir
        )
        if result is not None:
            missing.append(result)
    for match in FRONTMATTER_IMAGE_RE.finditer(text):
        result = try_missing_link("frontmatter", post, match.group(1), static_dir, content_dir)
        if result is not None:
            missing.append(result)
    return missing


def check_directory(content_dir: Path, static_dir: Path) -> list[MissingImage]:
    """Check every markdown file under ``content_dir`` and log each missing image.

    Raises:
        FileNotFoundError: If the content directory does not exist
    """
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")

    missing: list[MissingImage] = []
    for post in sorted(content_dir.rglob("*.md")):
        try:
            found = find_missing_links(post, static_dir, content_dir)
        except UnicodeDecodeError as exc:
            logger.warning("Unreadable file %s: %s", post, exc, extra={"path": str(post)})
            continue
        for item in found:
            logger.warning(
                item.describe(),
                extra={"event": "missing_image", "path": str(item.post), "src": item.src},
            )
        missing.extend(found)
    return missing
