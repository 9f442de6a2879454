"""Tests for post and page metadata extraction."""

import logging
import os
from datetime import date, datetime
from pathlib import Path

import pytest

from blog_data.metadata import (
    construct_permalink,
    extract_all_page_metadata,
    extract_all_post_metadata,
    extract_page_metadata,
    extract_post_metadata,
    parse_post_filename,
)
from sitefiles import front_matter, set_mtime, write_markdown


def test_post_metadata_from_filename_and_header(tmp_path: Path):
    """Posts take date and slug from the filename, everything else from the header."""
    path = write_markdown(
        tmp_path / "_posts" / "2012-04-01-why-use-fsharp-intro.md",
        front_matter(
            layout="post",
            title='"Introduction to the \'Why use F#\' series"',
            description='"An overview of the benefits of F#"',
            seriesId='"Why use F#?"',
            seriesOrder="1",
            categories='[Intro, "Overview"]',
        ),
    )

    meta = extract_post_metadata(path, tmp_path)

    assert meta is not None
    assert meta.slug == "why-use-fsharp-intro"
    assert meta.date == date(2012, 4, 1)
    assert meta.layout == "post"
    assert meta.title == "Introduction to the 'Why use F#' series"
    assert meta.series_id == "Why use F#?"
    assert meta.series_order == 1
    assert meta.categories == ("Intro", "Overview")
    assert meta.permalink == "/posts/why-use-fsharp-intro/"
    assert meta.is_draft is False


def test_explicit_permalink_wins(tmp_path: Path):
    """A permalink header overrides the derived one."""
    path = write_markdown(
        tmp_path / "_posts" / "2013-05-14-monads.md",
        front_matter(title="Monads", permalink="/custom/monads/"),
    )

    meta = extract_post_metadata(path, tmp_path)

    assert meta.permalink == "/custom/monads/"


@pytest.mark.parametrize("name", ["notes.md", "2012-04-intro.md", "2012-13-01-bad-month.md"])
def test_malformed_post_filename_is_skipped_with_warning(tmp_path: Path, caplog, name: str):
    """Names that are not YYYY-MM-DD-slug are skipped with a warning."""
    path = write_markdown(tmp_path / "_posts" / name, front_matter(title="x"))

    with caplog.at_level(logging.WARNING, logger="blog_data"):
        meta = extract_post_metadata(path, tmp_path)

    assert meta is None
    assert f"Invalid path {path}" in caplog.text


def test_parse_post_filename_keeps_dashes_in_slug():
    """Only the first three dashes separate the date from the slug."""
    assert parse_post_filename(Path("2013-10-23-monoids-without-tears.md")) == (
        date(2013, 10, 23),
        "monoids-without-tears",
    )


def test_page_metadata_uses_modified_time(tmp_path: Path):
    """Undated pages are dated by the file modification time."""
    path = write_markdown(
        tmp_path / "series" / "why-use-fsharp.md",
        front_matter(title="Why use F#", seriesIndexId='"Why use F#?"', seriesIndexOrder="2"),
    )
    set_mtime(path, datetime(2020, 5, 17, 12, 0))

    meta = extract_page_metadata(path, tmp_path)

    assert meta.slug == "why-use-fsharp"
    assert meta.date == date(2020, 5, 17)
    assert meta.series_index_id == "Why use F#?"
    assert meta.series_index_order == 2
    assert meta.permalink == "/series/why-use-fsharp.html"


def test_construct_permalink_for_pages_and_posts(tmp_path: Path):
    """index.md collapses to its folder; other pages become .html."""
    assert construct_permalink("index", tmp_path / "about" / "index.md", tmp_path) == "/about/"
    assert construct_permalink("index", tmp_path / "index.md", tmp_path) == "/"
    assert (
        construct_permalink("handling-state", tmp_path / "series" / "handling-state.md", tmp_path)
        == "/series/handling-state.html"
    )
    assert (
        construct_permalink("intro", tmp_path / "_posts" / "2012-04-01-intro.md", tmp_path)
        == "/posts/intro/"
    )
    assert (
        construct_permalink("reindex", tmp_path / "notes" / "reindex.md", tmp_path)
        == "/notes/reindex.html"
    )
    assert (
        construct_permalink("seriesindex", tmp_path / "seriesindex.md", tmp_path)
        == "/seriesindex.html"
    )


def test_extract_all_posts_skips_drafts_and_bad_names(tmp_path: Path):
    """Drafts are dropped silently, bad names are counted as skipped."""
    posts_dir = tmp_path / "_posts"
    write_markdown(posts_dir / "2012-04-01-a.md", front_matter(title="A"))
    write_markdown(posts_dir / "2012-04-02-b.md", front_matter(title="B", draft="true"))
    write_markdown(posts_dir / "readme.md", front_matter(title="not a post"))

    posts, skipped = extract_all_post_metadata(tmp_path)

    assert [p.slug for p in posts] == ["a"]
    assert skipped == 1


def test_extract_all_posts_requires_posts_directory(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        extract_all_post_metadata(tmp_path)


def test_extract_all_pages_excludes_posts_and_data_dirs(tmp_path: Path):
    """Pages never come from the posts or data folders."""
    write_markdown(tmp_path / "_posts" / "2012-04-01-a.md", front_matter(title="A"))
    write_markdown(tmp_path / "_data" / "notes.md", front_matter(title="data"))
    write_markdown(tmp_path / "about" / "index.md", front_matter(title="About"))
    write_markdown(tmp_path / "series" / "state.md", front_matter(title="State"))
    write_markdown(tmp_path / "drafts" / "wip.md", front_matter(title="WIP", Draft="True"))

    pages, skipped = extract_all_page_metadata(tmp_path, exclude_dirs=("_data",))

    assert sorted(p.permalink for p in pages) == ["/about/", "/series/state.html"]
    assert skipped == 0


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_page_outside_root_keeps_link_location(tmp_path: Path):
    """A page symlinked from outside the root is addressed by where the link lives."""
    shared = write_markdown(tmp_path / "shared" / "README.md", front_matter(title="Shared"))
    root = tmp_path / "site"
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "README.md").symlink_to(shared)

    pages, skipped = extract_all_page_metadata(root)

    assert skipped == 0
    assert [(p.title, p.permalink) for p in pages] == [("Shared", "/docs/README.html")]


def test_non_utf8_page_is_skipped_with_warning(tmp_path: Path, caplog):
    """Files that are not UTF-8 are counted as skipped instead of aborting the scan."""
    write_markdown(tmp_path / "about" / "index.md", front_matter(title="About"))
    bad = tmp_path / "legacy" / "latin1.md"
    bad.parent.mkdir(parents=True)
    bad.write_bytes(b"---\ntitle: caf\xff\xfe\n---\n")

    with caplog.at_level(logging.WARNING, logger="blog_data"):
        pages, skipped = extract_all_page_metadata(tmp_path)

    assert [p.permalink for p in pages] == ["/about/"]
    assert skipped == 1
    assert f"Unreadable file {bad}" in caplog.text
