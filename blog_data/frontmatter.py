"""
Line-based reader for markdown front matter.

Front matter is the block at the top of a markdown file delimited by
lines starting with ``---``:

    ---
    title: "Why use F#?"
    seriesId: "Why use F#?"
    seriesOrder: 1
    categories: [Intro, "Overview"]
    ---

Only flat ``key: value`` lines are understood. Keys are matched case
insensitively; values lose one pair of surrounding double quotes.
Nested YAML structures are not interpreted, which keeps the reader
tolerant of headers a strict YAML parser would reject (unquoted colons
in titles, stray markup).
"""

from __future__ import annotations

import logging
import re
from itertools import chain
from pathlib import Path
from typing import Iterable

DELIMITER = "---"

logger = logging.getLogger("blog_data.frontmatter")

_LIST_SPLIT_RE = re.compile(r"\s*,\s*")


def remove_delimiters(text: str, left: str, right: str) -> str:
    """Strip one leading ``left`` and one trailing ``right`` if present."""
    if text.startswith(left):
        text = text[len(left):]
    if text.endswith(right):
        text = text[: len(text) - len(right)]
    return text


def remove_quotes(text: str) -> str:
    return remove_delimiters(text.strip(), '"', '"').strip()


def remove_square_brackets(text: str) -> str:
    return remove_delimiters(text.strip(), "[", "]").strip()


def split_yaml_line(line: str) -> tuple[str, str] | None:
    """Split ``key: value`` on the first colon.

    Returns:
        The trimmed key and unquoted value, or None when the line has no colon.
    """
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    return key.strip(), remove_quotes(value)


def str_to_int(text: str, default: int = 0) -> int:
    try:
        return int(text.strip())
    except (AttributeError, ValueError):
        return default


def str_to_bool(text: str, default: bool = False) -> bool:
    value = (text or "").strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return default


def yaml_to_list(text: str) -> list[str]:
    """Parse an inline YAML list such as ``[a, "b"]`` into strings."""
    inner = remove_square_brackets(text or "")
    if not inner:
        return []
    items = [remove_quotes(item) for item in _LIST_SPLIT_RE.split(inner)]
    return [item for item in items if item]


def parse_header_lines(lines: Iterable[str], source: str | None = None) -> dict[str, str]:
    """Collect ``key: value`` pairs between the opening and closing delimiters.

    An opening delimiter line is skipped and reading stops at the next line
    starting with ``---``. Keys are lower-cased; a repeated key overrides
    the earlier value.
    """
    header: dict[str, str] = {}
    first = True
    for raw in lines:
        line = raw.rstrip("\r\n")
        if first:
            first = False
            if line.startswith(DELIMITER):
                continue
        if line.startswith(DELIMITER):
            break
        pair = split_yaml_line(line)
        if pair is None:
            continue
        key, value = pair
        key = key.lower()
        if key in header:
            logger.warning(
                "Duplicate front matter key %s in %s", key, source or "<text>",
                extra={"event": "duplicate_key", "key": key, "path": source},
            )
        header[key] = value
    return header


def read_header(path: Path) -> dict[str, str]:
    """Read the front matter of a markdown file.

    Files that do not open with a ``---`` line have no front matter and
    yield an empty dictionary.

    Raises:
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(path, "r", encoding="utf-8-sig") as f:
        first = f.readline()
        if not first.startswith(DELIMITER):
            return {}
        return parse_header_lines(chain([first], f), source=str(path))


def lookup(header: dict[str, str], key: str) -> str:
    return header.get(key.lower(), "")
