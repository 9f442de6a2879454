"""Year/month archive grouping."""

from __future__ import annotations

import calendar
from typing import Iterable

from .types import ArchiveMonth, PostMetadata


def group_by_year_month(posts: Iterable[PostMetadata]) -> list[ArchiveMonth]:
    """Group posts by publication month, newest month and newest post first.

    Posts published on the same day keep their input order.
    """
    buckets: dict[tuple[int, int], list[PostMetadata]] = {}
    for post in posts:
        buckets.setdefault((post.date.year, post.date.month), []).append(post)

    months = []
    for (year, month) in sorted(buckets, reverse=True):
        members = sorted(buckets[(year, month)], key=lambda p: p.date, reverse=True)
        months.append(
            ArchiveMonth(
                year=year,
                month=month,
                month_name=calendar.month_name[month],
                posts=members,
            )
        )
    return months
