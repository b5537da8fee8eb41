from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

from blogfeed.config import READ_MORE_MARKER
from blogfeed.models.post import Post, RenderedSummary


# Fixed English names; strftime("%B") follows the process locale.
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def render_feed(posts: Sequence[Post], limit: int) -> List[RenderedSummary]:
    """Summarize the first ``limit`` posts for the listing page.

    Posts are expected most-recent-first and keep their order. Anything past
    ``limit`` is dropped; a negative limit behaves like zero.
    """
    if limit <= 0:
        return []
    return [summarize(post) for post in posts[:limit]]


def summarize(post: Post, marker: str = READ_MORE_MARKER) -> RenderedSummary:
    excerpt, has_more = split_excerpt(post.content, marker)
    return RenderedSummary(
        title=post.title,
        url=post.url,
        formatted_date=format_date(post.date),
        excerpt=excerpt,
        has_more=has_more,
    )


def split_excerpt(content: Optional[str], marker: str = READ_MORE_MARKER) -> Tuple[str, bool]:
    """Return the text before the first marker and whether the marker was found."""
    text = content or ""
    excerpt, found, _ = text.partition(marker)
    return excerpt, bool(found)


def format_date(value: date) -> str:
    # Day is not zero-padded: "2015 April 2".
    return f"{value.year} {_MONTH_NAMES[value.month - 1]} {value.day}"
