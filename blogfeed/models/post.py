from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(slots=True, frozen=True)
class Post:
    title: str
    url: str
    date: date
    content: str
    slug: str
    category: Optional[str] = None
    category_slug: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Page:
    slug: str
    title: str
    url: str
    content: str


@dataclass(slots=True, frozen=True)
class RenderedSummary:
    """One entry of the post listing page."""

    title: str
    url: str
    formatted_date: str
    excerpt: str
    has_more: bool


@dataclass(slots=True)
class CategorySummary:
    slug: str
    name: str
    post_count: int = 0
