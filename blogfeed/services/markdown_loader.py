from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import frontmatter
from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from blogfeed import config
from blogfeed.models.post import CategorySummary, Page, Post


logger = logging.getLogger(__name__)

# "html" keeps raw HTML, including the read-more comment, in the rendered body.
_markdown = MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")
_markdown.use(tasklists_plugin)

_dated_name_pattern = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")
_date_formats = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S",
)

_ordered_posts: List[Post] = []
_posts_index: Dict[str, Post] = {}
_pages_index: Dict[str, Page] = {}
_categories_index: Dict[str, CategorySummary] = {}
_posts_by_category: Dict[str, List[Post]] = {}


def refresh_cache(content_dir: Optional[Path] = None) -> None:
    """Load all markdown posts and pages into memory."""
    global _ordered_posts, _posts_index, _pages_index, _categories_index, _posts_by_category

    root = Path(content_dir) if content_dir is not None else config.CONTENT_DIR
    if not root.is_dir():
        logger.warning("Content directory %s does not exist", root)
        _clear_memory()
        return

    posts: List[Post] = []
    for path in _markdown_files(root / "posts"):
        try:
            post = _load_post(path)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Failed to load post %s: %s", path, exc)
            continue
        if post is not None:
            posts.append(post)

    pages: Dict[str, Page] = {}
    for path in _markdown_files(root / "pages"):
        try:
            page = _load_page(path)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Failed to load page %s: %s", path, exc)
            continue
        if page is None:
            continue
        if page.slug in config.RESERVED_PAGE_SLUGS:
            logger.warning("Skipping page %s: slug '%s' is reserved", path, page.slug)
            continue
        if page.slug in pages:
            logger.warning("Skipping page %s: slug '%s' already used", path, page.slug)
            continue
        pages[page.slug] = page

    posts.sort(key=lambda item: (item.date, item.slug), reverse=True)

    unique_posts: List[Post] = []
    seen_urls = set()
    for post in posts:
        if post.url in seen_urls:
            logger.warning("Skipping duplicate post url %s (%s)", post.url, post.title)
            continue
        seen_urls.add(post.url)
        unique_posts.append(post)

    categories: Dict[str, CategorySummary] = {}
    grouped: Dict[str, List[Post]] = {}
    for post in unique_posts:
        if not post.category_slug:
            continue
        summary = categories.get(post.category_slug)
        if summary is None:
            summary = CategorySummary(slug=post.category_slug, name=post.category or post.category_slug)
            categories[post.category_slug] = summary
        summary.post_count += 1
        grouped.setdefault(post.category_slug, []).append(post)

    _ordered_posts = unique_posts
    _posts_index = {post.slug: post for post in unique_posts}
    _pages_index = pages
    _categories_index = categories
    _posts_by_category = grouped
    logger.info("Loaded %d posts and %d pages from %s", len(unique_posts), len(pages), root)


def list_posts() -> List[Post]:
    """Return posts most-recent-first."""
    return list(_ordered_posts)


def get_post(slug: str) -> Optional[Post]:
    return _posts_index.get(slug)


def list_pages() -> List[Page]:
    return sorted(_pages_index.values(), key=lambda page: page.title.lower())


def get_page(slug: str) -> Optional[Page]:
    return _pages_index.get(slug)


def list_categories() -> List[CategorySummary]:
    categories = list(_categories_index.values())
    categories.sort(key=lambda item: item.name.lower())
    return categories


def get_category(category_slug: str) -> Optional[CategorySummary]:
    return _categories_index.get(category_slug)


def list_posts_by_category(category_slug: str) -> List[Post]:
    return list(_posts_by_category.get(category_slug, []))


def _clear_memory() -> None:
    global _ordered_posts, _posts_index, _pages_index, _categories_index, _posts_by_category
    _ordered_posts = []
    _posts_index = {}
    _pages_index = {}
    _categories_index = {}
    _posts_by_category = {}


def _load_post(path: Path) -> Optional[Post]:
    parsed = frontmatter.load(path)
    meta = parsed.metadata or {}
    content = parsed.content.strip()

    if not content:
        logger.warning("Skipping empty post: %s", path)
        return None

    if _is_draft(meta):
        logger.debug("Skipping draft: %s", path)
        return None

    name_date, name_slug = _split_dated_name(path.stem)
    slug = slugify(str(meta.get("slug") or name_slug))
    title = str(meta.get("title") or _title_from_slug(name_slug))
    post_date = _parse_date(meta.get("date")) or name_date or _file_modified_at(path)

    category = _extract_category(meta)

    return Post(
        title=title,
        url=f"posts/{slug}/",
        date=post_date,
        content=_markdown.render(content),
        slug=slug,
        category=category,
        category_slug=slugify(category) if category else None,
    )


def _load_page(path: Path) -> Optional[Page]:
    parsed = frontmatter.load(path)
    meta = parsed.metadata or {}
    content = parsed.content.strip()

    if not content:
        logger.warning("Skipping empty page: %s", path)
        return None

    if _is_draft(meta):
        return None

    slug = slugify(str(meta.get("slug") or path.stem))
    return Page(
        slug=slug,
        title=str(meta.get("title") or _title_from_slug(path.stem)),
        url=f"{slug}/",
        content=_markdown.render(content),
    )


def _markdown_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted(directory.rglob("*.md"))


def _is_draft(meta: dict) -> bool:
    return bool(meta.get("draft")) or meta.get("published") is False


def _split_dated_name(stem: str) -> Tuple[Optional[date], str]:
    """Split a ``YYYY-MM-DD-slug`` file name into its date and slug."""
    match = _dated_name_pattern.match(stem)
    if match is None:
        return None, stem
    year, month, day, rest = match.groups()
    try:
        return date(int(year), int(month), int(day)), rest
    except ValueError:
        logger.warning("Invalid date in file name '%s'", stem)
        return None, stem


def _title_from_slug(slug: str) -> str:
    return slug.replace("-", " ").replace("_", " ").title()


def _parse_date(value) -> Optional[date]:
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        for fmt in _date_formats:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            logger.warning("Unrecognized date format '%s'", value)
            return None

    return None


def _file_modified_at(path: Path) -> date:
    return datetime.fromtimestamp(path.stat().st_mtime).date()


def _extract_category(meta: dict) -> Optional[str]:
    value = meta.get("category")
    if isinstance(value, str) and value.strip():
        return value.strip()
    value = meta.get("categories")
    if isinstance(value, str):
        # Jekyll allows a space separated list.
        value = value.split()
    if isinstance(value, list):
        for item in value:
            if isinstance(item, str) and item.strip():
                return item.strip()
    return None


_slug_pattern = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    normalized = value.strip().lower()
    normalized = _slug_pattern.sub("-", normalized)
    normalized = normalized.strip("-")
    return normalized or "post"


try:
    refresh_cache()
except Exception as exc:  # pylint: disable=broad-except
    logger.warning("Initial markdown load failed: %s", exc)
