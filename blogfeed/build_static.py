from __future__ import annotations

import argparse
import logging
import shutil
from pathlib import Path
from typing import Callable, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from blogfeed import config
from blogfeed.services import feed_renderer, markdown_loader


logger = logging.getLogger(__name__)


def build_url_factory(base_url: str) -> Callable[[str, Dict[str, str]], str]:
    base = "/" if not base_url else f"/{base_url.strip('/')}/"

    def builder(name: str, params: Dict[str, str]) -> str:
        if name == "homepage":
            path = ""
        elif name == "post_detail":
            path = f"posts/{params['slug']}/"
        elif name == "category_posts":
            path = f"categories/{params['category_slug']}/"
        elif name == "page_detail":
            path = f"{params['page_slug']}/"
        elif name == "static":
            path = f"static/{params.get('path', '').lstrip('/')}"
        else:
            raise ValueError(f"Unknown route name '{name}'")
        return f"{base}{path}"

    return builder


def prepare_environment(url_builder: Callable[[str, Dict[str, str]], str]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(config.TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
    )
    env.globals["url_for"] = lambda name, **params: url_builder(name, params)
    env.globals["site_title"] = config.SITE_TITLE
    env.globals["format_date"] = feed_renderer.format_date
    return env


def ensure_output_dir(output: Path) -> None:
    if output.exists():
        shutil.rmtree(output)
    output.mkdir(parents=True, exist_ok=True)
    if config.STATIC_DIR.exists():
        shutil.copytree(config.STATIC_DIR, output / "static", dirs_exist_ok=True)
    (output / ".nojekyll").write_text("", encoding="utf-8")


def render_template(env: Environment, template_name: str, destination: Path, context: Dict) -> None:
    template = env.get_template(template_name)
    html = template.render(context)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(html, encoding="utf-8")
    logger.debug("Wrote %s", destination)


def build_site(
    output_dir: Path,
    base_url: str = "",
    limit: Optional[int] = None,
    content_dir: Optional[Path] = None,
) -> int:
    """Render the whole site into ``output_dir`` and return the number of pages written."""
    markdown_loader.refresh_cache(content_dir)
    env = prepare_environment(build_url_factory(base_url))
    ensure_output_dir(output_dir)

    posts = markdown_loader.list_posts()
    categories = markdown_loader.list_categories()
    pages = markdown_loader.list_pages()
    navigation = {"nav_pages": pages, "nav_categories": categories}
    feed_limit = config.FEED_LIMIT if limit is None else limit

    render_template(
        env,
        "index.html",
        output_dir / "index.html",
        {"summaries": feed_renderer.render_feed(posts, feed_limit), **navigation},
    )
    written = 1

    for post in posts:
        render_template(
            env,
            "post_detail.html",
            output_dir / "posts" / post.slug / "index.html",
            {"post": post, **navigation},
        )
        written += 1

    for category in categories:
        render_template(
            env,
            "category.html",
            output_dir / "categories" / category.slug / "index.html",
            {
                "category": category,
                "posts": markdown_loader.list_posts_by_category(category.slug),
                **navigation,
            },
        )
        written += 1

    for page in pages:
        render_template(
            env,
            "page.html",
            output_dir / page.slug / "index.html",
            {"page": page, **navigation},
        )
        written += 1

    logger.info("Built %d pages into %s", written, output_dir)
    return written


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the static HTML site.")
    parser.add_argument("--output", type=Path, default=config.DEFAULT_OUTPUT, help="Output directory (default: ./site).")
    parser.add_argument("--content", type=Path, default=None, help="Content directory (default: $BLOGFEED_CONTENT_DIR or ./content).")
    parser.add_argument("--base-url", type=str, default="", help="Sub-path the site is served from, e.g. the repo name.")
    parser.add_argument("--limit", type=_positive_int, default=None, help="Posts shown on the listing page.")
    parser.add_argument("--verbose", action="store_true", help="Log every written file.")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    content_dir = args.content.resolve() if args.content is not None else None
    build_site(args.output.resolve(), args.base_url, args.limit, content_dir)


if __name__ == "__main__":
    main()
