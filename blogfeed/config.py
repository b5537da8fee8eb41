from __future__ import annotations

import os
from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parent

# Shipped with the package.
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

# Site content and output live in the directory the blog is built from.
CONTENT_DIR = Path(os.getenv("BLOGFEED_CONTENT_DIR", "content")).expanduser().resolve()
DEFAULT_OUTPUT = Path("site")

SITE_TITLE = os.getenv("BLOGFEED_SITE_TITLE", "blogfeed")

# Number of posts shown on the listing page.
FEED_LIMIT = int(os.getenv("BLOGFEED_FEED_LIMIT", "10"))

# Authors place this literally in a post body to end the excerpt.
READ_MORE_MARKER = "<!--read_more-->"

# Page slugs that would shadow a generated site directory.
RESERVED_PAGE_SLUGS = frozenset({"posts", "categories", "static"})
