from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from blogfeed import config
from blogfeed.services import feed_renderer, markdown_loader


router = APIRouter()
templates = Jinja2Templates(directory=str(config.TEMPLATES_DIR))
templates.env.globals["site_title"] = config.SITE_TITLE
templates.env.globals["format_date"] = feed_renderer.format_date


def _navigation() -> dict:
    return {
        "nav_pages": markdown_loader.list_pages(),
        "nav_categories": markdown_loader.list_categories(),
    }


@router.get("/", response_class=HTMLResponse, name="homepage")
def homepage(request: Request) -> HTMLResponse:
    summaries = feed_renderer.render_feed(markdown_loader.list_posts(), config.FEED_LIMIT)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"summaries": summaries, **_navigation()},
    )


@router.get("/posts/{slug}/", response_class=HTMLResponse, name="post_detail")
def post_detail(request: Request, slug: str) -> HTMLResponse:
    post = markdown_loader.get_post(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return templates.TemplateResponse(
        request,
        "post_detail.html",
        {"post": post, **_navigation()},
    )


@router.get("/categories/{category_slug}/", response_class=HTMLResponse, name="category_posts")
def category_posts(request: Request, category_slug: str) -> HTMLResponse:
    category = markdown_loader.get_category(category_slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return templates.TemplateResponse(
        request,
        "category.html",
        {
            "category": category,
            "posts": markdown_loader.list_posts_by_category(category_slug),
            **_navigation(),
        },
    )


@router.get("/{page_slug}/", response_class=HTMLResponse, name="page_detail")
def page_detail(request: Request, page_slug: str) -> HTMLResponse:
    page = markdown_loader.get_page(page_slug)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return templates.TemplateResponse(
        request,
        "page.html",
        {"page": page, **_navigation()},
    )
