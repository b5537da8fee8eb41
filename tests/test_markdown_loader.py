from datetime import date

from blogfeed.services import feed_renderer, markdown_loader


def test_sample_posts_are_sorted_most_recent_first():
    posts = markdown_loader.list_posts()
    assert [post.slug for post in posts] == [
        "reading-old-code",
        "notes-on-code-review",
        "why-i-write-tests-first",
    ]


def test_sample_categories_are_loaded_with_counts():
    categories = {category.slug: category for category in markdown_loader.list_categories()}
    assert set(categories) == {"process", "testing"}
    assert categories["process"].post_count == 2
    assert categories["testing"].name == "Testing"


def test_dated_file_name_supplies_date_and_slug(tmp_path, write_markdown):
    write_markdown("posts/2015-04-02-first-post.md", "---\ntitle: First\n---\nBody text.\n")
    markdown_loader.refresh_cache(tmp_path)

    post = markdown_loader.get_post("first-post")
    assert post is not None
    assert post.title == "First"
    assert post.date == date(2015, 4, 2)
    assert post.url == "posts/first-post/"
    assert "<p>Body text.</p>" in post.content


def test_front_matter_overrides_file_name(tmp_path, write_markdown):
    write_markdown(
        "posts/2015-04-02-first-post.md",
        "---\ntitle: Moved\nslug: Moved Post\ndate: 2016-01-09\nlayout: essay\n---\nBody.\n",
    )
    markdown_loader.refresh_cache(tmp_path)

    post = markdown_loader.get_post("moved-post")
    assert post is not None
    assert post.date == date(2016, 1, 9)
    assert not hasattr(post, "layout")


def test_title_falls_back_to_file_name(tmp_path, write_markdown):
    write_markdown("posts/2015-04-02-on-naming-things.md", "Body.\n")
    markdown_loader.refresh_cache(tmp_path)

    assert markdown_loader.get_post("on-naming-things").title == "On Naming Things"


def test_drafts_and_empty_posts_are_skipped(tmp_path, write_markdown):
    write_markdown("posts/2015-01-01-draft.md", "---\ntitle: Draft\ndraft: true\n---\nBody.\n")
    write_markdown("posts/2015-01-02-hidden.md", "---\ntitle: Hidden\npublished: false\n---\nBody.\n")
    write_markdown("posts/2015-01-03-empty.md", "---\ntitle: Empty\n---\n\n")
    write_markdown("posts/2015-01-04-kept.md", "---\ntitle: Kept\n---\nBody.\n")
    markdown_loader.refresh_cache(tmp_path)

    assert [post.slug for post in markdown_loader.list_posts()] == ["kept"]


def test_broken_front_matter_does_not_stop_loading(tmp_path, write_markdown):
    write_markdown("posts/2015-01-01-broken.md", "---\ntitle: [unclosed\n---\nBody.\n")
    write_markdown("posts/2015-01-02-fine.md", "---\ntitle: Fine\n---\nBody.\n")
    markdown_loader.refresh_cache(tmp_path)

    assert [post.slug for post in markdown_loader.list_posts()] == ["fine"]


def test_duplicate_urls_keep_most_recent_post(tmp_path, write_markdown):
    write_markdown("posts/2015-01-01-same.md", "---\ntitle: Older\n---\nBody.\n")
    write_markdown("posts/2016-01-01-same.md", "---\ntitle: Newer\n---\nBody.\n")
    markdown_loader.refresh_cache(tmp_path)

    posts = markdown_loader.list_posts()
    assert len(posts) == 1
    assert posts[0].title == "Newer"


def test_read_more_marker_survives_markdown_rendering(tmp_path, write_markdown):
    write_markdown(
        "posts/2015-04-20-marked.md",
        "---\ntitle: Marked\n---\nIntro paragraph.\n\n<!--read_more-->\n\nThe rest.\n",
    )
    markdown_loader.refresh_cache(tmp_path)

    summary = feed_renderer.summarize(markdown_loader.get_post("marked"))
    assert summary.has_more is True
    assert "Intro paragraph." in summary.excerpt
    assert "The rest." not in summary.excerpt
    assert summary.formatted_date == "2015 April 20"


def test_categories_group_posts(tmp_path, write_markdown):
    write_markdown("posts/2015-01-01-a.md", "---\ntitle: A\ncategory: Deep Dives\n---\nBody.\n")
    write_markdown("posts/2015-02-01-b.md", "---\ntitle: B\ncategories: [Deep Dives, Other]\n---\nBody.\n")
    write_markdown("posts/2015-03-01-c.md", "---\ntitle: C\ncategories: tools misc\n---\nBody.\n")
    markdown_loader.refresh_cache(tmp_path)

    assert [category.slug for category in markdown_loader.list_categories()] == ["deep-dives", "tools"]
    assert markdown_loader.get_category("deep-dives").post_count == 2
    assert [post.slug for post in markdown_loader.list_posts_by_category("deep-dives")] == ["b", "a"]
    assert markdown_loader.list_posts_by_category("missing") == []


def test_pages_are_loaded_separately(tmp_path, write_markdown):
    write_markdown("pages/about.md", "---\ntitle: About Me\n---\nHello.\n")
    write_markdown("posts/2015-01-01-a.md", "Body.\n")
    markdown_loader.refresh_cache(tmp_path)

    page = markdown_loader.get_page("about")
    assert page is not None
    assert page.title == "About Me"
    assert page.url == "about/"
    assert [item.slug for item in markdown_loader.list_pages()] == ["about"]
    assert markdown_loader.get_post("about") is None


def test_missing_content_dir_loads_nothing_and_is_not_created(tmp_path):
    content_dir = tmp_path / "nothing-here"
    markdown_loader.refresh_cache(content_dir)

    assert not content_dir.exists()
    assert markdown_loader.list_posts() == []
    assert markdown_loader.list_pages() == []
    assert markdown_loader.list_categories() == []


def test_pages_with_reserved_slugs_are_skipped(tmp_path, write_markdown):
    write_markdown("pages/posts.md", "---\ntitle: Posts\n---\nShadow.\n")
    write_markdown("pages/other.md", "---\ntitle: Other\nslug: categories\n---\nShadow.\n")
    write_markdown("pages/static.md", "---\ntitle: Static\n---\nShadow.\n")
    write_markdown("pages/about.md", "---\ntitle: About\n---\nHello.\n")
    markdown_loader.refresh_cache(tmp_path)

    assert [page.slug for page in markdown_loader.list_pages()] == ["about"]
    assert markdown_loader.get_page("posts") is None
    assert markdown_loader.get_page("categories") is None
