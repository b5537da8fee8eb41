from pathlib import Path

import pytest

from blogfeed.services import markdown_loader


SAMPLE_CONTENT = Path(__file__).resolve().parent.parent / "content"


@pytest.fixture(autouse=True)
def sample_content():
    """Load the repository's sample posts before each test."""
    markdown_loader.refresh_cache(SAMPLE_CONTENT)
    yield SAMPLE_CONTENT
    markdown_loader.refresh_cache(SAMPLE_CONTENT)


@pytest.fixture
def write_markdown(tmp_path):
    def write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return write
