# File: tests/conftest.py
import pytest

from js_scout.config import ScoutConfig
from js_scout.crawler.models import PageData


@pytest.fixture()
def basic_config() -> ScoutConfig:
    """
    Return a small valid ScoutConfig for crawler tests.
    """
    return ScoutConfig(workers=1, timeout=2.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def next_page() -> PageData:
    """
    Provide a Next.js-like page with external, inline and data-attribute scripts.
    """
    html = (
        "<html><head>"
        '<script src="/_next/static/chunks/webpack-abc.js"></script>'
        '<script src="//cdn.example.org/lib.js"></script>'
        "<script>window.x = load('/static/inline.js') + 'rel/ignored.js';</script>"
        "</head><body>"
        '<div data-script-src="widgets/w.js"></div>'
        "</body></html>"
    )
    return PageData(url="https://ex.com/docs/page", content=html.encode("utf-8"))
