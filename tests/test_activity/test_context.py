"""Tests for page context classification."""

from browsing_signals.activity.context import classify_page_context, is_same_context
from browsing_signals.activity.models import PageEvent


def _page(url, title=""):
    return PageEvent(url=url, title=title, domain="", timestamp=0)


def test_development_by_domain():
    assert classify_page_context(_page("https://github.com/facebook/react")) == "development"


def test_development_by_path_and_tld():
    assert classify_page_context(_page("https://example.com/docs/intro")) == "development"
    assert classify_page_context(_page("https://web.dev/articles")) == "development"


def test_development_wins_over_learning():
    page = _page("https://stackoverflow.com/questions/1", "How to learn Python tutorial")
    assert classify_page_context(page) == "development"


def test_youtube_tutorial_is_learning():
    page = _page("https://www.youtube.com/watch?v=abc", "React Tutorial for Beginners")
    assert classify_page_context(page) == "learning"


def test_youtube_without_tutorial_is_entertainment():
    page = _page("https://www.youtube.com/watch?v=abc", "Funny cats compilation")
    assert classify_page_context(page) == "entertainment"


def test_shopping():
    assert classify_page_context(_page("https://example.com/checkout")) == "shopping"
    assert classify_page_context(_page("https://amazon.com/gp/item")) == "shopping"


def test_research():
    assert classify_page_context(_page("https://en.wikipedia.org/wiki/TF-IDF")) == "research"
    assert classify_page_context(_page("https://arxiv.org/abs/1706.03762")) == "research"


def test_social():
    assert classify_page_context(_page("https://old.reddit.com/r/python")) == "social"
    assert classify_page_context(_page("https://acme.slack.com/archives/C1")) == "social"


def test_slack_app_directory_is_not_social():
    assert classify_page_context(_page("https://acme.slack.com/apps/A1")) != "social"


def test_productivity():
    assert classify_page_context(_page("https://www.notion.so/workspace")) == "productivity"
    assert classify_page_context(_page("https://docs.google.com/document/d/1")) == "productivity"


def test_news():
    assert classify_page_context(_page("https://www.nytimes.com/2024/01/01/world")) == "news"
    assert classify_page_context(_page("https://example.com/", "Breaking: markets")) == "news"


def test_general_default():
    assert classify_page_context(_page("https://example.com/", "Hello")) == "general"


def test_unparseable_url_is_general():
    assert classify_page_context(_page("not a url", "Python tutorial")) == "general"


def test_is_same_context():
    a = _page("https://github.com/a/b")
    b = _page("https://gitlab.com/c/d")
    c = _page("https://netflix.com/browse")
    assert is_same_context(a, b)
    assert not is_same_context(a, c)
