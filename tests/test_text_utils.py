"""
Slug, sanitizing, excerpt and read-time helpers.
"""

import pytest

from portfolio_api.core.exceptions import BlankFieldError
from portfolio_api.utils.text import (
    calculate_read_time,
    extract_excerpt,
    generate_slug,
    sanitize_required,
    sanitize_string,
    strip_html,
)


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Hello World", "hello-world"),
        ("Hello, World!", "hello-world"),
        ("  --Leading and trailing--  ", "leading-and-trailing"),
        ("FastAPI & SQLAlchemy 2.0", "fastapi-sqlalchemy-2-0"),
        ("???", "untitled"),
        ("", "untitled"),
    ],
)
def test_generate_slug(title, expected):
    assert generate_slug(title) == expected


def test_sanitize_string_trims_and_drops_angle_brackets():
    assert sanitize_string("  <script>alert(1)</script>  ") == "scriptalert(1)/script"


@pytest.mark.parametrize("value", ["<>", " < > ", "   "])
def test_sanitize_required_rejects_markup_only_text(value):
    with pytest.raises(BlankFieldError) as exc_info:
        sanitize_required(value, "title")
    assert exc_info.value.message == "Title must not be empty"
    assert exc_info.value.status_code == 400


def test_sanitize_required_returns_cleaned_text():
    assert sanitize_required(" <b>Bold</b> move ", "title") == "bBold/b move"


def test_strip_html_collapses_whitespace():
    assert strip_html("<p>Hello</p>\n\n<em>world</em>") == "Hello world"


def test_short_content_excerpt_is_unchanged():
    assert extract_excerpt("<p>Short post.</p>") == "Short post."


def test_long_content_excerpt_cuts_on_word_boundary():
    content = "alpha " * 40
    excerpt = extract_excerpt(content, max_length=50)
    assert excerpt.endswith("...")
    body = excerpt[:-3]
    assert len(body) <= 50
    assert body.split() == ["alpha"] * len(body.split())


@pytest.mark.parametrize(
    "words,expected",
    [(0, "1 min read"), (10, "1 min read"), (200, "1 min read"), (201, "2 min read"), (1000, "5 min read")],
)
def test_calculate_read_time(words, expected):
    assert calculate_read_time(" ".join(["w"] * words)) == expected


def test_read_time_ignores_markup():
    assert calculate_read_time("<div>" * 500 + "one two") == "1 min read"
