"""Text helpers shared by blog posts and projects: slugs, excerpts, read time."""

import math
import re

from portfolio_api.core.exceptions import BlankFieldError

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")
_HTML_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

DEFAULT_SLUG = "untitled"


def generate_slug(title: str) -> str:
    """'Hello, World!' -> 'hello-world'."""
    slug = _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")
    return slug or DEFAULT_SLUG


def sanitize_string(value: str) -> str:
    """Trim and drop angle brackets. Not an HTML sanitizer; blog content is stored raw."""
    return value.strip().replace("<", "").replace(">", "")


def sanitize_required(value: str, field: str) -> str:
    """sanitize_string for required fields: raises BlankFieldError if nothing is left."""
    cleaned = sanitize_string(value).strip()
    if not cleaned:
        raise BlankFieldError(field)
    return cleaned


def strip_html(content: str) -> str:
    return _WHITESPACE.sub(" ", _HTML_TAG.sub(" ", content)).strip()


def extract_excerpt(content: str, max_length: int = 150) -> str:
    text = strip_html(content)
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    if " " in cut:
        cut = cut[: cut.rfind(" ")]
    return cut.rstrip(" .,;:") + "..."


def calculate_read_time(content: str, words_per_minute: int = 200) -> str:
    words = len(strip_html(content).split())
    minutes = max(1, math.ceil(words / words_per_minute))
    return f"{minutes} min read"
