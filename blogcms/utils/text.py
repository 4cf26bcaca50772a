"""Text helpers for slugs, excerpts and reading time."""

import math
import re
import unicodedata

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 160

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_MARKDOWN_RULES = (
    (re.compile(r"```[\s\S]*?```"), ""),  # code blocks
    (re.compile(r"#+\s+(.*)"), r"\1"),  # headings
    (re.compile(r"!\[(.*?)\]\((.*?)\)"), ""),  # images
    (re.compile(r"\[(.*?)\]\((.*?)\)"), r"\1"),  # links -> text
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),  # bold
    (re.compile(r"\*(.*?)\*"), r"\1"),  # italic
    (re.compile(r"`(.*?)`"), r"\1"),  # inline code
    (re.compile(r"<[^>]+>"), ""),  # html tags
)


def slugify(value: str) -> str:
    """Lowercase ASCII slug: 'Hello, World!' -> 'hello-world'."""
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^\w\s-]", "", value.lower())
    value = re.sub(r"[\s_-]+", "-", value)
    return value.strip("-")


def is_valid_slug(value: str) -> bool:
    return bool(SLUG_PATTERN.match(value))


def create_excerpt(content: str, max_length: int = EXCERPT_LENGTH) -> str:
    """Plain-text excerpt of markdown/HTML content, cut at ``max_length``."""
    text = content
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    text = re.sub(r"\s+", " ", text).strip()

    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def calculate_read_time(content: str) -> int:
    """Minutes to read at WORDS_PER_MINUTE, never less than one."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))
