"""
Tests for slug, excerpt and reading-time helpers.
Run: pytest test_text_utils.py
"""

import pytest

from blogcms.utils.text import calculate_read_time, create_excerpt, is_valid_slug, slugify


@pytest.mark.parametrize("value, expected", [
    ("Hello, World!", "hello-world"),
    ("  Spaces   and_underscores ", "spaces-and-underscores"),
    ("Café au lait", "cafe-au-lait"),
    ("---Already-slugged---", "already-slugged"),
])
def test_slugify(value, expected):
    assert slugify(value) == expected
    assert is_valid_slug(expected)


def test_invalid_slugs():
    assert not is_valid_slug("Upper")
    assert not is_valid_slug("double--dash")
    assert not is_valid_slug("-leading")


def test_excerpt_strips_markdown():
    content = "# Title\n\nSome **bold** and *italic* text with a [link](http://x.io).\n\n```\ncode\n```"
    assert create_excerpt(content) == "Title Some bold and italic text with a link."


def test_excerpt_is_truncated():
    excerpt = create_excerpt("word " * 100)
    assert excerpt.endswith("...")
    assert len(excerpt) <= 163


def test_read_time():
    assert calculate_read_time("") == 1
    assert calculate_read_time("word " * 200) == 1
    assert calculate_read_time("word " * 201) == 2
