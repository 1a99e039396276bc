"""Tests for the markup matcher."""

import pytest

from testarossa.errors import MarkupError
from testarossa.markup import compile_pattern, compile_selector, match, parse, text_matches

BANNER = b'<html><body><div class="banner" id="id123">Cool <b>Banner</b>!</div></body></html>'


@pytest.mark.parametrize(
    "html, selector, pattern, want",
    [
        (b"<html><div>test</div></html>", "DIV", "", True),
        (b"<html><span>test</span></html>", "DIV", "", False),
        (b'<html><div class="main">test</div></html>', "DIV.main", "", True),
        (b'<html><div id="header">test</div></html>', "DIV#header", "", True),
        (b"<html><div>hello world</div></html>", "DIV", "world", True),
        (b"<html><div>hello world</div></html>", "DIV", "goodbye", False),
        (b"<html><div>test123</div></html>", "DIV", r"\d+", True),
        (b"<html><div>test</div></html>", "DIV", r"\d+", False),
        (b"<html><div><b>bold</b></div></html>", "DIV", "bold", True),
        ("<div>str input</div>", "div", "input", True),
        (b"<html><</html>", "DIV", "", False),
    ],
)
def test_match(html, selector, pattern, want):
    assert match(html, selector, pattern) is want


def test_match_nested_and_selected():
    assert match(BANNER, "B", "")
    assert match(BANNER, "DIV.banner", "")
    assert match(BANNER, "DIV#id123", "")
    assert match(BANNER, "B", "Banner")
    assert match(BANNER, "DIV", "Banner")
    assert not match(BANNER, "DIV", "Title")


def test_comments_are_not_text():
    assert not match(b"<div><!-- secret --></div>", "div", "secret")


def test_text_matches_searches_descendants_in_order():
    document = parse(BANNER)
    div = compile_selector("div").select(document)[0]
    assert text_matches(div, compile_pattern("^Cool"))
    assert text_matches(div, compile_pattern("^!$"))
    assert not text_matches(div, compile_pattern("Cool Banner"))


@pytest.mark.parametrize("selector", ["DIV.", "DIV.#id123"])
def test_invalid_selector(selector):
    with pytest.raises(MarkupError, match="Invalid selector"):
        match(BANNER, selector, "")


@pytest.mark.parametrize("pattern", ["[Banner", "[unclosed"])
def test_invalid_pattern(pattern):
    with pytest.raises(MarkupError, match="Invalid pattern"):
        match(BANNER, "DIV", pattern)


def test_empty_pattern_compiles_to_none():
    assert compile_pattern("") is None
