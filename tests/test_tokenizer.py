from canvastext.layout.tokenizer import tokenize
from canvastext.types import WrapMode


def test_word_tokens_carry_whitespace_suffix():
    tokens = tokenize("Hello  big world", WrapMode.WORD)

    assert [t.text for t in tokens] == ["Hello", "big", "world"]
    assert [t.suffix for t in tokens] == ["  ", " ", ""]


def test_word_tokens_break_after_existing_hyphen():
    tokens = tokenize("well-known fact", WrapMode.WORD)
    assert [t.text for t in tokens] == ["well-", "known", "fact"]


def test_leading_whitespace_is_a_blank_token():
    tokens = tokenize("  hi", WrapMode.WORD)

    assert tokens[0].is_blank
    assert tokens[0].suffix == "  "
    assert tokens[1].text == "hi"


def test_char_tokens_keep_grapheme_clusters_whole():
    tokens = tokenize("a👍🏽b", WrapMode.CHAR)
    assert [t.text for t in tokens] == ["a", "👍🏽", "b"]


def test_none_mode_is_one_token():
    assert [t.text for t in tokenize("a b c", WrapMode.NONE)] == ["a b c"]


def test_empty_paragraph_has_no_tokens():
    assert tokenize("", WrapMode.WORD) == []


def test_measured_tokens_include_suffix_width():
    tokens = tokenize("ab cd", WrapMode.WORD, measure=lambda s: 6.0 * len(s))
    assert [t.width for t in tokens] == [18.0, 12.0]
