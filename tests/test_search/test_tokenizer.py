"""Tests for the shared tokenizer."""

from browsing_signals.search.tokenizer import tokenize


def test_lowercases_and_splits_on_punctuation():
    assert tokenize("React Hooks -- A Guide (2024)") == ["react", "hooks", "a", "guide", "2024"]


def test_drops_empty_tokens():
    assert tokenize("  ...  ") == []
    assert tokenize("") == []


def test_non_ascii_letters_split():
    assert tokenize("café-au-lait") == ["caf", "au", "lait"]
