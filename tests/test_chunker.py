"""Tests for whitespace-preferring message chunking."""

import re

import pytest

from pingwire.delivery.chunker import split_into_chunks


def _squash(text: str) -> str:
    return re.sub(r"\s+", "", text)


def test_empty_and_blank_text_yield_no_chunks() -> None:
    assert split_into_chunks("", 10) == []
    assert split_into_chunks("  \n\t ", 10) == []


def test_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        split_into_chunks("hello", 0)


def test_short_text_is_a_single_trimmed_chunk() -> None:
    assert split_into_chunks("  hello world \n", 100) == ["hello world"]


def test_splits_on_word_boundaries() -> None:
    assert split_into_chunks("hello world", 5) == ["hello", "world"]
    assert split_into_chunks("one two three four", 9) == ["one two", "three", "four"]


def test_keeps_inner_whitespace_and_newlines() -> None:
    text = "line one\nline two\n\nline three"
    assert split_into_chunks(text, 100) == [text]


def test_long_word_is_hard_split_into_exact_slices() -> None:
    assert split_into_chunks("abcdefghij", 4) == ["abcd", "efgh", "ij"]


def test_long_word_between_short_words() -> None:
    assert split_into_chunks("ab abcdefghij cd", 4) == ["ab", "abcd", "efgh", "ij", "cd"]


def test_oversized_whitespace_run_produces_no_blank_chunks() -> None:
    assert split_into_chunks("a" + " " * 10 + "b", 3) == ["a", "b"]


@pytest.mark.parametrize("size", [1, 3, 7, 16, 64])
def test_chunks_are_bounded_ordered_and_lossless(size: int) -> None:
    text = (
        "The quick brown fox jumps over the lazy dog.\n"
        "Pneumonoultramicroscopicsilicovolcanoconiosis is long.\n\n"
        "  tabs\tand   spaces   "
    )
    chunks = split_into_chunks(text, size)

    assert chunks
    assert all(0 < len(c) <= size for c in chunks)
    assert all(c == c.strip() for c in chunks)
    assert "".join(_squash(c) for c in chunks) == _squash(text)


def test_greedy_packing_fills_chunks_before_moving_on() -> None:
    words = [f"word{i:05d}" for i in range(12)]
    chunks = split_into_chunks(" ".join(words), 40)
    assert chunks == [" ".join(words[0:4]), " ".join(words[4:8]), " ".join(words[8:12])]
