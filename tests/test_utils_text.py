"""Tests for text utility functions."""

from __future__ import annotations

import pytest

from ferret.utils.text import (
    MIN_CHUNK_WORDS,
    Tokenizer,
    chunk_words,
    is_token,
    iter_fragments,
    split_words,
    tokenize_words,
)


class TestSplitWords:
    """Test whitespace splitting."""

    def test_mixed_whitespace(self) -> None:
        """Should split on any whitespace run."""
        assert split_words("a  b\tc\nd\r\ne") == ["a", "b", "c", "d", "e"]

    def test_empty(self) -> None:
        """Should return no words for blank text."""
        assert split_words("   \n ") == []


class TestChunkWords:
    """Test chunk_words partitioning."""

    def test_small_input_single_chunk(self) -> None:
        """Inputs below the floor stay in one chunk."""
        words = ["w"] * 50

        chunks = chunk_words(words, workers=8)

        assert chunks == [words]

    def test_chunks_per_worker(self) -> None:
        """Large inputs are split into one chunk per worker."""
        words = [str(i) for i in range(1000)]

        chunks = chunk_words(words, workers=4)

        assert len(chunks) == 4
        assert all(len(chunk) == 250 for chunk in chunks)

    def test_floor_limits_fragmentation(self) -> None:
        """Chunks never go below the floor size."""
        words = ["w"] * 250

        chunks = chunk_words(words, workers=16)

        assert [len(chunk) for chunk in chunks] == [MIN_CHUNK_WORDS, MIN_CHUNK_WORDS, 50]

    def test_contiguous_and_complete(self) -> None:
        """Concatenated chunks give back the input in order."""
        words = [str(i) for i in range(777)]

        chunks = chunk_words(words, workers=3, min_chunk=10)

        assert [w for chunk in chunks for w in chunk] == words

    def test_empty(self) -> None:
        """Should handle empty input."""
        assert chunk_words([], workers=4) == []


class TestFragments:
    """Test separator splitting and symbol trimming."""

    def test_separators(self) -> None:
        """Should split on brackets, punctuation and quotes."""
        fragments = list(iter_fragments('foo(bar,"baz")[qux];a.b'))

        assert fragments == ["foo", "bar", "baz", "qux", "a", "b"]

    def test_trim(self) -> None:
        """Should trim leading and trailing symbols but keep inner ones."""
        assert list(iter_fragments("__init__")) == ["init"]
        assert list(iter_fragments("--verbose")) == ["verbose"]
        assert list(iter_fragments("snake_case")) == ["snake_case"]

    def test_only_symbols(self) -> None:
        """Fragments made of trim characters vanish."""
        assert list(iter_fragments("=>")) == []
        assert list(iter_fragments("---")) == []


class TestIsToken:
    """Test token filter."""

    def test_min_length(self) -> None:
        """Fragments shorter than the minimum are rejected."""
        assert not is_token("a", 2)
        assert is_token("ab", 2)
        assert not is_token("abc", 4)

    def test_numeric(self) -> None:
        """All-digit fragments are rejected, mixed ones kept."""
        assert not is_token("2024", 2)
        assert is_token("v2", 2)
        assert is_token("0x1f", 2)


class TestTokenizeWords:
    """Test per-chunk counting."""

    def test_counts(self) -> None:
        """Should count repeated tokens."""
        counts = tokenize_words(["cat", "dog", "cat"], 2)

        assert counts == {"cat": 2, "dog": 1}

    def test_case_preserved(self) -> None:
        """Case variants are distinct tokens."""
        counts = tokenize_words(["Foo", "foo", "FOO"], 2)

        assert counts == {"Foo": 1, "foo": 1, "FOO": 1}

    def test_filters(self) -> None:
        """Short and numeric fragments are dropped."""
        counts = tokenize_words(["x", "42", "x=42;", "ok"], 2)

        assert counts == {"ok": 1}


class TestTokenizer:
    """Test Tokenizer over whole documents."""

    def test_small_document(self) -> None:
        """Should tokenize a short text inline."""
        with Tokenizer(min_token_length=2, workers=4) as tokenizer:
            tokens = tokenizer.tokenize("fn main() { println!(\"hi\"); }")

        assert tokens == {"fn": 1, "main": 1, "println": 1, "hi": 1}

    def test_empty_document(self) -> None:
        """Empty content gives an empty map."""
        with Tokenizer() as tokenizer:
            assert tokenizer.tokenize("") == {}

    def test_chunked_counts_exact(self) -> None:
        """Counts merged from parallel chunks equal the sequential count."""
        words = [f"tok{i % 37}" for i in range(5000)] + ["shared"] * 1234
        content = " ".join(words)

        with Tokenizer(min_token_length=2, workers=8) as tokenizer:
            tokens = tokenizer.tokenize(content)

        assert tokens == dict(tokenize_words(words, 2))
        assert tokens["shared"] == 1234
        assert sum(tokens.values()) == len(words)

    @pytest.mark.parametrize("min_length", [1, 2, 3, 5])
    def test_filter_holds_for_any_minimum(self, min_length: int) -> None:
        """No emitted token is short or all digits."""
        content = "a ab abc abcd abcde 1 12 123 12345 x1 __ab__ (abc)" * 50

        with Tokenizer(min_token_length=min_length, workers=3) as tokenizer:
            tokens = tokenizer.tokenize(content)

        assert tokens
        assert all(len(t) >= min_length and not t.isdigit() for t in tokens)
