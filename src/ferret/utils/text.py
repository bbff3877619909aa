"""Text helpers: punctuation based tokenization split into parallel chunks."""

from __future__ import annotations

import math
import os
import re
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

MIN_TOKEN_LENGTH = 2
MIN_CHUNK_WORDS = 100

SEPARATORS = "()[]{}<>,.;:!?\"'`/\\|=\t\r\n\x0b\x0c\xa0"
TRIM_CHARS = "_-+*&^%$#@~"

_SEPARATOR_RE = re.compile("[" + re.escape(SEPARATORS) + "]+")


def split_words(text: str) -> List[str]:
    """Whitespace split, the cheap first pass before punctuation splitting."""
    return text.split()


def chunk_words(
    words: List[str], workers: int, *, min_chunk: int = MIN_CHUNK_WORDS
) -> List[List[str]]:
    """Partition words into contiguous chunks, one per worker.

    Chunks never get smaller than ``min_chunk`` words, so short inputs end up
    in a single chunk.
    """
    if not words:
        return []
    size = max(math.ceil(len(words) / max(workers, 1)), min_chunk, 1)
    return [words[start : start + size] for start in range(0, len(words), size)]


def is_token(fragment: str, min_token_length: int) -> bool:
    return len(fragment) >= min_token_length and not fragment.isdigit()


def iter_fragments(word: str) -> Iterable[str]:
    for part in _SEPARATOR_RE.split(word):
        fragment = part.strip(TRIM_CHARS)
        if fragment:
            yield fragment


def tokenize_words(words: Iterable[str], min_token_length: int) -> Counter:
    """Count the tokens of a chunk of words."""
    counts: Counter = Counter()
    for word in words:
        counts.update(
            fragment for fragment in iter_fragments(word) if is_token(fragment, min_token_length)
        )
    return counts


class Tokenizer:
    """Split documents into token counts, fanning large documents out in chunks.

    Every chunk is counted into its own map and the maps are summed once all
    chunks are done, so no count is shared between threads.
    """

    def __init__(self, min_token_length: int = MIN_TOKEN_LENGTH, workers: int | None = None) -> None:
        self.min_token_length = min_token_length
        self.workers = workers or os.cpu_count() or 1
        # Chunk work only; callers must not run documents on this pool.
        self._pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="ferret-tokenize")

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._pool.shutdown(wait=True)

    def tokenize(self, content: str) -> dict[str, int]:
        chunks = chunk_words(split_words(content), self.workers)
        if len(chunks) <= 1:
            return dict(tokenize_words(chunks[0] if chunks else [], self.min_token_length))

        totals: Counter = Counter()
        partials = self._pool.map(tokenize_words, chunks, [self.min_token_length] * len(chunks))
        for partial in partials:
            totals.update(partial)
        return dict(totals)
