"""Document indexing pipeline."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ferret.config import MAX_FILE_SIZE, MIN_TOKEN_LENGTH, AppConfig, ConfigError
from ferret.index.tfidf import aggregate
from ferret.models import Document, Index
from ferret.utils.files import discover_files, read_text
from ferret.utils.text import Tokenizer

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    """Counters of the last run.

    ``files`` counts eligible files as discovered, before files reached from
    overlapping roots are merged into one document.
    """

    files: int = 0
    documents: int = 0
    empty: int = 0
    unreadable: int = 0


class Indexer:
    """Coordinates file discovery, tokenization and TF-IDF aggregation."""

    def __init__(
        self,
        *,
        min_token_length: int = MIN_TOKEN_LENGTH,
        max_file_size_mb: int = MAX_FILE_SIZE,
        workers: int | None = None,
    ) -> None:
        self.min_token_length = min_token_length
        self.max_file_size_mb = max_file_size_mb
        self.workers = workers
        self.stats = IndexStats()

    @classmethod
    def from_config(cls, config: AppConfig) -> "Indexer":
        return cls(
            min_token_length=config.min_token_length,
            max_file_size_mb=config.max_file_size_mb,
            workers=config.workers,
        )

    @property
    def max_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def collect(self, directories: Sequence[Path]) -> list[Path]:
        """Eligible files under ``directories``, deduplicated and sorted for stable ids."""
        discovered = discover_files(directories, self.max_size_bytes, workers=self.workers)
        self.stats.files = len(discovered)
        paths = sorted(set(discovered))
        LOGGER.debug("Collected %d eligible files", len(paths))
        return paths

    def index(self, directories: Sequence[Path]) -> Index:
        """Index every eligible file found under the given directories."""
        if not directories:
            raise ConfigError("At least one directory is required")

        self.stats = IndexStats()
        paths = self.collect(directories)
        if not paths:
            LOGGER.warning("No eligible files found")
            return Index.empty()

        LOGGER.info("Tokenizing %d files", len(paths))
        with Tokenizer(self.min_token_length, self.workers) as tokenizer, ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="ferret-index"
        ) as pool:

            def build(item: tuple[int, Path]) -> tuple[Document, bool]:
                doc_id, path = item
                content = read_text(path)
                tokens = tokenizer.tokenize(content or "")
                LOGGER.debug("Tokenized %s: %d distinct tokens", path, len(tokens))
                return Document(id=doc_id, name=path.name, path=path, tokens=tokens), content is None

            results = list(pool.map(build, enumerate(paths)))
            documents = [document for document, _ in results]

            LOGGER.info("Scoring %d documents", len(documents))
            scores, vocabulary = aggregate(documents, pool)

        self.stats.documents = len(documents)
        self.stats.empty = sum(1 for document in documents if not document.tokens)
        self.stats.unreadable = sum(1 for _, unreadable in results if unreadable)
        return Index(documents=documents, scores=scores, vocabulary=vocabulary)
